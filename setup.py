import os

from setuptools import setup

#
# All platforms
#
HERE				= os.path.dirname( os.path.abspath( __file__ ))


def requirements( name ):
    # Remove whitespace, elide blank lines and comments
    return list(
        ''.join( r.split() )
        for r in open( os.path.join( HERE, name )).readlines()
        if r.strip() and not r.strip().startswith( '#' )
    )


install_requires		= requirements( "requirements.txt" )
tests_require			= requirements( "requirements-tests.txt" )

# Since setuptools is retiring tests_require, add it as an option
extras_require			= {
    'tests':			tests_require,
}

# Must work if setup.py is run in the source distribution context, or from
# within the packaged distribution directory.
__version__			= None
try:
    exec( open( os.path.join( HERE, 'hdsigner', 'version.py' ), 'r' ).read() )
except FileNotFoundError:
    exec( open( os.path.join( HERE, 'version.py' ), 'r' ).read() )

console_scripts			= [
    'hdsigner		= hdsigner.cli:cli',
]

entry_points			= {
    'console_scripts': 		console_scripts,
}

package_dir			= {
    "hdsigner":			"./hdsigner",
    "hdsigner.cli":		"./hdsigner/cli",
}

long_description_content_type	= 'text/markdown'
long_description		= """\
A BIP-39 Mnemonic yields two Ethereum keys: an identity key (at
derivation path *m/0'/1/0*), used to sign application authentication
requests, and a wallet key (at the standard *m/44'/60'/0'/0/0*), used
to receive payments and sign raw legacy and EIP-155 Ethereum
transactions.

The `hdsigner' package generates or imports the Mnemonic, persists it
once in a secret store, and restores the same identity on later runs.

    $ hdsigner create
    $ hdsigner addresses
    $ hdsigner sign --message "Sign in"
    $ hdsigner sign-transaction 0xec09...8080
"""

classifiers			= [
    "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
    "License :: Other/Proprietary License",
    "Programming Language :: Python :: 3",
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Topic :: Security :: Cryptography",
]

setup(
    name			= "hdsigner",
    version			= __version__,
    install_requires		= install_requires,
    tests_require		= tests_require,
    extras_require		= extras_require,
    packages			= list( package_dir.keys() ),
    package_dir			= package_dir,
    include_package_data	= True,
    zip_safe			= True,
    entry_points		= entry_points,
    author			= "Perry Kundert",
    author_email		= "perry@dominionrnd.com",
    description			= "Ethereum HD identity and wallet keys from a BIP-39 Mnemonic, w/ message and transaction signing",
    long_description		= long_description,
    long_description_content_type = long_description_content_type,
    license			= "Dual License; GPLv3 and Proprietary",
    keywords			= "Ethereum BIP-39 BIP-32 HD wallet identity signing EIP-155 RLP",
    classifiers			= classifiers,
    python_requires		= ">=3.9",
)
