
#
# Python-hdsigner -- Ethereum HD Identity and Wallet Signing
#
# Copyright (c) 2022, Dominion Research & Development Corp.
#
# Python-hdsigner is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.  It is also available under alternative (eg. Commercial) licenses, at
# your option.  See the LICENSE file at the top of the source tree.
#
# Python-hdsigner is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
#

from __future__          import annotations

import click
import json
import logging

from typing		import Optional

from ..bip39		import InvalidMnemonic, InvalidEntropyLength
from ..identity		import Identity, Keyring
from ..signer		import sha3 as keccak_hex
from ..store		import FileStore
from ..util		import log_cfg, log_level, input_secure, into_bytes

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
Provide basic CLI access to the hdsigner API.

Output generally defaults to JSON.  Use -v for more details, and --no-json to emit standard text output instead.
"""

log				= logging.getLogger( __package__ )


@click.group()
@click.option('-v', '--verbose', count=True)
@click.option('-q', '--quiet', count=True)
@click.option( '--json/--no-json', default=True, help="Output JSON (the default)")
@click.option( '--store', default=None, help="The secret store file (default: $HDSIGNER_STORE, or ~/.hdsigner/store.json)" )
def cli( verbose, quiet, json, store ):
    cli.verbosity		= verbose - quiet
    log_cfg['level']		= log_level( cli.verbosity )
    logging.basicConfig( **log_cfg )
    if verbose or quiet:
        logging.getLogger().setLevel( log_cfg['level'] )
    cli.json			= json
    cli.store			= FileStore( store )
cli.verbosity			= 0  # noqa: E305
cli.json			= False
cli.store			= None


def emit( **values ):
    """Output the values as a JSON object, or as "<name>: <value>" lines"""
    if cli.json:
        click.echo( json.dumps( values, indent=4 ))
        return
    for name,value in values.items():
        if cli.verbosity > 0:
            click.echo( f"{name:16} {value}" )
        else:
            click.echo( f"{value}" )


def restore_identity( keyring ) -> Optional[Identity]:
    """Restore the stored identity (if any) into keyring.  An invalid stored Mnemonic, or an unreadable
    store, is reported as an error.

    """
    try:
        return keyring.restore( cli.store )
    except ValueError as exc:  # eg. InvalidMnemonic, or invalid JSON
        raise click.ClickException( f"Secret store {cli.store.path} is unusable: {exc}" )


def current_identity( mnemonic ) -> Identity:
    """The identity of the supplied Mnemonic ('-' reads it from stdin), or else the stored identity."""
    if mnemonic:
        if mnemonic == '-':
            mnemonic		= input_secure( 'BIP-39 Mnemonic: ', secret=True )
        else:
            log.warning( "It is recommended to not use '--mnemonic <words>'; specify '-' to read from input" )
        try:
            return Identity.from_words( mnemonic )
        except InvalidMnemonic as exc:
            raise click.ClickException( f"{exc}" )
    keyring			= Keyring()
    restore_identity( keyring )
    if not keyring.has_identity:
        raise click.ClickException( f"No identity in {cli.store.path}; run: hdsigner create" )
    return keyring.identity


@click.command()
@click.option( "--mnemonic", help="Import this BIP-39 Mnemonic; '-' reads it from stdin (default: generate a new one)" )
@click.option( "--entropy", help="Import this 128- to 256-bit hex entropy; '-' reads it from stdin" )
@click.option( '--words/--no-words', default=False, help="Output the Mnemonic words, for backup" )
def create( mnemonic, entropy, words ):
    """Create a new identity, and persist its Mnemonic in the secret store."""
    keyring			= Keyring()
    if restore_identity( keyring ):
        raise click.ClickException( f"An identity already exists in {cli.store.path}" )
    try:
        if mnemonic:
            identity		= current_identity( mnemonic )
        elif entropy:
            if entropy == '-':
                entropy		= input_secure( 'Entropy hex: ', secret=True )
            identity		= Identity.from_entropy( into_bytes( entropy ))
        else:
            identity		= Identity.generate()
    except (InvalidEntropyLength, ValueError) as exc:
        raise click.ClickException( f"{exc}" )
    keyring.establish( identity, persist=Keyring.persist_to( cli.store ))

    values			= dict(
        address		= identity.address,
        payment_address	= identity.payment_address,
    )
    if words:
        values['mnemonic']	= identity.mnemonic.phrase
    emit( **values )


@click.command()
@click.option( "--mnemonic", help="Use this BIP-39 Mnemonic; '-' reads it from stdin (default: the stored identity)" )
def addresses( mnemonic ):
    """Output the identity and wallet addresses."""
    identity			= current_identity( mnemonic )
    emit(
        address		= identity.address,
        payment_address	= identity.payment_address,
    )


@click.command()
@click.option( "--mnemonic", help="Use this BIP-39 Mnemonic; '-' reads it from stdin (default: the stored identity)" )
@click.option( "--key", type=click.Choice([ 'id', 'wallet' ]), default='id', help="Sign with the identity or wallet key (default: id)" )
@click.option( "--message", help="Sign this UTF-8 message (Ethereum personal message)" )
@click.option( "--hex", "payload", help="Sign the Keccak-256 hash of this hex data" )
@click.option( "--hash", "digest", help="Sign this 32-byte hex hash" )
def sign( mnemonic, key, message, payload, digest ):
    """Sign a message, hex data or hash."""
    identity			= current_identity( mnemonic )
    try:
        if key == 'id':
            if digest is not None:
                raise click.ClickException( "Only the wallet key may sign a raw --hash" )
            signature		= identity.sign_with_id( message=message, hex=payload )
        else:
            signature		= identity.sign_with_wallet( message=message, hex=payload, hash=digest )
    except (TypeError, ValueError) as exc:
        raise click.ClickException( f"{exc}" )
    emit( signature=signature )


@click.command( "sign-transaction" )
@click.option( "--mnemonic", help="Use this BIP-39 Mnemonic; '-' reads it from stdin (default: the stored identity)" )
@click.argument( "transaction" )
def sign_transaction( mnemonic, transaction ):
    """Sign an unsigned raw Ethereum transaction with the wallet key."""
    identity			= current_identity( mnemonic )
    signed			= identity.sign_ethereum_transaction_with_wallet( transaction )
    if signed is None:
        raise click.ClickException( "Could not sign transaction" )
    emit( transaction=signed )


@click.command()
@click.option( "--hex", "is_hex", is_flag=True, default=False, help="The data is hex, not UTF-8 text" )
@click.argument( "data" )
def sha3( is_hex, data ):
    """Output the Keccak-256 digest of the data."""
    try:
        digest			= keccak_hex( into_bytes( data ) if is_hex else data )
    except ValueError as exc:
        raise click.ClickException( f"{exc}" )
    emit( sha3=digest )


cli.add_command( create )
cli.add_command( addresses )
cli.add_command( sign )
cli.add_command( sign_transaction )
cli.add_command( sha3 )
