
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
from __future__		import annotations

import getpass
import logging
import string
import sys

from typing		import Union


__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( "util" )


log_cfg				= {
    "level":	logging.WARNING,
    "datefmt":	'%Y-%m-%d %H:%M:%S',
    "format":	'%(asctime)s %(name)-16.16s %(message)s',
}

log_levelmap 			= {
    -2: logging.FATAL,
    -1: logging.ERROR,
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def log_level( adjust ):
    """Return a logging level corresponding to the +'ve/-'ve adjustment"""
    return log_levelmap[
        max(
            min(
                adjust,
                max( log_levelmap.keys() )
            ),
            min( log_levelmap.keys() )
        )
    ]


def fatal( message: str ):
    """Log critically and abort the process; raises SystemExit, not an Exception."""
    log.critical( message )
    raise SystemExit( message )


def commas( seq, final=None ):  # supply alternative final connector, eg. 'and', 'or'
    """Join a sequence w/ commas, optionally with an alternative final connector."""
    seq				= list( seq )
    if final and len(seq) > 1:
        seq			= seq[:-2] + [f"{seq[-2]} {final} {seq[-1]}"]
    return ', '.join( map( str, seq ))


def strip_0x( data: str ) -> str:
    if data[:2].lower() == '0x':
        data		= data[2:]
    return data


def is_hex( data: str ) -> bool:
    return all( c in string.hexdigits for c in data )


def into_bytes( data: Union[bytes,bytearray,str] ) -> bytes:
    """Convert hex data w/ optional '0x' prefix into bytes.  Raises ValueError on odd-length or
    non-hex data.

    """
    if isinstance( data, (bytes,bytearray) ):
        return bytes( data )
    if not isinstance( data, str ):
        raise TypeError( f"Expected bytes or hex str, not {type( data ).__name__}" )
    data			= strip_0x( data.strip() )
    if len( data ) % 2 or not is_hex( data ):
        raise ValueError( f"Invalid hex data of length {len( data )}" )
    return bytes.fromhex( data )


def into_hex( data: bytes ) -> str:
    """Render bytes as '0x'-prefixed lowercase hex"""
    return '0x' + bytes( data ).hex()


def input_secure( prompt, secret=True, file=None ):
    """When getting secure (optionally secret) input from standard input, we don't want to use getpass, which
    attempts to read from /dev/tty.

    """
    if ( file or sys.stdin ).isatty():
        # From TTY; provide prompts, and do not echo secret input
        if secret:
            return getpass.getpass( prompt, stream=file )
        elif file:
            return file.readline()
        else:
            return input( prompt )
    else:
        # Not a TTY; don't litter pipeline output with prompts
        if file:
            return file.readline()
        return input()
