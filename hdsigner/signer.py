
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

import logging

from typing		import Union

from eth_keys		import keys
from eth_utils		import keccak

from .util		import into_bytes, into_hex

log				= logging.getLogger( __package__ )

PERSONAL_MESSAGE_PREFIX		= b"\x19Ethereum Signed Message:\n"


def sha3( data: Union[str,bytes] ) -> str:
    """Keccak-256 digest of the data (str is hashed as its UTF-8 encoding), as '0x...' hex."""
    if isinstance( data, str ):
        data			= data.encode( 'UTF-8' )
    return into_hex( keccak( primitive=bytes( data )))


def personal_message_hash( message: Union[str,bytes] ) -> bytes:
    """The EIP-191 "personal message" hash; the message is prefixed with its decimal length."""
    if isinstance( message, str ):
        message			= message.encode( 'UTF-8' )
    return keccak(
        primitive	= PERSONAL_MESSAGE_PREFIX + str( len( message )).encode( 'ascii' ) + bytes( message )
    )


def recover_hash( hash: Union[str,bytes], signature: Union[str,bytes] ) -> str:
    """Recover the checksummed address that produced the 65-byte r,s,v (v in 0/1) signature of hash."""
    sig				= keys.Signature( signature_bytes=into_bytes( signature ))
    return sig.recover_public_key_from_msg_hash( into_bytes( hash )).to_checksum_address()


class Signer:
    """Signs with a single secp256k1 private key.

    All signatures are deterministic (RFC 6979), and are returned as '0x' + 130 hex digits encoding
    r (32 bytes), s (32 bytes) and the recovery value v (1 byte; 0 or 1).  The private key is never
    logged or included in the repr.

    """
    def __init__( self, private_key: Union[str,bytes] ):
        key			= into_bytes( private_key )
        if len( key ) != 32:
            raise ValueError( f"A secp256k1 private key must be 32 bytes, not {len( key )}" )
        self._key		= keys.PrivateKey( key )
        self._address		= self._key.public_key.to_checksum_address()

    def __repr__( self ):
        return f"{self.__class__.__name__}({self._address})"

    @property
    def address( self ) -> str:
        """The EIP-55 checksummed '0x...' address"""
        return self._address

    @property
    def public_key( self ) -> str:
        """The uncompressed public key X,Y coordinates, as '0x...' hex"""
        return into_hex( self._key.public_key.to_bytes() )

    def sign_hash( self, hash: Union[str,bytes] ) -> str:
        """Sign an already computed 32-byte hash, without re-hashing."""
        msg_hash		= into_bytes( hash )
        if len( msg_hash ) != 32:
            raise ValueError( f"Can only sign a 32-byte hash, not {len( msg_hash )} bytes" )
        return into_hex( self._key.sign_msg_hash( msg_hash ).to_bytes() )

    def sign_hex( self, payload: Union[str,bytes] ) -> str:
        """Sign the Keccak-256 hash of the hex-encoded payload."""
        return self.sign_hash( keccak( primitive=into_bytes( payload )))

    def sign_message( self, message: str ) -> str:
        """Sign a UTF-8 message under the Ethereum personal message convention."""
        return self.sign_hash( personal_message_hash( message ))

    def sha3( self, data: Union[str,bytes] ) -> str:
        return sha3( data )
