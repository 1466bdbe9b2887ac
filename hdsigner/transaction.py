
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

from typing		import List, Optional, Tuple, Union

from .codec		import encode, decode, MalformedRLP, int_to_big_endian, big_endian_to_int
from .defaults		import TX_FIELDS_LEGACY, TX_FIELDS_EIP155, TX_V_LEGACY, TX_V_EIP155, SIGNATURE_HEX_CHARS
from .signer		import Signer
from .util		import into_hex, strip_0x, is_hex

log				= logging.getLogger( __package__ )


class TransactionError( ValueError ):
    """The transaction cannot be signed"""


class MalformedTransaction( TransactionError ):
    """The RLP data is not a list of byte-string fields"""


class UnexpectedFieldCount( TransactionError ):
    """A raw transaction must have 6 (legacy) or 9 (EIP-155) fields"""


class AlreadySigned( TransactionError ):
    """The r, s signature fields of a 9-field transaction are not empty placeholders"""


class SignatureParseFailure( TransactionError ):
    """The signature is not 130 hex digits of r, s and v"""


def transaction_fields( unsigned: Union[str,bytes] ) -> Tuple[List[bytes], Optional[int]]:
    """Decode and validate an unsigned raw transaction, returning its fields and chain ID.

    A 9-field EIP-155 transaction carries its chain ID followed by empty r, s placeholders; a chain
    ID of 0 means that it is really a legacy transaction, and the trailing 3 fields are dropped.

    """
    fields			= decode( unsigned )
    if not isinstance( fields, list ) or not all( isinstance( f, bytes ) for f in fields ):
        raise MalformedTransaction( "Raw transaction must be an RLP list of byte-string fields" )

    chain_id			= None
    if len( fields ) == TX_FIELDS_EIP155:
        if fields[7] or fields[8]:
            raise AlreadySigned( "Transaction signature fields are not empty; it is already signed" )
        chain_id		= big_endian_to_int( fields[6] )
        if chain_id == 0:
            chain_id		= None
            del fields[TX_FIELDS_LEGACY:]
    elif len( fields ) != TX_FIELDS_LEGACY:
        raise UnexpectedFieldCount(
            f"Raw transaction must have {TX_FIELDS_LEGACY} or {TX_FIELDS_EIP155} fields, not {len( fields )}" )
    return fields, chain_id


def signature_parts( signature: str ) -> Tuple[bytes, bytes, int]:
    """Split a '0x...' r,s,v signature into r, s bytes and integer v."""
    digits			= strip_0x( signature )
    if len( digits ) != SIGNATURE_HEX_CHARS or not is_hex( digits ):
        raise SignatureParseFailure( f"Signature must be {SIGNATURE_HEX_CHARS} hex digits, not {len( digits )}" )
    r				= bytes.fromhex( digits[  0: 64] )
    s				= bytes.fromhex( digits[ 64:128] )
    v				= big_endian_to_int( bytes.fromhex( digits[128:130] ))
    return r, s, v


def signed_transaction( signer: Signer, unsigned: Union[str,bytes] ) -> str:
    """Sign an unsigned legacy or EIP-155 raw transaction, returning the signed raw transaction as
    '0x...' hex.  Raises a TransactionError (or MalformedRLP) describing any failure.

    The signature covers the RLP encoding of the (possibly trimmed) unsigned fields; for EIP-155
    this includes the chain ID and empty placeholders.  The final v is offset by 27 (legacy), or by
    35 + 2 x chain ID (EIP-155).

    """
    fields, chain_id		= transaction_fields( unsigned )
    signature			= signer.sign_hex( encode( fields ).hex() )
    r, s, v			= signature_parts( signature )

    # Already trimmed if chain ID was 0
    if len( fields ) == TX_FIELDS_EIP155:
        del fields[TX_FIELDS_LEGACY:]
    if chain_id is not None:
        v		       += TX_V_EIP155 + chain_id * 2
    else:
        v		       += TX_V_LEGACY
    fields		       += [ int_to_big_endian( v ), r, s ]

    log.info( f"Signed {'EIP-155 chain ' + str( chain_id ) if chain_id is not None else 'legacy'} transaction w/ {signer.address}" )
    return into_hex( encode( fields ))


def sign_transaction( signer: Signer, unsigned: Union[str,bytes] ) -> Optional[str]:
    """Sign the unsigned raw transaction, or return None if it cannot be signed, for any reason.
    The specific cause is logged; callers take the same action regardless of cause.

    """
    try:
        return signed_transaction( signer, unsigned )
    except (TransactionError, MalformedRLP, TypeError) as exc:
        log.warning( f"Could not sign transaction: {exc}" )
        return None
