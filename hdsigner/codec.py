
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
"""
Recursive Length Prefix (RLP) encoding, Ethereum's canonical serialization of nested byte-strings.

    https://ethereum.org/en/developers/docs/data-structures-and-encoding/rlp/

An item is either a byte string, or a list of items.  No interpretation of the content is made;
integers must be converted to/from minimal big-endian byte strings by the caller.  The encoding
itself is pyrlp's; here we restrict the accepted types, accept hex input, and report any decoding
failure as a MalformedRLP.

"""
from __future__		import annotations

import logging

from typing		import List, Union

import rlp

from eth_utils		import big_endian_to_int  # noqa: F401; re-exported for transaction fields
from rlp.exceptions	import DecodingError, DeserializationError, SerializationError
from rlp.sedes		import big_endian_int

from .util		import into_bytes

log				= logging.getLogger( __package__ )

Item				= Union[bytes, List["Item"]]


class MalformedRLP( ValueError ):
    """The data is not a single, canonically encoded RLP item"""


def int_to_big_endian( value: int ) -> bytes:
    """The minimal big-endian encoding of an unsigned integer; 0 is the empty string."""
    try:
        return big_endian_int.serialize( value )
    except SerializationError as exc:
        raise ValueError( f"Cannot RLP encode integer {value!r}: {exc}" ) from exc


def items( item ) -> Item:
    """Validate an item for encoding; only byte strings and (nested) lists/tuples of them.  Any
    bytearray becomes bytes, and any tuple a list.

    """
    if isinstance( item, (bytes,bytearray) ):
        return bytes( item )
    if isinstance( item, (list,tuple) ):
        return [ items( i ) for i in item ]
    raise TypeError( f"Cannot RLP encode {type( item ).__name__}; only bytes and lists are supported" )


def encode( item: Item ) -> bytes:
    """RLP encode a byte string, or an arbitrarily nested list/tuple of them."""
    return rlp.encode( items( item ))


def decode( data: Union[str,bytes] ) -> Item:
    """Decode a single RLP item from hex (w/ optional '0x') or bytes.  Raises MalformedRLP if the
    data is empty, truncated, non-canonical or has trailing bytes.

    """
    try:
        data			= into_bytes( data )
    except ValueError as exc:
        raise MalformedRLP( f"Invalid RLP hex data: {exc}" ) from exc
    if not data:
        raise MalformedRLP( "Cannot decode empty RLP data" )
    try:
        item			= rlp.decode( data, strict=True )
    except (DecodingError, DeserializationError) as exc:
        raise MalformedRLP( f"Invalid {len( data )}-byte RLP data: {exc}" ) from exc
    return items( item )
