import random

import pytest

from .codec		import encode, decode, MalformedRLP, int_to_big_endian, big_endian_to_int

LOREM				= b"Lorem ipsum dolor sit amet, consectetur adipisicing elit"


@pytest.mark.parametrize( "item,encoded", [
    ( b"",			"80" ),
    ( b"\x00",			"00" ),
    ( b"\x0f",			"0f" ),
    ( b"\x7f",			"7f" ),
    ( b"\x80",			"8180" ),
    ( b"\x04\x00",		"820400" ),
    ( b"dog",			"83646f67" ),
    ( [],			"c0" ),
    ( [ b"cat", b"dog" ],	"c88363617483646f67" ),
    ( [ [], [[]], [ [], [[]] ] ], "c7c0c1c0c3c0c1c0" ),
    ( LOREM,			"b838" + LOREM.hex() ),
    ( b"a" * 1024,		"b90400" + "61" * 1024 ),
    ( [ b"a" * 60 ],		"f83e" + "b83c" + "61" * 60 ),
])
def test_rlp_vectors( item, encoded ):
    assert encode( item ).hex() == encoded
    assert decode( encoded ) == item
    assert decode( '0x' + encoded ) == item
    assert decode( bytes.fromhex( encoded )) == item


def test_rlp_tuples_and_bytearrays():
    assert encode( ( b"cat", bytearray( b"dog" ))) == encode([ b"cat", b"dog" ])
    with pytest.raises( TypeError ):
        encode( "dog" )
    with pytest.raises( TypeError ):
        encode([ 1 ])


def random_item( rnd, depth ):
    """A random byte-string, or (while depth remains) a random list of items."""
    if depth <= 0 or rnd.random() < .4:
        return bytes( rnd.getrandbits( 8 ) for _ in range( rnd.choice([ 0, 1, 1, 2, 20, 55, 56, 300 ])))
    return [ random_item( rnd, depth - 1 ) for _ in range( rnd.randint( 0, 4 )) ]


def test_rlp_roundtrip():
    """Nested items up to depth 5 round-trip; decoded lists are always mutable lists, never tuples"""
    rnd				= random.Random( 5 )
    for _ in range( 200 ):
        item			= random_item( rnd, 5 )
        encoded			= encode( item )
        assert decode( encoded ) == item
        assert encode( tuple( item ) if isinstance( item, list ) else item ) == encoded
        assert encode( decode( encoded )) == encoded


@pytest.mark.parametrize( "malformed", [
    "",				# empty
    "0x",			# empty
    "zz",			# not hex
    "8",			# odd length hex
    "83646f",			# truncated string
    "c88363617483646f",		# truncated list
    "c2836162",			# list item overruns list
    "8105",			# single byte < 0x80 w/ a string header
    "b80568656c6c6f",		# long form for a short string
    "b9003861",			# length w/ leading zero
    "b9",			# missing length
    "f801c0",			# long form for a short list
    "8080",			# trailing bytes
    "c0c0",			# trailing list
])
def test_rlp_malformed( malformed ):
    with pytest.raises( MalformedRLP ):
        decode( malformed )


def test_rlp_integers():
    assert int_to_big_endian( 0 ) == b""
    assert int_to_big_endian( 1 ) == b"\x01"
    assert int_to_big_endian( 256 ) == b"\x01\x00"
    assert int_to_big_endian( 20 * 10**9 ).hex() == "04a817c800"
    assert big_endian_to_int( b"" ) == 0
    assert big_endian_to_int( b"\x01\x00" ) == 256
    with pytest.raises( ValueError ):
        int_to_big_endian( -1 )
    with pytest.raises( ValueError ):
        int_to_big_endian( "1" )


def test_rlp_decoded_lists():
    fields			= decode( "c88363617483646f67" )
    assert isinstance( fields, list )
    del fields[1:]
    fields		       += [ b"\x01" ]
    assert encode( fields ).hex() == "c58363617401"
    assert isinstance( decode( "c7c0c1c0c3c0c1c0" )[2][1], list )
