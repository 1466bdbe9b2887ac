
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

from typing		import Sequence, Tuple, Union

from shamir_mnemonic.shamir import RANDOM_BYTES  # noqa: F401; tests may substitute hdsigner.bip39.RANDOM_BYTES

from mnemonic		import Mnemonic as BIP39	# Requires passphrase as str
from .defaults		import ENTROPY_BYTES, ENTROPY_WORD_BITS, LANGUAGE
from .util		import fatal

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )


class InvalidMnemonic( ValueError ):
    """The words are not a valid BIP-39 Mnemonic (unknown words, bad length or bad checksum)"""


class InvalidEntropyLength( ValueError ):
    """The entropy is not a positive whole number of 32-bit words, supported by BIP-39"""


def normalize( words: Union[str,Sequence[str]] ) -> Tuple[str, ...]:
    """Polish up the supplied mnemonic words, which are often user input: split any str, and down-case
    each word, eliminating extra whitespace.

    """
    if isinstance( words, str ):
        words			= words.split()
    return tuple(
        w.strip().lower()
        for w in words
        if w and w.strip()
    )


def validate( words: Union[str,Sequence[str]] ) -> bool:
    """True iff words forms a valid English BIP-39 Mnemonic; correct length, known words and valid
    checksum.

    """
    phrase			= ' '.join( normalize( words ))
    try:
        return bool( phrase ) and BIP39( LANGUAGE ).check( phrase )
    except (ValueError, LookupError) as exc:
        # Older python-mnemonic versions raise on unrecognized words, instead of returning False
        log.debug( f"BIP-39 Mnemonic check failed: {exc}" )
        return False


class Mnemonic:
    """An immutable, validated English BIP-39 Mnemonic.  The words are deliberately omitted from the
    repr, to avoid leaking them into logs.

    """
    __slots__			= ( '_words', )

    def __init__( self, words: Union[str,Sequence[str]] ):
        words			= normalize( words )
        if not validate( words ):
            raise InvalidMnemonic( f"Invalid {len( words )}-word BIP-39 Mnemonic" )
        self._words		= words

    @classmethod
    def from_words( cls, words: Union[str,Sequence[str]] ) -> Mnemonic:
        return cls( words )

    @classmethod
    def from_entropy( cls, entropy: bytes ) -> Mnemonic:
        """Encode the entropy as a BIP-39 Mnemonic.

        The entropy length is checked here, before python-mnemonic ever sees it; the entropy must be
        a positive multiple of 32 bits.  Multiples of 32 bits outside of the 128- to 256-bit range
        supported by BIP-39 are reported the same way.

        """
        bits			= len( entropy ) * 8
        if bits <= 0 or bits % ENTROPY_WORD_BITS:
            raise InvalidEntropyLength( f"Entropy must be a positive multiple of {ENTROPY_WORD_BITS} bits, not {bits} bits" )
        try:
            phrase		= BIP39( LANGUAGE ).to_mnemonic( bytes( entropy ))
        except ValueError as exc:
            raise InvalidEntropyLength( f"Unsupported {bits}-bit BIP-39 entropy: {exc}" ) from exc
        log.info( f"Produced {len( phrase.split() )}-word BIP-39 Mnemonic from {bits}-bit entropy" )
        return cls( phrase )

    @classmethod
    def generate( cls ) -> Mnemonic:
        """Generate a new 128-bit (12-word) Mnemonic from the secure random source.  Any failure of the
        OS entropy source is fatal; no key material may ever be derived from a partial or
        non-random source.

        """
        try:
            entropy		= RANDOM_BYTES( ENTROPY_BYTES )
        except OSError as exc:
            fatal( f"Failed to obtain {ENTROPY_BYTES} bytes of entropy from the secure random source: {exc}" )
        if not isinstance( entropy, (bytes,bytearray) ) or len( entropy ) != ENTROPY_BYTES:
            fatal( f"Secure random source failed to produce {ENTROPY_BYTES} bytes of entropy" )
        return cls.from_entropy( entropy )

    @property
    def words( self ) -> Tuple[str, ...]:
        return self._words

    @property
    def phrase( self ) -> str:
        """The words joined by single spaces, the form in which a Mnemonic is persisted"""
        return ' '.join( self._words )

    @property
    def entropy( self ) -> bytes:
        return bytes( BIP39( LANGUAGE ).to_entropy( self.phrase ))

    @property
    def seed( self ) -> bytes:
        """The 512-bit BIP-39 seed (empty passphrase)"""
        return bytes( BIP39.to_seed( self.phrase, passphrase="" ))

    def __len__( self ):
        return len( self._words )

    def __eq__( self, other ):
        if not isinstance( other, Mnemonic ):
            return NotImplemented
        return self._words == other._words

    def __hash__( self ):
        return hash( self._words )

    def __repr__( self ):
        return f"{self.__class__.__name__}({len( self._words )} words)"
