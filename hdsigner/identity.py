
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
import threading

from typing		import Callable, Optional, Sequence, Tuple, Union

from .bip39		import Mnemonic
from .defaults		import STORE_KEY_MNEMONIC, STORE_KEY_PERSISTED
from .derivation	import derive_identity_key, derive_wallet_key
from .signer		import Signer
from .transaction	import sign_transaction
from .util		import fatal, commas

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )


class IdentityAlreadySet( RuntimeError ):
    """A Keyring's identity may be established only once"""


def one_of( **kwds ):
    """Return the (name,value) of the single supplied non-None keyword, or raise a TypeError"""
    supplied			= [ (k,v) for k,v in kwds.items() if v is not None ]
    if len( supplied ) != 1:
        raise TypeError( f"Supply exactly one of {commas( kwds, final='or' )}" )
    return supplied[0]


class Identity:
    """A BIP-39 Mnemonic, and the two keys derived from it: the identity key (m/0'/1/0), which signs
    application authentication requests, and the wallet key (m/44'/60'/0'/0/0), the first standard
    Ethereum account.

    Both keys are derived once, when the Identity is created; they are never re-derived.

    """
    def __init__( self, mnemonic: Mnemonic ):
        self.mnemonic		= mnemonic
        seed			= mnemonic.seed
        self.id_signer		= Signer( derive_identity_key( seed ))
        self.wallet_signer	= Signer( derive_wallet_key( seed ))

    def __repr__( self ):
        return f"{self.__class__.__name__}(id: {self.address}, wallet: {self.payment_address})"

    @classmethod
    def from_mnemonic( cls, mnemonic: Mnemonic ) -> Identity:
        return cls( mnemonic )

    @classmethod
    def from_words( cls, words: Union[str,Sequence[str]] ) -> Identity:
        return cls( Mnemonic.from_words( words ))

    @classmethod
    def from_entropy( cls, entropy: bytes ) -> Identity:
        return cls( Mnemonic.from_entropy( entropy ))

    @classmethod
    def generate( cls ) -> Identity:
        return cls( Mnemonic.generate() )

    @property
    def words( self ) -> Tuple[str, ...]:
        return self.mnemonic.words

    @property
    def address( self ) -> str:
        """The identity address"""
        return self.id_signer.address

    @property
    def payment_address( self ) -> str:
        """The wallet address"""
        return self.wallet_signer.address

    def payment_uri( self ) -> str:
        """An EIP-681 URI for the wallet address, eg. for presenting as a QR code"""
        return f"ethereum:{self.payment_address}"

    #
    # Sign with the identity key
    #
    def sign_with_id( self, message: Optional[str] = None, hex: Optional[str] = None ) -> str:
        how, what		= one_of( message=message, hex=hex )
        if how == 'message':
            return self.id_signer.sign_message( what )
        return self.id_signer.sign_hex( what )

    def sha3_with_id( self, data: Union[str,bytes] ) -> str:
        return self.id_signer.sha3( data )

    #
    # Sign with the wallet key
    #
    def sign_with_wallet(
        self,
        message: Optional[str]		= None,
        hex: Optional[str]		= None,
        hash: Optional[Union[str,bytes]] = None,
    ) -> str:
        how, what		= one_of( message=message, hex=hex, hash=hash )
        if how == 'message':
            return self.wallet_signer.sign_message( what )
        if how == 'hex':
            return self.wallet_signer.sign_hex( what )
        return self.wallet_signer.sign_hash( what )

    def sha3_with_wallet( self, data: Union[str,bytes] ) -> str:
        return self.wallet_signer.sha3( data )

    def sign_ethereum_transaction_with_wallet( self, hex: Union[str,bytes] ) -> Optional[str]:
        """Sign an unsigned raw Ethereum transaction with the wallet key; None if it cannot be signed."""
        return sign_transaction( self.wallet_signer, hex )


class Keyring:
    """Holds the single current Identity of a running process.

    Create one Keyring at startup and pass it to whatever needs to sign.  Its identity is either
    restored from a persistent store, or established once a new Identity is generated or imported;
    thereafter it never changes.  Reading the identity before it is set is a programming error, and
    aborts; check has_identity first.

    """
    def __init__( self ):
        self._identity		= None
        self._lock		= threading.Lock()

    @property
    def has_identity( self ) -> bool:
        return self._identity is not None

    @property
    def identity( self ) -> Identity:
        identity		= self._identity
        if identity is None:
            fatal( "Attempting to access the identity when it doesn't exist!" )
        return identity

    def _assign( self, identity: Identity ):
        with self._lock:
            if self._identity is not None:
                raise IdentityAlreadySet( f"Identity {self._identity.address} already established" )
            self._identity	= identity

    def restore( self, store ) -> Optional[Identity]:
        """Restore the identity from the Mnemonic in store, if any.  No persistence is requested.

        If the store records that a Mnemonic was once persisted, but it can no longer be retrieved,
        abort; continuing would silently replace the user's identity with a new one.

        """
        phrase			= store.retrieve( STORE_KEY_MNEMONIC )
        if phrase is None:
            if store.retrieve( STORE_KEY_PERSISTED ):
                fatal( "Could not retrieve the stored Mnemonic!" )
            log.info( f"No identity stored in {store!r}" )
            return None
        identity		= Identity.from_words( phrase )
        self._assign( identity )
        log.info( f"Restored identity {identity.address} from {store!r}" )
        return identity

    def establish( self, identity: Identity, persist: Optional[Callable[[str], None]] = None ) -> Identity:
        """Establish a newly generated or imported identity, and request persistence of its Mnemonic
        exactly once via persist( words ).  Persistence is fire-and-forget; a failure is logged, but
        the identity remains established.

        """
        self._assign( identity )
        log.info( f"Established identity {identity.address}" )
        if persist is not None:
            try:
                persist( identity.mnemonic.phrase )
            except Exception as exc:
                log.warning( f"Failed to persist the Mnemonic of identity {identity.address}: {exc}" )
        return identity

    @staticmethod
    def persist_to( store ) -> Callable[[str], None]:
        """A persist callback that saves the Mnemonic in store, and marks it as persisted."""
        def persist( phrase: str ):
            store.store( STORE_KEY_MNEMONIC, phrase )
            store.store( STORE_KEY_PERSISTED, "true" )
        return persist
