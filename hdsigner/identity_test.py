import logging
import threading

import pytest

from eth_account	import Account

from .			import bip39
from .bip39		import InvalidEntropyLength, InvalidMnemonic
from .codec		import encode, int_to_big_endian
from .defaults		import STORE_KEY_MNEMONIC, STORE_KEY_PERSISTED
from .identity		import Identity, Keyring, IdentityAlreadySet, one_of
from .signer		import recover_hash, personal_message_hash

from .dependency_test	import (
    substitute, nonrandom_bytes, MemoryStore,
    BIP39_ABANDON, BIP39_ABANDON_WALLET, BIP39_BAD_CHECKSUM,
)


def test_identity_addresses():
    identity			= Identity.from_words( BIP39_ABANDON )
    assert identity.payment_address == BIP39_ABANDON_WALLET
    assert identity.address != identity.payment_address
    assert identity.address.startswith( '0x' ) and len( identity.address ) == 42
    assert identity.words == tuple( BIP39_ABANDON.split() )
    assert identity.payment_uri() == f"ethereum:{BIP39_ABANDON_WALLET}"
    assert "abandon" not in repr( identity )

    # Same derivations from the equivalent entropy
    assert Identity.from_entropy( b'\0' * 16 ).address == identity.address


def test_identity_no_rederivation():
    identity			= Identity.from_words( BIP39_ABANDON )
    signer			= identity.id_signer
    for _ in range( 3 ):
        assert identity.id_signer is signer
        assert identity.address == signer.address


def test_identity_invalid():
    with pytest.raises( InvalidEntropyLength ):
        Identity.from_entropy( b'\0' * 15 )
    with pytest.raises( InvalidMnemonic ):
        Identity.from_words( BIP39_BAD_CHECKSUM )


@substitute( bip39, 'RANDOM_BYTES', nonrandom_bytes )
def test_identity_generate():
    assert Identity.generate().payment_address == BIP39_ABANDON_WALLET


def test_identity_signing():
    identity			= Identity.from_words( BIP39_ABANDON )

    signature			= identity.sign_with_id( message="Sign in" )
    assert recover_hash( personal_message_hash( "Sign in" ), signature ) == identity.address

    signature			= identity.sign_with_wallet( message="Pay" )
    assert recover_hash( personal_message_hash( "Pay" ), signature ) == identity.payment_address

    digest			= identity.sha3_with_wallet( "payload" )
    assert digest == identity.sha3_with_id( "payload" )
    signature			= identity.sign_with_wallet( hash=digest )
    assert recover_hash( digest, signature ) == identity.payment_address
    assert identity.sign_with_wallet( hex="0x" + "payload".encode().hex() ) == signature

    assert identity.sign_with_id( hex="0x" + "payload".encode().hex() ) \
        != identity.sign_with_wallet( hex="0x" + "payload".encode().hex() )

    with pytest.raises( TypeError ):
        identity.sign_with_id()
    with pytest.raises( TypeError ):
        identity.sign_with_wallet( message="a", hash=digest )


def test_one_of():
    assert one_of( a=None, b=2 ) == ('b', 2)
    with pytest.raises( TypeError ):
        one_of( a=None, b=None )
    with pytest.raises( TypeError ):
        one_of( a=1, b=2 )


def test_identity_transaction():
    identity			= Identity.from_words( BIP39_ABANDON )
    unsigned			= '0x' + encode( [
        int_to_big_endian( 0 ), int_to_big_endian( 10**9 ), int_to_big_endian( 21000 ),
        bytes.fromhex( "35" * 20 ), int_to_big_endian( 1 ), b"",
        int_to_big_endian( 1 ), b"", b"",
    ] ).hex()
    signed			= identity.sign_ethereum_transaction_with_wallet( unsigned )
    assert Account.recover_transaction( signed ) == identity.payment_address
    assert identity.sign_ethereum_transaction_with_wallet( signed ) is None


def test_keyring_unset():
    keyring			= Keyring()
    assert not keyring.has_identity
    with pytest.raises( SystemExit ):
        keyring.identity


def test_keyring_establish():
    keyring			= Keyring()
    store			= MemoryStore()
    identity			= Identity.from_words( BIP39_ABANDON )
    assert keyring.establish( identity, persist=Keyring.persist_to( store )) is identity
    assert keyring.has_identity
    assert keyring.identity is identity
    assert keyring.identity.address == identity.address
    assert store.stores == [
        ( STORE_KEY_MNEMONIC, BIP39_ABANDON ),
        ( STORE_KEY_PERSISTED, "true" ),
    ]

    with pytest.raises( IdentityAlreadySet ):
        keyring.establish( Identity.from_entropy( b'\xff' * 16 ))
    assert keyring.identity is identity

    # Persist is requested exactly once, with the Mnemonic phrase
    phrases			= []
    Keyring().establish( identity, persist=phrases.append )
    assert phrases == [ BIP39_ABANDON ]


def test_keyring_persist_failure( caplog ):
    def persist( phrase ):
        raise OSError( "Keychain locked" )

    keyring			= Keyring()
    with caplog.at_level( logging.WARNING ):
        identity		= keyring.establish( Identity.from_words( BIP39_ABANDON ), persist=persist )
    assert keyring.identity is identity
    assert "Keychain locked" in caplog.text


def test_keyring_restore():
    keyring			= Keyring()
    assert keyring.restore( MemoryStore() ) is None
    assert not keyring.has_identity

    store			= MemoryStore( **{ STORE_KEY_MNEMONIC: BIP39_ABANDON, STORE_KEY_PERSISTED: "true" } )
    identity			= keyring.restore( store )
    assert identity.payment_address == BIP39_ABANDON_WALLET
    assert keyring.identity is identity
    assert store.stores == []

    with pytest.raises( IdentityAlreadySet ):
        keyring.restore( store )


def test_keyring_restore_failures():
    with pytest.raises( SystemExit ):
        Keyring().restore( MemoryStore( **{ STORE_KEY_PERSISTED: "true" } ))

    keyring			= Keyring()
    with pytest.raises( InvalidMnemonic ):
        keyring.restore( MemoryStore( **{ STORE_KEY_MNEMONIC: BIP39_BAD_CHECKSUM } ))
    assert not keyring.has_identity


def test_keyring_race():
    """Only one of many concurrent establish calls succeeds; all others see IdentityAlreadySet."""
    keyring			= Keyring()
    identities			= [ Identity.from_entropy( bytes( [i] ) * 16 ) for i in range( 8 ) ]
    start			= threading.Barrier( len( identities ))
    winners			= []
    losers			= []

    def establish( identity ):
        start.wait()
        try:
            winners.append( keyring.establish( identity ))
        except IdentityAlreadySet:
            losers.append( identity )

    threads			= [ threading.Thread( target=establish, args=( i, )) for i in identities ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len( winners ) == 1
    assert len( losers ) == len( identities ) - 1
    assert keyring.identity is winners[0]
