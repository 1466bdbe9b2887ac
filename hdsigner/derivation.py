
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

from typing		import List, Sequence, Tuple

from eth_account.hdaccount import key_from_seed

from .defaults		import PATH_IDENTITY, PATH_WALLET, HARDENED, SEED_BYTES_MIN, SEED_BYTES_MAX

log				= logging.getLogger( __package__ )

Path				= Sequence[Tuple[int, bool]]


def path_indices( path: Path ) -> List[int]:
    """The BIP-32 child indices of each step; hardened steps have the HARDENED bit set."""
    indices			= []
    for index,hardened in path:
        if not 0 <= index < HARDENED:
            raise ValueError( f"Invalid BIP-32 derivation index {index}" )
        indices.append( index | HARDENED if hardened else index )
    return indices


def path_text( path: Path ) -> str:
    """Render a derivation path in standard notation, eg. ((44,True),(60,True),(0,False)) --> "m/44'/60'/0"."""
    return '/'.join( [ 'm' ] + [
        f"{i & ~HARDENED}'" if i & HARDENED else f"{i}"
        for i in path_indices( path )
    ])


def derive_key( seed: bytes, path: Path ) -> bytes:
    """Derive the 32-byte private key at path from the BIP-32 master key of seed.

    Hardened steps derive from the parent private key, normal steps from the parent public key (as
    specified by BIP-32); eth-account's HD derivation implements both.

    """
    if not SEED_BYTES_MIN <= len( seed ) <= SEED_BYTES_MAX:
        raise ValueError(
            f"BIP-32 seeds must be {SEED_BYTES_MIN*8}- to {SEED_BYTES_MAX*8}-bits; {len( seed )*8}-bit seed supplied" )
    path_str			= path_text( path )
    key				= key_from_seed( bytes( seed ), path_str )
    log.debug( f"Derived private key at {path_str}" )
    return bytes( key )


def derive_identity_key( seed: bytes ) -> bytes:
    return derive_key( seed, PATH_IDENTITY )


def derive_wallet_key( seed: bytes ) -> bytes:
    return derive_key( seed, PATH_WALLET )
