
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
import os

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

#
# HD Wallet Derivation Paths
#
#     https://wolovim.medium.com/ethereum-201-hd-wallets-11d0c93c87f7
#
# Each path is a sequence of (index, hardened) steps from the BIP-32 master key.  Exactly two keys
# are ever derived from a seed; no other paths are accepted.
#
# The identity key signs application authentication challenges:
#
#     m / 0' / 1 / 0
#
# The wallet key is the first BIP-44 Ethereum account, as used by eg. Metamask:
#
#     m / purpose' / coin_type' / account' / change / address_index
#     m / 44'      / 60'        / 0'       / 0      / 0
#
PATH_IDENTITY			= (
    (0,		True),
    (1,		False),
    (0,		False),
)
PATH_WALLET			= (
    (44,	True),
    (60,	True),
    (0,		True),
    (0,		False),
    (0,		False),
)

HARDENED			= 0x80000000    # BIP-32 hardened child index bit

# BIP-39 Mnemonic entropy; 128 bits yields a 12-word Mnemonic
ENTROPY_BYTES			= 16
ENTROPY_WORD_BITS		= 32		# Entropy must be a whole number of 32-bit words
LANGUAGE			= "english"

# BIP-32 master seed bounds, in bytes
SEED_BYTES_MIN			= 16
SEED_BYTES_MAX			= 64

# Persistent secret store.  The Mnemonic is stored as its words joined by a single space; the
# marker records that a Mnemonic has been persisted at least once, so a later failure to retrieve it
# is detected (rather than silently creating a brand new identity).
STORE_KEY_MNEMONIC		= "mnemonic"
STORE_KEY_PERSISTED		= "mnemonic_persisted"
STORE_PATH			= os.getenv(
    "HDSIGNER_STORE",
    os.path.join( os.path.expanduser( "~" ), ".hdsigner", "store.json" )
)

# Raw Ethereum transaction field layout
TX_FIELDS_LEGACY		= 6		# nonce, gasPrice, gasLimit, to, value, data
TX_FIELDS_EIP155		= 9		# ..., chainId, r (empty), s (empty)  --or--  ..., v, r, s
TX_V_LEGACY			= 27
TX_V_EIP155			= 35

SIGNATURE_HEX_CHARS		= 130		# r (64) + s (64) + v (2)
