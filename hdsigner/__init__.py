from .version		import __version__  # noqa F401
from .bip39		import Mnemonic, validate, InvalidMnemonic, InvalidEntropyLength  # noqa F401
from .derivation	import derive_key, derive_identity_key, derive_wallet_key, path_text  # noqa F401
from .signer		import Signer, sha3, recover_hash  # noqa F401
from .codec		import encode, decode, MalformedRLP  # noqa F401
from .transaction	import (  # noqa F401
    sign_transaction, signed_transaction, TransactionError,
    MalformedTransaction, UnexpectedFieldCount, AlreadySigned, SignatureParseFailure,
)
from .identity		import Identity, Keyring, IdentityAlreadySet  # noqa F401
from .store		import FileStore  # noqa F401
