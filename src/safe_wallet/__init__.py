# Safe Wallet - Main Package
#
# Local, single-user password wallet: a tree of groups and credential
# entries kept in one encrypted file.

__version__ = "0.1.0"
__description__ = "Local encrypted password wallet"

from .wallet import (
    Entry,
    EntryField,
    FieldType,
    Group,
    Path,
    WalletError,
    WalletService,
    wallet_exists,
)

__all__ = [
    "__version__",
    "WalletService",
    "Group",
    "Entry",
    "EntryField",
    "FieldType",
    "Path",
    "WalletError",
    "wallet_exists",
]
