# Wallet Module - Encrypted Password Wallet
#
# Tree of groups and credential entries, stored as one encrypted file.
# PBKDF2-HMAC-SHA256 key derivation + AES-256-GCM.

from .errors import (
    DecryptionFailed,
    DuplicateID,
    DuplicateName,
    DuplicateTitle,
    InvalidFieldValue,
    InvalidPath,
    MalformedData,
    NotFound,
    NotLoaded,
    WalletError,
)
from .models import Entry, EntryField, FieldType, Group, Path, PathInfo, Wallet
from .service import WalletService
from .storage import create_new_wallet, load_wallet, save_wallet, wallet_exists
from .templates import ENTRY_TEMPLATES, EntryTemplate, get_template, template_catalog

__all__ = [
    "WalletService",
    # Model
    "Wallet",
    "Group",
    "Entry",
    "EntryField",
    "FieldType",
    "Path",
    "PathInfo",
    # Persistence
    "create_new_wallet",
    "load_wallet",
    "save_wallet",
    "wallet_exists",
    # Templates
    "ENTRY_TEMPLATES",
    "EntryTemplate",
    "get_template",
    "template_catalog",
    # Errors
    "WalletError",
    "NotLoaded",
    "NotFound",
    "InvalidPath",
    "DuplicateID",
    "DuplicateName",
    "DuplicateTitle",
    "InvalidFieldValue",
    "MalformedData",
    "DecryptionFailed",
]
