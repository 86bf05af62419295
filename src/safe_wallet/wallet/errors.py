"""
Wallet Exception Classes
"""


class WalletError(Exception):
    """Base exception for wallet operations."""


class NotLoaded(WalletError):
    """Raised when the service is used before load() or create_new()."""


class NotFound(WalletError, LookupError):
    """Raised when a group, entry, path or template cannot be resolved."""


class InvalidPath(WalletError, ValueError):
    """Raised when a path has the wrong shape for the operation."""


class DuplicateID(WalletError):
    """Raised when a supplied group or entry ID is already in use."""


class DuplicateName(WalletError):
    """Raised when a group name is already used anywhere in the wallet."""


class DuplicateTitle(WalletError):
    """Raised when an entry title is already used anywhere in the wallet."""


class InvalidFieldValue(WalletError, ValueError):
    """Raised when a field value does not fit its type (non-numeric PIN)."""


class MalformedData(WalletError):
    """Raised for truncated blobs, bad base64 or an unparseable payload."""


class DecryptionFailed(WalletError):
    """Raised when authentication fails: wrong password or tampered data.

    The two causes are deliberately indistinguishable.
    """
