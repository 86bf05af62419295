"""ID generation and wallet-wide uniqueness probes.

IDs look like ``grp-1f0c9a5be27d4c83`` / ``ent-...``: a kind prefix plus
64 random bits from the OS CSPRNG.
"""

import secrets
from typing import Callable

from .models import PathInfo, Wallet
from .traversal import traverse_forward

GROUP_PREFIX = "grp"
ENTRY_PREFIX = "ent"


def generate_id(prefix: str) -> str:
    return f"{prefix}-{secrets.token_hex(8)}"


def generate_group_id(wallet: Wallet) -> str:
    """Fresh group ID not yet present anywhere in the wallet."""
    while True:
        group_id = generate_id(GROUP_PREFIX)
        if not group_id_exists(wallet, group_id):
            return group_id


def generate_entry_id(wallet: Wallet) -> str:
    """Fresh entry ID not yet present anywhere in the wallet."""
    while True:
        entry_id = generate_id(ENTRY_PREFIX)
        if not entry_id_exists(wallet, entry_id):
            return entry_id


def _any_node(wallet: Wallet, predicate: Callable[[PathInfo], bool]) -> bool:
    found = False

    def visit(info: PathInfo) -> bool:
        nonlocal found
        if predicate(info):
            found = True
            return False  # Stop traversal
        return True

    traverse_forward(wallet, visit)
    return found


def group_id_exists(wallet: Wallet, group_id: str) -> bool:
    return _any_node(
        wallet, lambda info: not info.is_entry and info.group.id == group_id
    )


def entry_id_exists(wallet: Wallet, entry_id: str) -> bool:
    return _any_node(
        wallet, lambda info: info.is_entry and info.entry.id == entry_id
    )


def group_name_exists(wallet: Wallet, name: str, exclude_id: str = "") -> bool:
    """True if any group other than ``exclude_id`` already uses this name."""
    return _any_node(
        wallet,
        lambda info: (
            not info.is_entry
            and info.group.name == name
            and (not exclude_id or info.group.id != exclude_id)
        ),
    )


def entry_title_exists(wallet: Wallet, title: str, exclude_id: str = "") -> bool:
    """True if any entry other than ``exclude_id`` already uses this title."""
    return _any_node(
        wallet,
        lambda info: (
            info.is_entry
            and info.entry.title == title
            and (not exclude_id or info.entry.id != exclude_id)
        ),
    )
