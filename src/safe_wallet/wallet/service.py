# Wallet Service - Encrypted Group/Entry Tree
#
# Owns one in-memory Wallet bound to a file path and master password.
# All mutations validate fully before touching the tree, so a failed call
# leaves the wallet exactly as it was.
# Nothing is persisted until save() is called.

import logging
from pathlib import Path as FilePath
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

from ..core import EventSeverity, EventType, get_audit_logger
from . import storage, traversal
from .errors import (
    DecryptionFailed,
    DuplicateID,
    DuplicateName,
    DuplicateTitle,
    InvalidFieldValue,
    InvalidPath,
    NotFound,
    NotLoaded,
)
from .idgen import (
    entry_id_exists,
    entry_title_exists,
    generate_entry_id,
    generate_group_id,
    group_id_exists,
    group_name_exists,
)
from .models import Entry, EntryField, Group, Path, PathInfo, Wallet
from .templates import get_template

logger = logging.getLogger(__name__)


class WalletService:
    """
    High-level operations on an encrypted wallet file.

    Lifecycle:
        service = WalletService("wallet.dat", password)
        service.load()          # or service.create_new()
        service.add_group(Path.root(), Group(name="Personal"))
        service.save()

    There is no explicit lock/unload: discard the service to lock.

    Group names and entry titles are unique across the WHOLE wallet, not
    just among siblings.
    """

    def __init__(self, wallet_path: Union[str, FilePath], password: str):
        self.wallet_path = FilePath(wallet_path)
        self.password = password
        self.wallet: Optional[Wallet] = None

        self.logger = get_audit_logger()

    # ── Lifecycle ────────────────────────────────────────────────────

    @property
    def is_loaded(self) -> bool:
        return self.wallet is not None

    def load(self) -> None:
        """Load and decrypt the wallet file, replacing any in-memory wallet."""
        try:
            wallet = storage.load_wallet(self.wallet_path, self.password)
        except DecryptionFailed:
            self.logger.log_event(
                event_type=EventType.WALLET_UNLOCK_FAILED,
                severity=EventSeverity.ALERT,
                message="Wallet unlock failed: invalid password or corrupted data",
                details={"wallet_path": str(self.wallet_path)}
            )
            raise

        self.wallet = wallet
        self.logger.log_wallet_event(
            EventType.WALLET_LOADED,
            "loaded",
            details={
                "wallet_path": str(self.wallet_path),
                "version": wallet.version,
                "root_groups": len(wallet.groups),
            }
        )

    def create_new(self) -> None:
        """Start an empty wallet and write it to disk."""
        self.wallet = storage.create_new_wallet()
        self.save()
        self.logger.log_wallet_event(
            EventType.WALLET_CREATED,
            "created",
            details={"wallet_path": str(self.wallet_path)}
        )

    def save(self) -> None:
        """Encrypt and rewrite the whole wallet file."""
        wallet = self._require_wallet()
        try:
            storage.save_wallet(wallet, self.wallet_path, self.password)
        except OSError as e:
            self.logger.log_event(
                event_type=EventType.WALLET_ERROR,
                severity=EventSeverity.CRITICAL,
                message=f"Wallet save failed: {e.__class__.__name__}",
                details={"wallet_path": str(self.wallet_path)}
            )
            raise
        self.logger.log_wallet_event(
            EventType.WALLET_SAVED,
            "saved",
            details={"wallet_path": str(self.wallet_path)}
        )

    def get_wallet(self) -> Optional[Wallet]:
        """Live reference to the in-memory tree (None until loaded)."""
        return self.wallet

    def _require_wallet(self) -> Wallet:
        if self.wallet is None:
            raise NotLoaded("wallet not loaded")
        return self.wallet

    # ── Groups ───────────────────────────────────────────────────────

    def add_group(self, path: Path, group: Group) -> Group:
        """
        Add group under the group at path (root groups for an empty path).

        Child groups and entries already attached to group are added with it.
        Every node in that subtree is checked against the wallet and against
        the rest of the subtree; unset IDs are generated, supplied ones must
        be unused.

        Raises:
            DuplicateID, DuplicateName, DuplicateTitle, InvalidFieldValue,
            InvalidPath, NotFound
        """
        wallet = self._require_wallet()

        if path.targets_entry:
            raise InvalidPath("path should point to a group, not an entry")

        groups, entries = _collect_subtree(group)
        group_ids, entry_ids = self._check_subtree(wallet, groups, entries)

        if path.is_root:
            container = wallet.groups
        else:
            container = traversal.find_group_by_path(wallet, path).groups

        for node in groups:
            if not node.id:
                node.id = _fresh_id(generate_group_id, wallet, group_ids)
            if node.groups is None:
                node.groups = []
            if node.entries is None:
                node.entries = []
        for entry in entries:
            if not entry.id:
                entry.id = _fresh_id(generate_entry_id, wallet, entry_ids)
            if entry.fields is None:
                entry.fields = []
        container.append(group)

        self.logger.log_wallet_event(
            EventType.GROUP_ADDED,
            f"group added: {group.name}",
            details={
                "group_id": group.id,
                "parent": list(path.group_ids),
                "subgroups": len(groups) - 1,
                "entries": len(entries),
            }
        )
        return group

    def _check_subtree(
        self,
        wallet: Wallet,
        groups: List[Group],
        entries: List[Entry]
    ) -> Tuple[Set[str], Set[str]]:
        """Validate an incoming subtree; returns the group and entry IDs it claims."""
        group_ids: Set[str] = set()
        names: Set[str] = set()
        for node in groups:
            if node.id:
                if node.id in group_ids or group_id_exists(wallet, node.id):
                    raise DuplicateID(f"group ID already exists: {node.id}")
                group_ids.add(node.id)
            if node.name in names or group_name_exists(wallet, node.name):
                raise DuplicateName(f"group name already exists: {node.name}")
            names.add(node.name)

        entry_ids: Set[str] = set()
        titles: Set[str] = set()
        for entry in entries:
            if entry.id:
                if entry.id in entry_ids or entry_id_exists(wallet, entry.id):
                    raise DuplicateID(f"entry ID already exists: {entry.id}")
                entry_ids.add(entry.id)
            if entry.title in titles or entry_title_exists(wallet, entry.title):
                raise DuplicateTitle(f"entry title already exists: {entry.title}")
            titles.add(entry.title)
            _validate_fields(entry.fields)

        return group_ids, entry_ids

    def update_group(self, path: Path, updated_group: Group) -> Group:
        """
        Rename the group at path.

        The target keeps its id, child groups and entries; only the name is
        taken from updated_group.
        """
        wallet = self._require_wallet()

        if path.is_root:
            raise InvalidPath("cannot update root groups directly")
        if path.targets_entry:
            raise InvalidPath("path should point to a group, not an entry")

        target_id = path.group_ids[-1]

        if group_name_exists(wallet, updated_group.name, exclude_id=target_id):
            raise DuplicateName(f"group name already exists: {updated_group.name}")

        container = self._group_container(wallet, path.parent())
        index = _index_of(container, target_id)
        if index is None:
            raise NotFound(f"group not found: {target_id}")

        existing = container[index]
        replacement = Group(
            id=existing.id,
            name=updated_group.name,
            groups=existing.groups,
            entries=existing.entries,
        )
        container[index] = replacement

        self.logger.log_wallet_event(
            EventType.GROUP_UPDATED,
            f"group renamed: {existing.name} -> {replacement.name}",
            details={"group_id": replacement.id}
        )
        return replacement

    def delete_group(self, path: Path) -> None:
        """Remove the group at path together with everything beneath it."""
        wallet = self._require_wallet()

        if path.is_root:
            raise InvalidPath("cannot delete root groups directly")
        if path.targets_entry:
            raise InvalidPath("path should point to a group, not an entry")

        target_id = path.group_ids[-1]
        container = self._group_container(wallet, path.parent())
        index = _index_of(container, target_id)
        if index is None:
            raise NotFound(f"group not found: {target_id}")

        removed = container.pop(index)

        self.logger.log_wallet_event(
            EventType.GROUP_DELETED,
            f"group deleted: {removed.name}",
            details={"group_id": removed.id}
        )

    def _group_container(self, wallet: Wallet, parent_path: Path) -> List[Group]:
        """The list that owns the children of parent_path."""
        if parent_path.is_root:
            return wallet.groups
        return traversal.find_group_by_path(wallet, parent_path).groups

    # ── Entries ──────────────────────────────────────────────────────

    def add_entry(self, path: Path, entry: Entry) -> Entry:
        """
        Add entry to the group at path.

        Raises:
            InvalidPath: path targets an entry, or the root
            DuplicateID, DuplicateTitle, InvalidFieldValue, NotFound
        """
        wallet = self._require_wallet()

        if path.targets_entry:
            raise InvalidPath("path should point to a group, not an entry")
        if path.is_root:
            raise InvalidPath("entries must belong to a group")

        if entry.id:
            if entry_id_exists(wallet, entry.id):
                raise DuplicateID(f"entry ID already exists: {entry.id}")
            entry_id = entry.id
        else:
            entry_id = generate_entry_id(wallet)

        if entry_title_exists(wallet, entry.title):
            raise DuplicateTitle(f"entry title already exists: {entry.title}")

        _validate_fields(entry.fields)

        group = traversal.find_group_by_path(wallet, path)

        entry.id = entry_id
        if entry.fields is None:
            entry.fields = []
        group.entries.append(entry)

        self.logger.log_wallet_event(
            EventType.ENTRY_ADDED,
            f"entry added: {entry.title}",
            details={"entry_id": entry.id, "group_id": group.id}
        )
        return entry

    def update_entry(self, path: Path, updated_entry: Entry) -> Entry:
        """Replace title and fields of the entry at path, keeping its id."""
        wallet = self._require_wallet()

        if not path.targets_entry:
            raise InvalidPath("path must include an entry ID")

        entry = traversal.find_entry_by_path(wallet, path)

        if entry_title_exists(wallet, updated_entry.title, exclude_id=entry.id):
            raise DuplicateTitle(f"entry title already exists: {updated_entry.title}")

        _validate_fields(updated_entry.fields)

        entry.title = updated_entry.title
        entry.fields = list(updated_entry.fields or [])

        self.logger.log_wallet_event(
            EventType.ENTRY_UPDATED,
            f"entry updated: {entry.title}",
            details={"entry_id": entry.id}
        )
        return entry

    def delete_entry(self, path: Path) -> None:
        wallet = self._require_wallet()

        if not path.targets_entry:
            raise InvalidPath("path must include an entry ID")

        group = traversal.find_group_by_path(wallet, path)
        index = _index_of(group.entries, path.entry_id)
        if index is None:
            raise NotFound(f"entry not found: {path.entry_id}")

        removed = group.entries.pop(index)

        self.logger.log_wallet_event(
            EventType.ENTRY_DELETED,
            f"entry deleted: {removed.title}",
            details={"entry_id": removed.id, "group_id": group.id}
        )

    def create_entry_from_template(
        self,
        path: Path,
        template_name: str,
        title: str,
        values: Optional[Dict[str, str]] = None
    ) -> Entry:
        """Build an entry from a catalog template and add it at path.

        values maps field names to values; fields without one stay empty.
        """
        entry = get_template(template_name).new_entry(title)
        for entry_field in entry.fields:
            if values and entry_field.name in values:
                entry_field.value = values[entry_field.name]
        return self.add_entry(path, entry)

    # ── Queries ──────────────────────────────────────────────────────

    def find_group_by_id(self, group_id: str) -> Tuple[Path, Group]:
        wallet = self._require_wallet()
        path = traversal.get_path_to_group(wallet, group_id)
        return path, traversal.find_group_by_path(wallet, path)

    def find_entry_by_id(self, entry_id: str) -> Tuple[Path, Entry]:
        wallet = self._require_wallet()
        path = traversal.get_path_to_entry(wallet, entry_id)
        return path, traversal.find_entry_by_path(wallet, path)

    def list_children(self, path: Path) -> Tuple[List[Group], List[Entry]]:
        """Direct child groups and entries at path (the root has no entries)."""
        wallet = self._require_wallet()
        if path.is_root:
            return list(wallet.groups), []
        group = traversal.find_group_by_path(wallet, path)
        return list(group.groups), list(group.entries)

    def search_entries(self, term: str) -> List[PathInfo]:
        """
        Case-insensitive substring search over entry titles, field names and
        field values, in forward traversal order.
        """
        wallet = self._require_wallet()

        needle = term.strip().lower()
        if not needle:
            raise ValueError("Search term cannot be empty")

        return [
            info for info in traversal.walk_forward(wallet)
            if info.is_entry and _entry_matches(info.entry, needle)
        ]

    def traverse_forward(self, visit: traversal.Visitor) -> None:
        """Forward walk over the loaded wallet; no-op when nothing is loaded."""
        if self.wallet is None:
            return
        traversal.traverse_forward(self.wallet, visit)

    def traverse_backward(self, visit: traversal.Visitor) -> None:
        """Backward walk over the loaded wallet; no-op when nothing is loaded."""
        if self.wallet is None:
            return
        traversal.traverse_backward(self.wallet, visit)


def _index_of(items, item_id: str) -> Optional[int]:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    return None


def _validate_fields(fields: Optional[List[EntryField]]) -> None:
    for entry_field in fields or []:
        if not entry_field.is_valid():
            raise InvalidFieldValue(
                f"field '{entry_field.name}' must contain digits only"
            )


def _entry_matches(entry: Entry, needle: str) -> bool:
    if needle in entry.title.lower():
        return True
    return any(
        needle in f.name.lower() or needle in f.value.lower()
        for f in entry.fields
    )


def _collect_subtree(group: Group) -> Tuple[List[Group], List[Entry]]:
    """Pre-order list of group and its descendant groups, plus all their entries."""
    groups: List[Group] = []
    entries: List[Entry] = []
    stack = [group]
    while stack:
        node = stack.pop()
        groups.append(node)
        entries.extend(node.entries or [])
        stack.extend(reversed(node.groups or []))
    return groups, entries


def _fresh_id(generate: Callable[[Wallet], str], wallet: Wallet, taken: Set[str]) -> str:
    while True:
        new_id = generate(wallet)
        if new_id not in taken:
            taken.add(new_id)
            return new_id
