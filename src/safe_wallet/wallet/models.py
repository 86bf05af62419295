"""Wallet tree model.

A Wallet owns an ordered list of root Groups. Each Group owns its child
Groups and its Entries exclusively, so the containment graph is always a
tree. Paths are transient addresses recomputed from the tree; they are
never stored in it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class FieldType(str, Enum):
    """How an entry field's value is treated."""

    GENERAL = "general"        # Username, notes, URLs
    PASSWORD = "password"      # Masked on display
    PIN = "pin"                # Masked on display, digits only

    @property
    def is_secret(self) -> bool:
        return self in (FieldType.PASSWORD, FieldType.PIN)


@dataclass
class EntryField:
    """A single named value on an entry. Names need not be unique."""

    name: str
    value: str = ""
    type: FieldType = FieldType.GENERAL

    @property
    def is_secret(self) -> bool:
        return FieldType(self.type).is_secret

    def is_valid(self) -> bool:
        """PIN values must be ASCII digits only; everything else is free text."""
        if FieldType(self.type) is FieldType.PIN:
            return all(c in "0123456789" for c in self.value)
        return True

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "type": FieldType(self.type).value,
        }


@dataclass
class Entry:
    """A credential record owned by exactly one group."""

    title: str
    fields: List[EntryField] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass
class Group:
    """A named node holding child groups and entries."""

    name: str
    groups: List["Group"] = field(default_factory=list)
    entries: List[Entry] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "groups": [g.to_dict() for g in self.groups],
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class Wallet:
    """Root aggregate. The root itself is not a Group."""

    version: int = 1
    groups: List[Group] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass(frozen=True)
class Path:
    """Address of a group (no entry_id) or of an entry within a group.

    An empty ``group_ids`` addresses the wallet root.
    """

    group_ids: Tuple[str, ...] = ()
    entry_id: str = ""

    def __post_init__(self):
        # Accept any sequence from callers, store an immutable tuple
        object.__setattr__(self, "group_ids", tuple(self.group_ids))

    @classmethod
    def root(cls) -> "Path":
        return cls()

    @property
    def is_root(self) -> bool:
        return not self.group_ids

    @property
    def targets_entry(self) -> bool:
        return bool(self.entry_id)

    def parent(self) -> "Path":
        """Drop the last group ID (and any entry ID). The root is its own parent."""
        return Path(self.group_ids[:-1])

    def child(self, group_id: str) -> "Path":
        return Path(self.group_ids + (group_id,))

    def to_entry(self, entry_id: str) -> "Path":
        return Path(self.group_ids, entry_id)


@dataclass
class PathInfo:
    """What a traversal hands to its visit callback.

    Exactly one of ``group`` and ``entry`` is set; ``is_entry`` says which.
    Root groups (and their entries) are at depth 0.
    """

    path: Path
    depth: int
    group: Optional[Group] = None
    entry: Optional[Entry] = None
    is_entry: bool = False
