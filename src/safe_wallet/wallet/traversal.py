"""Depth-first walks, path resolution and path lookup over a Wallet tree.

Forward order is pre-order: a group, then that group's entries, then its
subgroups (recursively). Backward order is exactly the forward sequence
reversed.

Visit callbacks return True to continue; any falsy return stops the walk
at once, with no further visits.
"""

from typing import Callable, Iterator, List, Sequence

from .errors import InvalidPath, NotFound
from .models import Entry, Group, Path, PathInfo, Wallet

Visitor = Callable[[PathInfo], bool]


def walk_forward(wallet: Wallet) -> Iterator[PathInfo]:
    """Yield PathInfo for every group and entry in forward order.

    Lazy: stopping iteration early stops the walk.
    """
    yield from _walk(wallet.groups, Path.root(), 0)


def _walk(groups: Sequence[Group], parent_path: Path, depth: int) -> Iterator[PathInfo]:
    for group in groups:
        group_path = parent_path.child(group.id)
        yield PathInfo(path=group_path, depth=depth, group=group)

        for entry in group.entries:
            yield PathInfo(
                path=group_path.to_entry(entry.id),
                depth=depth,
                entry=entry,
                is_entry=True,
            )

        yield from _walk(group.groups, group_path, depth + 1)


def traverse_forward(wallet: Wallet, visit: Visitor) -> None:
    """Call visit for each node in forward order until it returns falsy."""
    for info in walk_forward(wallet):
        if not visit(info):
            return


def traverse_backward(wallet: Wallet, visit: Visitor) -> None:
    """Call visit for each node in reverse forward order until it returns falsy."""
    items: List[PathInfo] = list(walk_forward(wallet))
    for info in reversed(items):
        if not visit(info):
            return


def find_group_by_path(wallet: Wallet, path: Path) -> Group:
    """Resolve path.group_ids link by link from the root groups.

    Raises:
        NotFound: empty path, or any link missing
    """
    if path.is_root:
        raise NotFound("empty path")

    candidates: Sequence[Group] = wallet.groups
    target = None
    for group_id in path.group_ids:
        target = next((g for g in candidates if g.id == group_id), None)
        if target is None:
            raise NotFound(f"group not found in path: {group_id}")
        candidates = target.groups

    return target


def find_entry_by_path(wallet: Wallet, path: Path) -> Entry:
    """Resolve the owning group, then the entry by path.entry_id."""
    if not path.targets_entry:
        raise InvalidPath("entry ID is empty")

    group = find_group_by_path(wallet, path)
    for entry in group.entries:
        if entry.id == path.entry_id:
            return entry

    raise NotFound(f"entry not found: {path.entry_id}")


def get_path_to_group(wallet: Wallet, group_id: str) -> Path:
    """Path of the first group (depth-first) whose ID matches."""
    for info in walk_forward(wallet):
        if not info.is_entry and info.group.id == group_id:
            return info.path
    raise NotFound(f"group not found: {group_id}")


def get_path_to_entry(wallet: Wallet, entry_id: str) -> Path:
    """Path (owning group + entry ID) of the first matching entry."""
    for info in walk_forward(wallet):
        if info.is_entry and info.entry.id == entry_id:
            return info.path
    raise NotFound(f"entry not found: {entry_id}")


def get_parent_path(path: Path) -> Path:
    """Drop the last group ID. The root's parent is the root."""
    return path.parent()
