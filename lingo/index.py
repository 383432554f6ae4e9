"""Flattened entry ordering and circular search over it."""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Sequence

from .entries import TranslatableEntry
from .tree import ContentTree, GroupNode

EntryPredicate = Callable[[TranslatableEntry], bool]


class EntryIndex(Sequence[TranslatableEntry]):
    """All entries of a content tree in a stable order.

    A group's own entries come first, followed by the entries of each child
    group in declared order (recursively).
    """

    def __init__(self, entries: Sequence[TranslatableEntry]) -> None:
        self._entries = tuple(entries)
        self._positions = {id(entry): pos for pos, entry in enumerate(self._entries)}
        self._by_key = {entry.key: entry for entry in self._entries}

    def __getitem__(self, position):
        return self._entries[position]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TranslatableEntry]:
        return iter(self._entries)

    def position(self, entry: TranslatableEntry) -> int:
        try:
            return self._positions[id(entry)]
        except KeyError:
            raise ValueError(f"{entry!r} is not part of this index.") from None

    def find(self, key: str) -> Optional[TranslatableEntry]:
        return self._by_key.get(key)

    def first(self) -> Optional[TranslatableEntry]:
        return self._entries[0] if self._entries else None

    def last(self) -> Optional[TranslatableEntry]:
        return self._entries[-1] if self._entries else None

    def after(self, entry: TranslatableEntry) -> Optional[TranslatableEntry]:
        """The entry following ``entry``, or None at the end (no wraparound)."""

        pos = self.position(entry) + 1
        return self._entries[pos] if pos < len(self._entries) else None

    def before(self, entry: TranslatableEntry) -> Optional[TranslatableEntry]:
        pos = self.position(entry) - 1
        return self._entries[pos] if pos >= 0 else None


def _collect(node: GroupNode, into: List[TranslatableEntry]) -> None:
    into.extend(node.entries)
    for child in node.children:
        _collect(child, into)


def build_index(tree: ContentTree) -> EntryIndex:
    entries: List[TranslatableEntry] = []
    _collect(tree.root, entries)
    return EntryIndex(entries)


def _scan(
    index: EntryIndex,
    start_after: Optional[TranslatableEntry],
    predicate: EntryPredicate,
    step: int,
) -> Optional[TranslatableEntry]:
    count = len(index)
    if count == 0:
        return None
    if start_after is None:
        # Start at the first (or last) entry and visit each one once.
        origin = -1 if step > 0 else count
    else:
        origin = index.position(start_after)
    for offset in range(1, count + 1):
        entry = index[(origin + step * offset) % count]
        if predicate(entry):
            return entry
    return None


def find_next(
    index: EntryIndex,
    start_after: Optional[TranslatableEntry],
    predicate: EntryPredicate,
) -> Optional[TranslatableEntry]:
    """Scan forward circularly from just after ``start_after``.

    The starting entry itself is checked last, so each entry is visited at
    most once per call.
    """

    return _scan(index, start_after, predicate, 1)


def find_prev(
    index: EntryIndex,
    start_after: Optional[TranslatableEntry],
    predicate: EntryPredicate,
) -> Optional[TranslatableEntry]:
    """Scan backward circularly from just before ``start_after``."""

    return _scan(index, start_after, predicate, -1)


def substring_predicate(
    query: str,
    search_original: bool = True,
    search_translation: bool = True,
) -> EntryPredicate:
    def predicate(entry: TranslatableEntry) -> bool:
        return entry.matches_substring(query, search_original, search_translation)

    return predicate


def is_stale(entry: TranslatableEntry) -> bool:
    return entry.is_stale()


def mark_all_up_to_date(tree: ContentTree) -> int:
    """Confirm every entry of the tree in index order; return how many."""

    index = build_index(tree)
    for entry in index:
        entry.confirm()
    return len(index)
