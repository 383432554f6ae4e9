"""Editing session tying a translation instance to its tree and index."""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .documents import LANGUAGE_KEY, save_instance
from .entries import TranslatableEntry
from .index import (
    EntryIndex,
    build_index,
    find_next,
    find_prev,
    is_stale,
    mark_all_up_to_date,
    substring_predicate,
)
from .numbers import LanguageRegistry
from .schema import Accessor, GroupShape, default_accessor
from .tree import ContentTree, build_tree

logger = logging.getLogger(__name__)


@dataclass
class SessionSummary:
    """Report of the state of a translation."""

    original_language: str
    translation_language: str
    total_entries: int
    stale_entries: int
    any_changes: bool
    stale_keys: List[str] = field(default_factory=list)

    @property
    def up_to_date_entries(self) -> int:
        return self.total_entries - self.stale_entries


class TranslationSession:
    """Coordinates tree building, navigation, confirmation and saving.

    The tree and index are built on construction; a structural mismatch
    propagates out of the constructor so no half-built session exists.
    """

    def __init__(
        self,
        *,
        shape: GroupShape,
        original: Any,
        translation: Any,
        registry: LanguageRegistry,
        original_language: str,
        translation_language: Optional[str] = None,
        path: Optional[pathlib.Path] = None,
        accessor: Accessor = default_accessor,
        search_original: bool = True,
        search_translation: bool = True,
    ) -> None:
        if translation_language is None:
            translation_language = _instance_language(translation, accessor) or original_language
        self.shape = shape
        self.original = original
        self.translation = translation
        self.path = path
        self.accessor = accessor

        self.tree: ContentTree = build_tree(
            shape,
            original,
            translation,
            registry=registry,
            original_language=original_language,
            translation_language=translation_language,
            accessor=accessor,
        )
        self.index: EntryIndex = build_index(self.tree)
        for entry in self.index:
            entry.subscribe(self._on_change)

        self.any_changes = False
        self.current: Optional[TranslatableEntry] = None
        self.last_query = ""
        self.search_original = search_original
        self.search_translation = search_translation

    def _on_change(self, entry: TranslatableEntry) -> None:
        self.any_changes = True

    def select(self, entry: Optional[TranslatableEntry]) -> Optional[TranslatableEntry]:
        if entry is not None:
            self.index.position(entry)
        self.current = entry
        return entry

    def find_next(
        self,
        query: Optional[str] = None,
        *,
        search_original: Optional[bool] = None,
        search_translation: Optional[bool] = None,
    ) -> Optional[TranslatableEntry]:
        """Move to the next entry containing ``query`` (remembered between calls)."""

        predicate = self._search_predicate(query, search_original, search_translation)
        if predicate is None:
            return None
        found = find_next(self.index, self.current, predicate)
        if found is None:
            logger.info("No matching strings found for '%s'", self.last_query)
            return None
        return self.select(found)

    def find_prev(
        self,
        query: Optional[str] = None,
        *,
        search_original: Optional[bool] = None,
        search_translation: Optional[bool] = None,
    ) -> Optional[TranslatableEntry]:
        predicate = self._search_predicate(query, search_original, search_translation)
        if predicate is None:
            return None
        found = find_prev(self.index, self.current, predicate)
        if found is None:
            logger.info("No matching strings found for '%s'", self.last_query)
            return None
        return self.select(found)

    def _search_predicate(self, query, search_original, search_translation):
        if query is not None:
            self.last_query = query
        if search_original is not None:
            self.search_original = search_original
        if search_translation is not None:
            self.search_translation = search_translation
        if not self.last_query:
            logger.info("No search text given; nothing to find.")
            return None
        if not self.search_original and not self.search_translation:
            logger.warning(
                "Both original and translation search are disabled; nothing to search."
            )
            return None
        return substring_predicate(
            self.last_query, self.search_original, self.search_translation
        )

    def next_stale(self) -> Optional[TranslatableEntry]:
        found = find_next(self.index, self.current, is_stale)
        if found is None:
            logger.info("All strings are up to date.")
            return None
        return self.select(found)

    def accept(self, entry: Optional[TranslatableEntry] = None) -> Optional[TranslatableEntry]:
        """Confirm ``entry`` (default: the current one) and move to the entry after it."""

        entry = entry or self.current
        if entry is None:
            return None
        entry.confirm()
        following = self.index.after(entry)
        return self.select(following if following is not None else entry)

    def mark_all_up_to_date(self) -> int:
        return mark_all_up_to_date(self.tree)

    def stale_entries(self) -> List[TranslatableEntry]:
        return [entry for entry in self.index if entry.is_stale()]

    def save(self, path: Optional[pathlib.Path] = None, *, force: bool = True) -> pathlib.Path:
        destination = pathlib.Path(path) if path is not None else self.path
        if destination is None:
            raise ValueError("No path given and the session was not opened from a file.")
        save_instance(
            self.shape,
            self.translation,
            destination,
            force=force,
            accessor=self.accessor,
        )
        self.path = destination
        self.any_changes = False
        logger.info("Saved %s translation to %s", self.tree.translation_language, destination)
        return destination

    def summary(self) -> SessionSummary:
        stale = self.stale_entries()
        return SessionSummary(
            original_language=self.tree.original_language,
            translation_language=self.tree.translation_language,
            total_entries=len(self.index),
            stale_entries=len(stale),
            any_changes=self.any_changes,
            stale_keys=[entry.key for entry in stale],
        )


def _instance_language(instance: Any, accessor: Accessor) -> Optional[str]:
    try:
        language = accessor(instance, LANGUAGE_KEY)
    except (KeyError, AttributeError):
        return None
    return language if isinstance(language, str) else None
