"""Translatable entries binding original and translation fields together."""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from .errors import OutOfRangeCombination, StructuralMismatch
from .numbers import NumberSystem
from .plurals import PluralCombinationIndexer, format_plural
from .schema import EntryKind
from .structures import TrString, TrStringNumbers, copy_forms

if TYPE_CHECKING:
    from .tree import GroupNode


ChangeListener = Callable[["TranslatableEntry"], None]


def fold_for_search(text: str) -> str:
    """Fold case, accents and character width for substring comparison."""

    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


def _pad(forms: Sequence[str], count: int) -> List[str]:
    padded = copy_forms(forms)
    if len(padded) < count:
        padded.extend([""] * (count - len(padded)))
    return padded


class TranslatableEntry(ABC):
    """Common behaviour of plain and plural entries.

    The original text is always read live from the original instance so
    that edits to it are reflected in :meth:`is_stale` immediately.
    """

    kind: EntryKind

    def __init__(self, key: str, field_name: str, notes: str = "") -> None:
        self.key = key
        self.field_name = field_name
        self.notes = notes
        self.group: Optional["GroupNode"] = None
        self._listeners: List[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked whenever the translation side changes."""

        self._listeners.append(listener)

    def _touch(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    @abstractmethod
    def is_stale(self) -> bool:
        """Return True when the translation needs (re-)review."""

    @abstractmethod
    def confirm(self) -> None:
        """Snapshot the current original text, clearing staleness."""

    def mark_up_to_date(self) -> None:
        self.confirm()

    @abstractmethod
    def _original_texts(self) -> List[str]:
        ...

    @abstractmethod
    def _translation_texts(self) -> List[str]:
        ...

    def matches_substring(
        self,
        query: str,
        search_original: bool,
        search_translation: bool,
    ) -> bool:
        if not (search_original or search_translation):
            return False
        needle = fold_for_search(query)
        if search_original and any(
            needle in fold_for_search(text) for text in self._original_texts()
        ):
            return True
        if search_translation and any(
            needle in fold_for_search(text) for text in self._translation_texts()
        ):
            return True
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"


class PlainEntry(TranslatableEntry):
    """A single string with no plural forms."""

    kind = EntryKind.PLAIN

    def __init__(
        self,
        key: str,
        field_name: str,
        original: TrString,
        translation: TrString,
        notes: str = "",
    ) -> None:
        super().__init__(key, field_name, notes)
        self._original = original
        self._translation = translation

    def read_original(self) -> str:
        return self._original.translation or ""

    def read_translation(self) -> str:
        return self._translation.translation or ""

    def set_translation(self, text: str) -> None:
        self._translation.translation = text
        self._touch()

    @property
    def snapshot(self) -> Optional[str]:
        return self._translation.old_original

    def is_stale(self) -> bool:
        return self.snapshot is None or self.snapshot != self.read_original()

    def confirm(self) -> None:
        self._translation.old_original = str(self.read_original())
        self._touch()

    def previous_original(self) -> Optional[str]:
        """Return the original text the translation was made for, if it changed since."""

        if self.snapshot is not None and self.snapshot != self.read_original():
            return self.snapshot
        return None

    def _original_texts(self) -> List[str]:
        return [self.read_original()]

    def _translation_texts(self) -> List[str]:
        return [self.read_translation()]


class PluralEntry(TranslatableEntry):
    """A string with one form per combination of plural categories."""

    kind = EntryKind.PLURAL

    def __init__(
        self,
        key: str,
        field_name: str,
        original: TrStringNumbers,
        translation: TrStringNumbers,
        original_system: NumberSystem,
        translation_system: NumberSystem,
        notes: str = "",
    ) -> None:
        super().__init__(key, field_name, notes)
        if tuple(original.is_numeric) != tuple(translation.is_numeric):
            raise StructuralMismatch(
                "numeric placeholder pattern differs between original "
                f"{list(original.is_numeric)} and translation {list(translation.is_numeric)}",
                path=key,
            )
        self._original = original
        self._translation = translation
        self.original_indexer = PluralCombinationIndexer(original_system, original.numeric_count)
        self.translation_indexer = PluralCombinationIndexer(
            translation_system, translation.numeric_count
        )

    @property
    def placeholder_is_numeric(self) -> Tuple[bool, ...]:
        return tuple(self._original.is_numeric)

    @property
    def numeric_placeholder_count(self) -> int:
        return self._original.numeric_count

    def placeholder_headings(self) -> List[str]:
        """Column headings naming the numeric placeholders, e.g. ``["{0}", "{2}"]``."""

        return ["{%d}" % i for i, flag in enumerate(self.placeholder_is_numeric) if flag]

    def read_original_forms(self) -> List[str]:
        return _pad(self._original.translations, self.original_indexer.row_count)

    def read_translation(self) -> List[str]:
        return _pad(self._translation.translations, self.translation_indexer.row_count)

    def set_translation(self, texts: Sequence[str]) -> None:
        if len(texts) > self.translation_indexer.row_count:
            raise OutOfRangeCombination(
                f"{self.key}: got {len(texts)} forms, the table has "
                f"{self.translation_indexer.row_count} rows."
            )
        self._translation.translations = _pad(texts, self.translation_indexer.row_count)
        self._touch()

    @property
    def snapshot(self) -> Optional[List[str]]:
        old = self._translation.old_original
        return None if old is None else list(old)

    def is_stale(self) -> bool:
        snapshot = self.snapshot
        return snapshot is None or snapshot != self.read_original_forms()

    def confirm(self) -> None:
        self._translation.old_original = self.read_original_forms()
        self._touch()

    def previous_original(self) -> Optional[List[str]]:
        snapshot = self.snapshot
        if snapshot is not None and snapshot != self.read_original_forms():
            return snapshot
        return None

    def original_rows(self) -> List[Tuple[Tuple[str, ...], str]]:
        forms = self.read_original_forms()
        return [(self.original_indexer.labels(row), forms[row]) for row, _ in self.original_indexer.rows()]

    def translation_rows(self) -> List[Tuple[Tuple[str, ...], str]]:
        forms = self.read_translation()
        return [
            (self.translation_indexer.labels(row), forms[row])
            for row, _ in self.translation_indexer.rows()
        ]

    def resolve_original(self, *args) -> str:
        return format_plural(
            self.read_original_forms(),
            self.placeholder_is_numeric,
            self.original_indexer.number_system,
            *args,
        )

    def resolve_translation(self, *args) -> str:
        return format_plural(
            self.read_translation(),
            self.placeholder_is_numeric,
            self.translation_indexer.number_system,
            *args,
        )

    def _original_texts(self) -> List[str]:
        return self.read_original_forms()

    def _translation_texts(self) -> List[str]:
        return self.read_translation()
