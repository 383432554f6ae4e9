"""Stored field records held by original and translation instances."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


@dataclass
class TrString:
    """A plain translatable string.

    In the original-language instance ``translation`` holds the original text.
    In a translation instance it holds the translated text, and
    ``old_original`` remembers the original text as it was when the
    translation was last confirmed.
    """

    translation: str = ""
    old_original: Optional[str] = None


@dataclass
class TrStringNumbers:
    """A translatable string with plural forms for its numeric placeholders.

    ``is_numeric`` has one flag per placeholder (``{0}``, ``{1}``, ...) in
    order of appearance; ``translations`` holds one form per combination of
    plural categories, see :class:`lingo.plurals.PluralCombinationIndexer`.
    """

    is_numeric: Tuple[bool, ...] = ()
    translations: List[str] = field(default_factory=list)
    old_original: Optional[List[str]] = None

    def __post_init__(self) -> None:
        self.is_numeric = tuple(bool(flag) for flag in self.is_numeric)
        self.translations = list(self.translations)
        if self.old_original is not None:
            self.old_original = list(self.old_original)

    @property
    def numeric_count(self) -> int:
        return sum(1 for flag in self.is_numeric if flag)


def copy_forms(forms: Sequence[str]) -> List[str]:
    """Return an independent copy of a list of forms."""

    return [str(form) for form in forms]
