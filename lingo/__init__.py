"""Localization content model: plural-aware entries, staleness tracking and navigation."""

from .entries import PlainEntry, PluralEntry, TranslatableEntry
from .errors import (
    DocumentError,
    LingoError,
    OutOfRangeCombination,
    StructuralMismatch,
    UnknownLanguageError,
)
from .index import (
    EntryIndex,
    build_index,
    find_next,
    find_prev,
    is_stale,
    mark_all_up_to_date,
    substring_predicate,
)
from .numbers import LanguageInfo, LanguageRegistry, NumberSystem, default_registry
from .plurals import PluralCombinationIndexer, format_plural
from .schema import ChildShape, EntryKind, EntryShape, GroupShape
from .structures import TrString, TrStringNumbers
from .tree import ContentTree, GroupNode, build_tree

__version__ = "0.1.0"
