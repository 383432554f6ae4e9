"""Content tree construction from a declared shape and two instances."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional

from .entries import PlainEntry, PluralEntry, TranslatableEntry
from .errors import StructuralMismatch
from .numbers import LanguageRegistry, NumberSystem
from .schema import Accessor, EntryKind, EntryShape, GroupShape, default_accessor
from .structures import TrString, TrStringNumbers

logger = logging.getLogger(__name__)


@dataclass
class GroupNode:
    """A group of entries and nested groups in the content tree."""

    name: str
    label: str
    description: str
    path: str = ""
    children: List["GroupNode"] = field(default_factory=list)
    entries: List[TranslatableEntry] = field(default_factory=list)
    parent: Optional["GroupNode"] = field(default=None, repr=False, compare=False)

    def walk(self) -> Iterator["GroupNode"]:
        """Yield this node and its descendants, parents first."""

        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class ContentTree:
    """The built hierarchy for one (original, translation) pair."""

    root: GroupNode
    original_language: str
    translation_language: str

    def groups(self) -> Iterator[GroupNode]:
        return self.root.walk()


@dataclass
class _Binding:
    """Context shared by one tree build."""

    accessor: Accessor
    original_system: NumberSystem
    translation_system: NumberSystem


def build_tree(
    shape: GroupShape,
    original: Any,
    translation: Any,
    *,
    registry: LanguageRegistry,
    original_language: str,
    translation_language: str,
    accessor: Accessor = default_accessor,
) -> ContentTree:
    """Walk both instances along ``shape`` and build the content tree.

    Raises :class:`StructuralMismatch` if either instance does not conform to
    the shape; no tree is returned in that case.
    """

    binding = _Binding(
        accessor=accessor,
        original_system=registry.number_system(original_language),
        translation_system=registry.number_system(translation_language),
    )
    root = _build_node(shape, original, translation, binding, path="")
    tree = ContentTree(
        root=root,
        original_language=original_language,
        translation_language=translation_language,
    )
    logger.debug(
        "Built content tree '%s' (%s -> %s): %d groups, %d entries",
        shape.name,
        original_language,
        translation_language,
        sum(1 for _ in tree.groups()),
        sum(len(node.entries) for node in tree.groups()),
    )
    return tree


def _read(binding: _Binding, instance: Any, name: str, *, path: str, side: str) -> Any:
    try:
        value = binding.accessor(instance, name)
    except (KeyError, AttributeError, IndexError, TypeError):
        value = None
    if value is None:
        raise StructuralMismatch(f"missing on the {side} instance", path=path)
    return value


def _build_entry(
    entry_shape: EntryShape,
    original: Any,
    translation: Any,
    binding: _Binding,
    *,
    path: str,
) -> TranslatableEntry:
    orig_field = _read(binding, original, entry_shape.field, path=path, side="original")
    trans_field = _read(binding, translation, entry_shape.field, path=path, side="translation")

    if entry_shape.kind is EntryKind.PLAIN:
        for value, side in ((orig_field, "original"), (trans_field, "translation")):
            if not isinstance(value, TrString):
                raise StructuralMismatch(
                    f"expected a plain string on the {side} instance, found {type(value).__name__}",
                    path=path,
                )
        return PlainEntry(path, entry_shape.field, orig_field, trans_field, notes=entry_shape.notes)

    for value, side in ((orig_field, "original"), (trans_field, "translation")):
        if not isinstance(value, TrStringNumbers):
            raise StructuralMismatch(
                f"expected a plural string on the {side} instance, found {type(value).__name__}",
                path=path,
            )
    return PluralEntry(
        path,
        entry_shape.field,
        orig_field,
        trans_field,
        binding.original_system,
        binding.translation_system,
        notes=entry_shape.notes,
    )


def _build_node(
    shape: GroupShape,
    original: Any,
    translation: Any,
    binding: _Binding,
    *,
    path: str,
) -> GroupNode:
    node = GroupNode(
        name=shape.name,
        label=shape.display_name,
        description=shape.description,
        path=path,
    )
    prefix = f"{path}." if path else ""

    for entry_shape in shape.entries:
        entry = _build_entry(
            entry_shape, original, translation, binding, path=prefix + entry_shape.field
        )
        entry.group = node
        node.entries.append(entry)

    for child in shape.groups:
        child_path = prefix + child.field
        child_original = _read(binding, original, child.field, path=child_path, side="original")
        child_translation = _read(
            binding, translation, child.field, path=child_path, side="translation"
        )
        child_node = _build_node(
            child.shape, child_original, child_translation, binding, path=child_path
        )
        child_node.parent = node
        node.children.append(child_node)

    return node
