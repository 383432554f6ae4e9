"""Declarative shape of a product's translatable content."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Mapping, Sequence


# Instance documents carry their language identifier under this key.
LANGUAGE_FIELD = "language"


class EntryKind(Enum):
    """Kind of a declared translatable field."""

    PLAIN = "plain"
    PLURAL = "plural"


@dataclass(frozen=True)
class EntryShape:
    """A translatable field declared on a group."""

    field: str
    kind: EntryKind = EntryKind.PLAIN
    notes: str = ""


@dataclass(frozen=True)
class ChildShape:
    """A nested group reached through a field of its parent."""

    field: str
    shape: "GroupShape"


@dataclass(frozen=True)
class GroupShape:
    """A named group of translatable fields and nested groups.

    ``entries`` and ``groups`` are kept in declaration order; that order is
    the order of the content tree and of the flattened entry index. Both are
    stored as tuples. No field may be named ``language``, the key that
    carries an instance's language identifier.
    """

    name: str
    label: str = ""
    description: str = ""
    entries: Sequence[EntryShape] = ()
    groups: Sequence[ChildShape] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "groups", tuple(self.groups))
        seen = set()
        for name in [entry.field for entry in self.entries] + [child.field for child in self.groups]:
            if name == LANGUAGE_FIELD:
                raise ValueError(
                    f"Group '{self.name}' declares reserved field '{LANGUAGE_FIELD}'."
                )
            if name in seen:
                raise ValueError(f"Group '{self.name}' declares field '{name}' twice.")
            seen.add(name)

    @property
    def display_name(self) -> str:
        return self.label or self.name

    def walk(self) -> Iterator["GroupShape"]:
        """Yield this shape and every nested shape, parents first."""

        yield self
        for child in self.groups:
            yield from child.shape.walk()


Accessor = Callable[[Any, str], Any]


def default_accessor(instance: Any, name: str) -> Any:
    """Read a field from a mapping or an attribute-bearing object.

    Raises ``KeyError`` or ``AttributeError`` when the field is absent.
    """

    if isinstance(instance, Mapping):
        return instance[name]
    return getattr(instance, name)
