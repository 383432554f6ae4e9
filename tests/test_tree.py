"""Tests for content tree construction."""

from types import SimpleNamespace

import pytest

from lingo.documents import shape_from_dict, shape_to_dict
from lingo.entries import PlainEntry, PluralEntry
from lingo.errors import StructuralMismatch, UnknownLanguageError
from lingo.schema import ChildShape, EntryShape, GroupShape
from lingo.structures import TrString, TrStringNumbers
from lingo.tree import build_tree


def build(shape, original, translation, registry, **kwargs):
    kwargs.setdefault("original_language", "en")
    kwargs.setdefault("translation_language", "es")
    return build_tree(shape, original, translation, registry=registry, **kwargs)


class TestBuild:
    def test_shape_determines_tree(self, shape, original, translation, registry):
        tree = build(shape, original, translation, registry)
        root = tree.root
        assert root.name == "General"
        assert root.label == "General strings"
        assert root.description == "Strings used throughout the application."
        assert [entry.key for entry in root.entries] == ["greeting", "items"]
        assert isinstance(root.entries[0], PlainEntry)
        assert isinstance(root.entries[1], PluralEntry)
        assert root.entries[1].notes == "{0} is the number of items."
        assert [child.name for child in root.children] == ["Errors"]
        errors = root.children[0]
        assert errors.label == "Errors"
        assert errors.path == "errors"
        assert errors.parent is root
        assert [entry.key for entry in errors.entries] == ["errors.not_found"]
        assert errors.entries[0].group is errors
        assert [node.name for node in tree.groups()] == ["General", "Errors"]

    def test_entries_are_bound_to_both_instances(self, shape, original, translation, registry):
        tree = build(shape, original, translation, registry)
        greeting = tree.root.entries[0]
        assert greeting.read_original() == "Hello"
        assert greeting.read_translation() == "Hola"
        greeting.set_translation("¡Hola!")
        assert translation["greeting"].translation == "¡Hola!"
        assert original["greeting"].translation == "Hello"

    def test_number_systems_come_from_the_registry(self, shape, original, registry):
        translation = {
            "greeting": TrString(),
            "items": TrStringNumbers((True,), []),
            "errors": {"not_found": TrString()},
        }
        tree = build(shape, original, translation, registry, translation_language="ru")
        items = tree.root.entries[1]
        assert len(items.read_original_forms()) == 2
        assert len(items.read_translation()) == 3
        assert tree.translation_language == "ru"

    def test_attribute_instances(self, shape, registry):
        def instance(text, forms):
            return SimpleNamespace(
                greeting=TrString(text),
                items=TrStringNumbers((True,), forms),
                errors=SimpleNamespace(not_found=TrString(text)),
            )

        tree = build(shape, instance("Hi", ["1", "n"]), instance("", []), registry)
        assert tree.root.children[0].entries[0].read_original() == "Hi"

    def test_injected_accessor(self, registry):
        shape = GroupShape(name="Root", entries=[EntryShape("title")])
        fields = {("orig", "title"): TrString("Title"), ("trans", "title"): TrString("Titel")}

        def accessor(instance, name):
            return fields[(instance, name)]

        tree = build(shape, "orig", "trans", registry, accessor=accessor)
        assert tree.root.entries[0].read_translation() == "Titel"

    def test_empty_shape(self, registry):
        tree = build(GroupShape(name="Empty"), {}, {}, registry)
        assert tree.root.entries == []
        assert tree.root.children == []


class TestStructuralMismatch:
    def test_missing_entry_on_translation(self, shape, original, translation, registry):
        del translation["errors"]["not_found"]
        with pytest.raises(StructuralMismatch) as info:
            build(shape, original, translation, registry)
        assert info.value.path == "errors.not_found"
        assert "translation" in str(info.value)

    def test_missing_entry_on_original(self, shape, original, translation, registry):
        del original["greeting"]
        with pytest.raises(StructuralMismatch) as info:
            build(shape, original, translation, registry)
        assert info.value.path == "greeting"

    def test_missing_child_group(self, shape, original, translation, registry):
        del translation["errors"]
        with pytest.raises(StructuralMismatch) as info:
            build(shape, original, translation, registry)
        assert info.value.path == "errors"

    def test_wrong_kind(self, shape, original, translation, registry):
        translation["items"] = TrString("1 elemento")
        with pytest.raises(StructuralMismatch):
            build(shape, original, translation, registry)

    def test_plain_declared_but_plural_stored(self, shape, original, translation, registry):
        original["greeting"] = TrStringNumbers((True,), ["a", "b"])
        with pytest.raises(StructuralMismatch):
            build(shape, original, translation, registry)

    def test_plural_pattern_mismatch(self, shape, original, translation, registry):
        translation["items"] = TrStringNumbers((True, True), [])
        with pytest.raises(StructuralMismatch) as info:
            build(shape, original, translation, registry)
        assert info.value.path == "items"

    def test_unknown_language(self, shape, original, translation, registry):
        with pytest.raises(UnknownLanguageError):
            build(shape, original, translation, registry, translation_language="xx")


class TestShape:
    def test_duplicate_fields_rejected(self):
        with pytest.raises(ValueError):
            GroupShape(
                name="Root",
                entries=[EntryShape("a")],
                groups=[ChildShape("a", GroupShape(name="Child"))],
            )

    def test_walk(self, shape):
        assert [group.name for group in shape.walk()] == ["General", "Errors"]
        assert shape.display_name == "General strings"
        assert shape.groups[0].shape.display_name == "Errors"

    def test_language_field_is_reserved(self):
        with pytest.raises(ValueError):
            GroupShape(name="Menu", entries=[EntryShape("language"), EntryShape("quit")])
        with pytest.raises(ValueError):
            GroupShape(name="Menu", groups=[ChildShape("language", GroupShape(name="Names"))])

    def test_shapes_are_immutable_and_hashable(self, shape):
        assert isinstance(shape.entries, tuple)
        assert isinstance(shape.groups, tuple)
        assert hash(shape) == hash(shape_from_dict(shape_to_dict(shape)))
        assert len({shape, shape.groups[0].shape}) == 2
