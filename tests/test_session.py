"""Tests for the editing session."""

import pytest

from lingo.documents import load_instance
from lingo.errors import StructuralMismatch
from lingo.session import TranslationSession


@pytest.fixture
def session(shape, original, translation, registry, tmp_path):
    return TranslationSession(
        shape=shape,
        original=original,
        translation=translation,
        registry=registry,
        original_language="en",
        path=tmp_path / "app.es.json",
    )


class TestSession:
    def test_language_is_read_from_the_instance(self, session):
        assert session.tree.translation_language == "es"
        assert session.tree.original_language == "en"

    def test_structural_errors_propagate(self, shape, original, translation, registry):
        del translation["items"]
        with pytest.raises(StructuralMismatch):
            TranslationSession(
                shape=shape,
                original=original,
                translation=translation,
                registry=registry,
                original_language="en",
            )

    def test_edits_mark_changes(self, session):
        assert not session.any_changes
        session.index[0].set_translation("Buenas")
        assert session.any_changes

    def test_find_remembers_query_and_wraps(self, session):
        assert session.find_next("o", search_original=False).key == "greeting"
        assert session.find_next().key == "items"
        assert session.find_next().key == "greeting"
        assert session.find_prev().key == "items"

    def test_find_without_match(self, session):
        assert session.find_next("zzz") is None
        assert session.current is None

    def test_find_needs_a_query(self, session):
        assert session.find_next() is None
        assert session.find_prev("") is None
        assert session.current is None

    def test_nothing_to_search(self, session):
        assert session.find_next("Hello", search_original=False, search_translation=False) is None
        assert session.find_prev() is None

    def test_accept_moves_to_the_next_entry(self, session):
        session.select(session.index[0])
        following = session.accept()
        assert not session.index[0].is_stale()
        assert following is session.index[1]
        assert session.current is session.index[1]
        session.select(session.index[2])
        assert session.accept() is session.index[2]

    def test_accept_without_selection(self, session):
        assert session.accept() is None

    def test_next_stale(self, session):
        session.index[0].confirm()
        assert session.next_stale() is session.index[1]
        session.mark_all_up_to_date()
        assert session.next_stale() is None

    def test_summary(self, session):
        session.index[1].confirm()
        summary = session.summary()
        assert summary.total_entries == 3
        assert summary.stale_entries == 2
        assert summary.up_to_date_entries == 1
        assert summary.stale_keys == ["greeting", "errors.not_found"]
        assert summary.any_changes

    def test_save_clears_changes(self, session, shape):
        session.mark_all_up_to_date()
        assert session.any_changes
        path = session.save()
        assert not session.any_changes
        reloaded = load_instance(shape, path)
        assert reloaded["greeting"].old_original == "Hello"
        assert reloaded["items"].old_original == ["1 item", "{0} items"]

    def test_save_needs_a_path(self, shape, original, translation, registry):
        session = TranslationSession(
            shape=shape,
            original=original,
            translation=translation,
            registry=registry,
            original_language="en",
        )
        with pytest.raises(ValueError):
            session.save()


class TestPluralScenario:
    def test_confirm_then_edit_original(self, session, original):
        items = session.index.find("items")
        assert items.read_translation() == ["1 elemento", "{0} elementos"]
        items.confirm()
        assert not items.is_stale()
        original["items"].translations[1] = "{0} items total"
        assert items.is_stale()
        assert session.next_stale() is session.index[0]
