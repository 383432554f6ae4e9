"""Tests for plain and plural translatable entries."""

import pytest

from lingo.entries import PlainEntry, PluralEntry, fold_for_search
from lingo.errors import OutOfRangeCombination, StructuralMismatch
from lingo.numbers import EastSlavicNumberSystem, OneOtherNumberSystem
from lingo.structures import TrString, TrStringNumbers


def plain(original="Open file", translation=""):
    orig = TrString(original)
    trans = TrString(translation)
    return PlainEntry("open_file", "open_file", orig, trans), orig, trans


def plural(original_forms=("1 item", "{0} items"), translation_forms=(), translation_system=None):
    orig = TrStringNumbers((True,), list(original_forms))
    trans = TrStringNumbers((True,), list(translation_forms))
    entry = PluralEntry(
        "items",
        "items",
        orig,
        trans,
        OneOtherNumberSystem(),
        translation_system or OneOtherNumberSystem(),
    )
    return entry, orig, trans


class TestPlainStaleness:
    def test_new_entry_is_stale(self):
        entry, _, _ = plain()
        assert entry.snapshot is None
        assert entry.is_stale()

    def test_confirm_clears_staleness(self):
        entry, _, trans = plain(translation="Datei öffnen")
        entry.confirm()
        assert not entry.is_stale()
        assert trans.old_original == "Open file"

    def test_mark_up_to_date_matches_confirm(self):
        entry, _, _ = plain()
        entry.mark_up_to_date()
        assert not entry.is_stale()

    def test_snapshot_comparison_not_versioning(self):
        entry, orig, _ = plain()
        entry.confirm()
        orig.translation = "Open a file"
        assert entry.is_stale()
        assert entry.previous_original() == "Open file"
        orig.translation = "Open file"
        assert not entry.is_stale()
        assert entry.previous_original() is None

    def test_set_translation_does_not_touch_staleness(self):
        entry, _, trans = plain()
        entry.set_translation("Datei öffnen")
        assert trans.translation == "Datei öffnen"
        assert entry.read_translation() == "Datei öffnen"
        assert entry.is_stale()
        entry.confirm()
        entry.set_translation("Öffnen")
        assert not entry.is_stale()

    def test_listeners_are_notified(self):
        entry, _, _ = plain()
        touched = []
        entry.subscribe(touched.append)
        entry.set_translation("x")
        entry.confirm()
        assert touched == [entry, entry]

    def test_untranslated_reads_as_empty(self):
        orig = TrString("Open")
        trans = TrString(None)
        entry = PlainEntry("k", "k", orig, trans)
        assert entry.read_translation() == ""


class TestPluralStaleness:
    def test_confirm_then_original_edit(self):
        entry, orig, trans = plural(translation_forms=["1 elemento", "{0} elementos"])
        assert entry.is_stale()
        entry.confirm()
        assert not entry.is_stale()
        orig.translations[1] = "{0} items total"
        assert entry.is_stale()
        assert entry.previous_original() == ["1 item", "{0} items"]
        orig.translations[1] = "{0} items"
        assert not entry.is_stale()

    def test_snapshot_is_a_copy(self):
        entry, orig, trans = plural()
        entry.confirm()
        assert trans.old_original == orig.translations
        assert trans.old_original is not orig.translations

    def test_translation_is_padded_to_row_count(self):
        entry, _, _ = plural(translation_system=EastSlavicNumberSystem())
        assert entry.read_translation() == ["", "", ""]
        assert len(entry.read_original_forms()) == 2

    def test_set_translation(self):
        entry, _, trans = plural(translation_system=EastSlavicNumberSystem())
        entry.set_translation(["{0} предмет"])
        assert trans.translations == ["{0} предмет", "", ""]
        assert entry.is_stale()

    def test_too_many_forms(self):
        entry, _, _ = plural()
        with pytest.raises(OutOfRangeCombination):
            entry.set_translation(["a", "b", "c"])

    def test_pattern_mismatch_is_structural(self):
        orig = TrStringNumbers((True, False), ["a", "b"])
        trans = TrStringNumbers((True,), [])
        with pytest.raises(StructuralMismatch) as info:
            PluralEntry("k", "k", orig, trans, OneOtherNumberSystem(), OneOtherNumberSystem())
        assert info.value.path == "k"

    def test_rows_and_headings(self):
        orig = TrStringNumbers((False, True), ["{1} file in {0}", "{1} files in {0}"])
        trans = TrStringNumbers((False, True), ["{1} файл в {0}", "{1} файла в {0}", "{1} файлов в {0}"])
        entry = PluralEntry("k", "k", orig, trans, OneOtherNumberSystem(), EastSlavicNumberSystem())
        assert entry.placeholder_headings() == ["{1}"]
        assert entry.numeric_placeholder_count == 1
        assert entry.original_rows() == [(("one",), "{1} file in {0}"), (("other",), "{1} files in {0}")]
        assert [labels for labels, _ in entry.translation_rows()] == [("one",), ("few",), ("many",)]
        assert entry.resolve_original("docs", 3) == "3 files in docs"
        assert entry.resolve_translation("docs", 3) == "3 файла в docs"
        assert entry.resolve_translation("docs", 5) == "5 файлов в docs"


class TestSearch:
    def test_fold(self):
        assert fold_for_search("Café") == "cafe"
        assert fold_for_search("ＡＢＣ") == "abc"

    def test_case_accent_and_width_insensitive(self):
        entry, _, _ = plain(original="Résumé saved", translation="Lebenslauf gespeichert")
        assert entry.matches_substring("RESUME", True, False)
        assert entry.matches_substring("ｓａｖｅｄ", True, False)
        assert entry.matches_substring("lebenslauf", False, True)
        assert not entry.matches_substring("lebenslauf", True, False)
        assert not entry.matches_substring("resume", False, True)

    def test_both_flags_false_never_matches(self):
        entry, _, _ = plain(original="abc", translation="abc")
        assert not entry.matches_substring("abc", False, False)
        assert not entry.matches_substring("", False, False)
        plural_entry, _, _ = plural()
        assert not plural_entry.matches_substring("item", False, False)

    def test_plural_searches_every_form(self):
        entry, _, _ = plural(translation_forms=["1 elemento", "{0} elementos"])
        assert entry.matches_substring("{0} ITEMS", True, False)
        assert entry.matches_substring("elementos", False, True)
        assert not entry.matches_substring("elementos", True, False)
