"""Tests for chapter/juz verse resolution."""

import pytest

from tilawa.core import VerseResolver, check_juz_partition, juz_of_position
from tilawa.data import QuranCorpus
from tilawa.exceptions import (
    ChapterNotFoundError,
    CorpusInconsistencyError,
    InvalidJuzError,
    InvalidVerseKeyError,
    NotFoundError,
    QuranDataError,
    VerseNotFoundError,
)
from tilawa.models import CHAPTERS, JUZ_BOUNDARIES, JuzBoundary, OPENING_FORMULA

from conftest import make_records


def _boundaries_with(juz_number, chapter, verse):
    return [
        JuzBoundary(juz_number=juz_number, start_chapter=chapter, start_verse=verse)
        if b.juz_number == juz_number else b
        for b in JUZ_BOUNDARIES
    ]


class TestChapters:
    def test_every_chapter_has_its_declared_verses(self, resolver):
        for chapter_id in range(1, 115):
            verses = resolver.verses_of_chapter(chapter_id)
            assert len(verses) == resolver.chapter_info(chapter_id).total_verses
            assert [v.verse_number for v in verses] == list(range(1, len(verses) + 1))
            assert all(v.chapter_id == chapter_id for v in verses)

    @pytest.mark.parametrize("chapter_id", [0, -1, 115])
    def test_unknown_chapter(self, resolver, chapter_id):
        with pytest.raises(ChapterNotFoundError) as exc:
            resolver.verses_of_chapter(chapter_id)
        assert isinstance(exc.value, NotFoundError)
        assert exc.value.context["chapter_id"] == chapter_id
        with pytest.raises(ChapterNotFoundError):
            resolver.chapter_info(chapter_id)

    def test_verses_carry_text_and_key(self, resolver):
        verse = resolver.verses_of_chapter(2)[254]
        assert verse.verse_key == "2:255"
        assert verse.text == "آية 2:255"
        assert verse.juz_number == 3

    def test_returned_list_is_a_copy(self, resolver):
        resolver.verses_of_chapter(1).clear()
        assert len(resolver.verses_of_chapter(1)) == 7

    def test_chapter_info(self, resolver):
        info = resolver.chapter_info(18)
        assert info.name == "Al-Kahf"
        assert info.arabic_name == "الكهف"
        assert info.total_verses == 110

    def test_all_chapters(self, resolver):
        chapters = resolver.all_chapters()
        assert [c.id for c in chapters] == list(range(1, 115))

    def test_opening_formula(self, resolver):
        assert resolver.needs_opening_formula(1) is False
        assert resolver.needs_opening_formula(9) is False
        assert resolver.needs_opening_formula(2) is True
        assert resolver.opening_formula() == OPENING_FORMULA
        # never injected into verse text
        assert resolver.verses_of_chapter(2)[0].text == "آية 2:1"


class TestJuz:
    def test_juz_one_range(self, resolver):
        verses = resolver.verses_of_juz(1)
        assert verses[0].verse_key == "1:1"
        assert verses[-1].verse_key == "2:141"
        assert len(verses) == 148

    def test_juz_thirty_runs_to_end(self, resolver):
        verses = resolver.verses_of_juz(30)
        assert verses[0].verse_key == "78:1"
        assert verses[-1].verse_key == "114:6"

    def test_juz_ending_at_chapter_boundary(self, resolver):
        verses = resolver.verses_of_juz(14)
        assert verses[0].verse_key == "15:1"
        assert verses[-1].verse_key == "16:128"

    def test_juzs_partition_the_corpus(self, resolver):
        keys = []
        for juz_number in range(1, 31):
            verses = resolver.verses_of_juz(juz_number)
            assert verses, juz_number
            assert all(v.juz_number == juz_number for v in verses)
            keys.extend(v.verse_key for v in verses)

        assert len(keys) == 6236
        assert len(set(keys)) == len(keys)
        expected = [
            v.verse_key for c in range(1, 115) for v in resolver.verses_of_chapter(c)
        ]
        assert keys == expected

    @pytest.mark.parametrize("juz_number", [0, 31, -5])
    def test_invalid_juz(self, resolver, juz_number):
        with pytest.raises(InvalidJuzError) as exc:
            resolver.verses_of_juz(juz_number)
        assert isinstance(exc.value, NotFoundError)

    def test_juz_of_agrees_with_ranges(self, resolver):
        for chapter_id in range(1, 115):
            for verse in resolver.verses_of_chapter(chapter_id):
                assert resolver.juz_of(verse.chapter_id, verse.verse_number) == verse.juz_number

    @pytest.mark.parametrize(
        "chapter_id, verse_number, juz_number",
        [
            (1, 1, 1),
            (2, 141, 1),
            (2, 142, 2),
            (2, 252, 2),
            (2, 253, 3),
            (16, 128, 14),
            (17, 1, 15),
            (77, 50, 29),
            (78, 1, 30),
            (114, 6, 30),
        ],
    )
    def test_juz_of_at_boundaries(self, resolver, chapter_id, verse_number, juz_number):
        assert resolver.juz_of(chapter_id, verse_number) == juz_number

    def test_juz_of_rejects_missing_verse(self, resolver):
        with pytest.raises(VerseNotFoundError):
            resolver.juz_of(2, 287)
        with pytest.raises(VerseNotFoundError):
            resolver.juz_of(2, 0)
        with pytest.raises(ChapterNotFoundError):
            resolver.juz_of(115, 1)

    def test_juz_of_position_without_checks(self):
        assert juz_of_position(2, 142) == 2
        assert juz_of_position(0, 0) == 1

    def test_juz_info(self, resolver):
        info = resolver.juz_info(1)
        assert (info.start_key, info.end_key, info.total_verses) == ("1:1", "2:141", 148)
        assert resolver.juz_info(14).end_key == "16:128"
        assert resolver.juz_info(30).end_key == "114:6"

    def test_juz_info_totals_match_ranges(self, resolver):
        for juz_number in range(1, 31):
            info = resolver.juz_info(juz_number)
            assert info.total_verses == len(resolver.verses_of_juz(juz_number))

    def test_juz_info_invalid(self, resolver):
        with pytest.raises(InvalidJuzError):
            resolver.juz_info(31)


class TestGetVerse:
    def test_by_key(self, resolver):
        assert resolver.get_verse("2:255").juz_number == 3

    def test_by_numbers(self, resolver):
        assert resolver.get_verse(114, 6).verse_key == "114:6"

    def test_missing_verse(self, resolver):
        with pytest.raises(VerseNotFoundError):
            resolver.get_verse("1:8")

    def test_malformed_key(self, resolver):
        with pytest.raises(InvalidVerseKeyError):
            resolver.get_verse("al-fatiha")


class TestPartitionCheck:
    def test_builtin_table_is_valid(self):
        assert check_juz_partition(JUZ_BOUNDARIES, CHAPTERS) == []

    def test_out_of_order_start(self):
        problems = check_juz_partition(_boundaries_with(5, 2, 1), CHAPTERS)
        assert any("does not follow" in p for p in problems)

    def test_start_at_missing_verse(self):
        problems = check_juz_partition(_boundaries_with(2, 1, 8), CHAPTERS)
        assert any("missing verse" in p for p in problems)

    def test_first_juz_must_start_at_opening(self):
        problems = check_juz_partition(_boundaries_with(1, 1, 2), CHAPTERS)
        assert any("must start at 1:1" in p for p in problems)

    def test_missing_juz(self):
        assert check_juz_partition(JUZ_BOUNDARIES[:29], CHAPTERS)


class TestInconsistentCorpus:
    @pytest.fixture
    def gappy_corpus(self):
        return QuranCorpus.from_records(make_records(skip_chapters={5}, counts={6: 100}))

    def test_strict_raises_for_empty_chapter(self, gappy_corpus):
        resolver = VerseResolver(gappy_corpus, strict=True)
        with pytest.raises(CorpusInconsistencyError) as exc:
            resolver.verses_of_chapter(5)
        assert exc.value.chapter_id == 5

    def test_lenient_degrades_to_empty(self, gappy_corpus, caplog):
        resolver = VerseResolver(gappy_corpus, strict=False)
        assert resolver.verses_of_chapter(5) == []
        assert "no verses" in caplog.text

    def test_lenient_count_mismatch_returns_present_verses(self, gappy_corpus, caplog):
        resolver = VerseResolver(gappy_corpus, strict=False)
        assert len(resolver.verses_of_chapter(6)) == 100
        assert "Verse count differs" in caplog.text

    def test_lenient_extra_verses_are_dropped(self, caplog):
        corpus = QuranCorpus.from_records(make_records(counts={1: 8}))
        resolver = VerseResolver(corpus, strict=False)
        verses = resolver.verses_of_chapter(1)
        assert [v.verse_key for v in verses][-1] == "1:7"
        assert len(verses) == 7
        for verse in verses:
            assert resolver.juz_of(verse.chapter_id, verse.verse_number) == verse.juz_number
        with pytest.raises(VerseNotFoundError):
            resolver.get_verse("1:8")
        assert "Verse count differs" in caplog.text

    def test_strict_count_mismatch(self, gappy_corpus):
        with pytest.raises(CorpusInconsistencyError):
            VerseResolver(gappy_corpus, strict=True).verses_of_chapter(6)

    def test_strict_rejects_bad_boundaries(self, corpus):
        with pytest.raises(CorpusInconsistencyError):
            VerseResolver(corpus, strict=True, boundaries=_boundaries_with(5, 2, 1))

    def test_lenient_bad_boundaries_yield_empty_juz(self, corpus, caplog):
        resolver = VerseResolver(corpus, strict=False, boundaries=_boundaries_with(5, 2, 1))
        assert resolver.verses_of_juz(3) == []
        assert "do not partition" in caplog.text

    def test_strict_mode_from_settings(self, corpus, monkeypatch):
        monkeypatch.setenv("TILAWA_STRICT", "true")
        with pytest.raises(CorpusInconsistencyError):
            VerseResolver(corpus, boundaries=_boundaries_with(5, 2, 1))


def test_default_corpus_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("TILAWA_QURAN_JSON_PATH", str(tmp_path / "missing.json"))
    with pytest.raises(QuranDataError):
        VerseResolver()
