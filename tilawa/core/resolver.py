"""
Verse resolution: chapter and juz ranges, and juz assignment per verse.

All lookups are synchronous and in memory. A resolver wraps one loaded
corpus together with the chapter index and the juz boundary table.
"""

from typing import Iterable, Optional, Sequence

from tilawa._logging import get_logger, log_error
from tilawa.config import get_settings
from tilawa.data.quran import QuranCorpus, load_corpus
from tilawa.exceptions import (
    ChapterNotFoundError,
    CorpusInconsistencyError,
    InvalidJuzError,
    VerseNotFoundError,
)
from tilawa.models.chapter import CHAPTER_COUNT, CHAPTERS, OPENING_FORMULA, Chapter
from tilawa.models.juz import JUZ_BOUNDARIES, JUZ_COUNT, JuzBoundary, JuzInfo
from tilawa.models.verse import Verse, parse_verse_key

logger = get_logger(__name__)


def juz_of_position(
    chapter_id: int,
    verse_number: int,
    boundaries: Sequence[JuzBoundary] = JUZ_BOUNDARIES,
) -> int:
    """
    Find the juz a (chapter, verse) position falls in.

    Scans the boundaries from the last juz down and returns the first one
    whose start is at or before the position. No range checking is done
    here; see VerseResolver.juz_of.

    Args:
        chapter_id: Chapter number
        verse_number: Verse number within the chapter
        boundaries: Juz boundaries ordered by juz number

    Returns:
        Juz number (1 if the position precedes every boundary)
    """
    position = (chapter_id, verse_number)
    for boundary in reversed(boundaries):
        if boundary.position <= position:
            return boundary.juz_number
    return 1


def check_juz_partition(
    boundaries: Sequence[JuzBoundary],
    chapters: dict[int, Chapter],
) -> list[str]:
    """
    Check that juz boundaries partition the verse space.

    The boundaries must be numbered 1..30 in order, the first must start
    at 1:1, starts must be strictly increasing, and every start must name
    an existing verse. Together with contiguous verse numbering this
    leaves no gap and no overlap between juz ranges.

    Returns:
        Human-readable problems; empty when the table is a valid partition
    """
    problems = []
    numbers = [b.juz_number for b in boundaries]
    if numbers != list(range(1, JUZ_COUNT + 1)):
        problems.append(f"juz numbers must be 1..{JUZ_COUNT} in order, got {numbers}")
        return problems

    if boundaries[0].position != (1, 1):
        problems.append(f"juz 1 must start at 1:1, starts at {boundaries[0].position}")

    for previous, current in zip(boundaries, boundaries[1:]):
        if current.position <= previous.position:
            problems.append(
                f"juz {current.juz_number} start {current.position} does not follow "
                f"juz {previous.juz_number} start {previous.position}"
            )

    for boundary in boundaries:
        chapter = chapters.get(boundary.start_chapter)
        if chapter is None or boundary.start_verse > chapter.total_verses:
            problems.append(
                f"juz {boundary.juz_number} starts at missing verse "
                f"{boundary.start_chapter}:{boundary.start_verse}"
            )

    return problems


class VerseResolver:
    """
    Resolves verses for chapters and juzs.

    Corpus inconsistencies (a chapter with no verses in the text table, a
    verse count that disagrees with the index, or a boundary table that
    does not partition the corpus) raise CorpusInconsistencyError in
    strict mode. Otherwise they are logged and the affected call returns
    what it can, an empty list at worst.

    Example:
        resolver = VerseResolver()
        verses = resolver.verses_of_juz(30)
        print(verses[0].verse_key)  # "78:1"
    """

    def __init__(
        self,
        corpus: Optional[QuranCorpus] = None,
        strict: Optional[bool] = None,
        chapters: Optional[dict[int, Chapter]] = None,
        boundaries: Optional[Iterable[JuzBoundary]] = None,
    ) -> None:
        """
        Args:
            corpus: Verse text table (default: load_corpus())
            strict: Raise on corpus inconsistencies (default: settings.strict)
            chapters: Chapter index (default: built-in index)
            boundaries: Juz boundary table (default: built-in table)
        """
        self.corpus = corpus if corpus is not None else load_corpus()
        self.strict = get_settings().strict if strict is None else strict
        self._chapters = dict(chapters) if chapters is not None else CHAPTERS
        self._boundaries = tuple(
            sorted(boundaries if boundaries is not None else JUZ_BOUNDARIES,
                   key=lambda b: b.juz_number)
        )
        self._chapter_cache: dict[int, tuple[Verse, ...]] = {}

        problems = check_juz_partition(self._boundaries, self._chapters)
        self._boundaries_valid = not problems
        if problems:
            self._inconsistent(
                "Juz boundaries do not partition the corpus",
                problems="; ".join(problems),
            )

    def _inconsistent(self, message: str, chapter_id: Optional[int] = None, **context) -> None:
        if self.strict:
            raise CorpusInconsistencyError(message, chapter_id=chapter_id, context=context)
        if chapter_id is not None:
            context["chapter_id"] = chapter_id
        log_error(message, **context)

    def _require_chapter(self, chapter_id: int) -> Chapter:
        chapter = self._chapters.get(chapter_id)
        if chapter is None or not 1 <= chapter_id <= CHAPTER_COUNT:
            raise ChapterNotFoundError(chapter_id)
        return chapter

    def chapter_info(self, chapter_id: int) -> Chapter:
        """
        Get metadata for a chapter.

        Raises:
            ChapterNotFoundError: If chapter_id is outside 1..114
        """
        return self._require_chapter(chapter_id)

    def all_chapters(self) -> list[Chapter]:
        """Metadata for every chapter, in id order."""
        return [self._chapters[i] for i in sorted(self._chapters)]

    @staticmethod
    def needs_opening_formula(chapter_id: int) -> bool:
        """Whether a chapter is preceded by the Bismillah (all but 1 and 9)."""
        return chapter_id != 1 and chapter_id != 9

    @staticmethod
    def opening_formula() -> str:
        """The Bismillah text, for display above a chapter."""
        return OPENING_FORMULA

    def juz_of(self, chapter_id: int, verse_number: int) -> int:
        """
        Get the juz a verse belongs to.

        Raises:
            ChapterNotFoundError: If chapter_id is outside 1..114
            VerseNotFoundError: If the chapter has no such verse
        """
        chapter = self._require_chapter(chapter_id)
        if not 1 <= verse_number <= chapter.total_verses:
            raise VerseNotFoundError(chapter_id, verse_number)
        return juz_of_position(chapter_id, verse_number, self._boundaries)

    def verses_of_chapter(self, chapter_id: int) -> list[Verse]:
        """
        Get every verse of a chapter in verse order, tagged with its juz.

        Args:
            chapter_id: Chapter number (1-114)

        Returns:
            List of Verse objects; empty if the text table has no verses
            for the chapter and strict mode is off; never longer than the
            chapter's indexed verse count

        Raises:
            ChapterNotFoundError: If chapter_id is outside 1..114
            CorpusInconsistencyError: In strict mode, if the text table
                disagrees with the chapter index
        """
        chapter = self._require_chapter(chapter_id)

        cached = self._chapter_cache.get(chapter_id)
        if cached is not None:
            return list(cached)

        texts = self.corpus.verse_texts(chapter_id)
        if not texts:
            self._inconsistent("Chapter has no verses in the text table", chapter_id=chapter_id)
            return []
        if len(texts) != chapter.total_verses:
            self._inconsistent(
                "Verse count differs from chapter index",
                chapter_id=chapter_id,
                expected=chapter.total_verses,
                found=len(texts),
            )
            # verses past the index count are not addressable by juz_of/get_verse
            texts = texts[:chapter.total_verses]

        verses = tuple(
            Verse(
                chapter_id=chapter_id,
                verse_number=number,
                juz_number=juz_of_position(chapter_id, number, self._boundaries),
                text=text,
            )
            for number, text in enumerate(texts, start=1)
        )
        self._chapter_cache[chapter_id] = verses
        return list(verses)

    def verses_of_juz(self, juz_number: int) -> list[Verse]:
        """
        Get every verse of a juz, in reading order.

        Walks chapters upward from the juz start and stops just before the
        next juz start (or at the end of the corpus for juz 30).

        Args:
            juz_number: Juz number (1-30)

        Returns:
            List of Verse objects

        Raises:
            InvalidJuzError: If juz_number is outside 1..30
        """
        if not 1 <= juz_number <= JUZ_COUNT:
            raise InvalidJuzError(juz_number)
        if not self._boundaries_valid:
            log_error("Juz lookup skipped, boundary table is invalid", juz_number=juz_number)
            return []

        start = self._boundaries[juz_number - 1]
        end = self._boundaries[juz_number] if juz_number < JUZ_COUNT else None

        verses: list[Verse] = []
        for chapter_id in range(start.start_chapter, CHAPTER_COUNT + 1):
            if end is not None and chapter_id > end.start_chapter:
                break
            for verse in self.verses_of_chapter(chapter_id):
                if verse.position < start.position:
                    continue
                if end is not None and verse.position >= end.position:
                    break
                verses.append(verse)

        logger.debug(f"Resolved juz {juz_number}: {len(verses)} verses")
        return verses

    def juz_info(self, juz_number: int) -> JuzInfo:
        """
        Summarize a juz range from the boundary table and chapter index.

        Raises:
            InvalidJuzError: If juz_number is outside 1..30
        """
        if not 1 <= juz_number <= JUZ_COUNT:
            raise InvalidJuzError(juz_number)
        if not self._boundaries_valid:
            raise CorpusInconsistencyError("Juz boundary table is invalid")

        start = self._boundaries[juz_number - 1]
        if juz_number < JUZ_COUNT:
            following = self._boundaries[juz_number]
            if following.start_verse > 1:
                end_chapter, end_verse = following.start_chapter, following.start_verse - 1
            else:
                end_chapter = following.start_chapter - 1
                end_verse = self._chapters[end_chapter].total_verses
        else:
            end_chapter = max(self._chapters)
            end_verse = self._chapters[end_chapter].total_verses

        if start.start_chapter == end_chapter:
            total = end_verse - start.start_verse + 1
        else:
            total = self._chapters[start.start_chapter].total_verses - start.start_verse + 1
            total += sum(
                self._chapters[c].total_verses
                for c in range(start.start_chapter + 1, end_chapter)
            )
            total += end_verse

        return JuzInfo(
            juz_number=juz_number,
            start_chapter=start.start_chapter,
            start_verse=start.start_verse,
            end_chapter=end_chapter,
            end_verse=end_verse,
            total_verses=total,
        )

    def get_verse(self, chapter_or_key: int | str, verse_number: Optional[int] = None) -> Verse:
        """
        Get a single verse by key ("2:255") or by chapter and verse number.

        Raises:
            InvalidVerseKeyError: If a string key is malformed
            ChapterNotFoundError: If the chapter does not exist
            VerseNotFoundError: If the verse does not exist
        """
        if isinstance(chapter_or_key, str):
            chapter_id, verse_number = parse_verse_key(chapter_or_key)
        else:
            chapter_id = chapter_or_key
            if verse_number is None:
                raise TypeError("verse_number is required when passing a chapter id")

        verses = self.verses_of_chapter(chapter_id)
        if not 1 <= verse_number <= len(verses):
            raise VerseNotFoundError(chapter_id, verse_number)
        return verses[verse_number - 1]
