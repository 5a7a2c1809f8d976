"""
Pydantic data models for the tilawa library.

These models represent the core data structures used throughout the library:
- Chapter: Chapter (Surah) metadata
- JuzBoundary / JuzInfo: Juz start markers and range summaries
- Verse: A single verse with its derived juz
- ChapterHeaderItem / VerseItem: Reading window items
"""

from tilawa.models.chapter import (
    CHAPTER_COUNT,
    CHAPTERS,
    OPENING_FORMULA,
    TOTAL_VERSES,
    Chapter,
    RevelationType,
)
from tilawa.models.juz import JUZ_BOUNDARIES, JUZ_COUNT, JuzBoundary, JuzInfo
from tilawa.models.verse import Verse, audio_filename, format_verse_key, parse_verse_key
from tilawa.models.reading import (
    ChapterHeaderItem,
    ReadingItem,
    VerseItem,
    reading_items_adapter,
)

__all__ = [
    "CHAPTER_COUNT",
    "CHAPTERS",
    "OPENING_FORMULA",
    "TOTAL_VERSES",
    "Chapter",
    "RevelationType",
    "JUZ_BOUNDARIES",
    "JUZ_COUNT",
    "JuzBoundary",
    "JuzInfo",
    "Verse",
    "audio_filename",
    "format_verse_key",
    "parse_verse_key",
    "ChapterHeaderItem",
    "ReadingItem",
    "VerseItem",
    "reading_items_adapter",
]
