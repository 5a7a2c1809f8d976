"""
tilawa — verse and juz resolution for Quran reading applications.

Usage:
    from tilawa.core import ReadingStream, VerseResolver
    from tilawa.data import load_corpus

    resolver = VerseResolver(load_corpus("quran.json"))

    # Chapter and juz ranges
    verses = resolver.verses_of_chapter(36)
    juz_amma = resolver.verses_of_juz(30)

    # Infinite-scroll reading from Al-Kahf
    stream = ReadingStream(resolver)
    stream.initialize(18)
    stream.extend_forward()
    for item in stream.items:
        print(item.kind, item.chapter_id)
"""

from tilawa.models import (
    CHAPTERS,
    Chapter,
    ChapterHeaderItem,
    JuzBoundary,
    JuzInfo,
    ReadingItem,
    RevelationType,
    Verse,
    VerseItem,
    format_verse_key,
    parse_verse_key,
)
from tilawa.config import TilawaSettings, get_settings, configure
from tilawa.exceptions import (
    TilawaError,
    NotFoundError,
    ChapterNotFoundError,
    InvalidJuzError,
    VerseNotFoundError,
    InvalidVerseKeyError,
    CorpusInconsistencyError,
    QuranDataError,
    ConfigurationError,
    AudioDownloadError,
)

__version__ = "1.0.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "CHAPTERS",
    "Chapter",
    "ChapterHeaderItem",
    "JuzBoundary",
    "JuzInfo",
    "ReadingItem",
    "RevelationType",
    "Verse",
    "VerseItem",
    "format_verse_key",
    "parse_verse_key",
    # Config
    "TilawaSettings",
    "get_settings",
    "configure",
    # Exceptions
    "TilawaError",
    "NotFoundError",
    "ChapterNotFoundError",
    "InvalidJuzError",
    "VerseNotFoundError",
    "InvalidVerseKeyError",
    "CorpusInconsistencyError",
    "QuranDataError",
    "ConfigurationError",
    "AudioDownloadError",
]
