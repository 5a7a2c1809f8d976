"""
Custom exceptions for the tilawa library.

All exceptions inherit from TilawaError for easy catching of library-specific errors.
"""

from typing import Any


class TilawaError(Exception):
    """Base exception for all tilawa errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class NotFoundError(TilawaError):
    """Raised when a chapter, juz or verse lies outside the corpus."""


class ChapterNotFoundError(NotFoundError):
    """Raised when a chapter id is outside 1..114."""

    def __init__(self, chapter_id: int, context: dict[str, Any] | None = None) -> None:
        ctx = context or {}
        ctx["chapter_id"] = chapter_id
        super().__init__("Chapter not found", ctx)
        self.chapter_id = chapter_id


class InvalidJuzError(NotFoundError):
    """Raised when a juz number is outside 1..30."""

    def __init__(self, juz_number: int) -> None:
        super().__init__("Juz number out of range", {"juz_number": juz_number})
        self.juz_number = juz_number


class VerseNotFoundError(NotFoundError):
    """Raised when a verse number does not exist in its chapter."""

    def __init__(self, chapter_id: int, verse_number: int) -> None:
        super().__init__(
            "Verse not found",
            {"chapter_id": chapter_id, "verse_number": verse_number},
        )
        self.chapter_id = chapter_id
        self.verse_number = verse_number


class InvalidVerseKeyError(TilawaError):
    """Raised when a verse key is not of the form "chapter:verse"."""

    def __init__(self, verse_key: str) -> None:
        super().__init__("Malformed verse key", {"verse_key": verse_key})
        self.verse_key = verse_key


class CorpusInconsistencyError(TilawaError):
    """
    Raised when the static Quran data contradicts itself.

    Examples are a chapter declared in the index with no verses in the
    text table, or juz boundaries that do not partition the verse space.
    Only raised in strict mode; otherwise the inconsistency is logged.
    """

    def __init__(
        self,
        message: str,
        chapter_id: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if chapter_id is not None:
            ctx["chapter_id"] = chapter_id
        super().__init__(message, ctx)
        self.chapter_id = chapter_id


class QuranDataError(TilawaError):
    """Raised when Quran reference data cannot be loaded."""

    def __init__(self, message: str = "Failed to load Quran reference data.") -> None:
        super().__init__(message)


class ConfigurationError(TilawaError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        setting_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if setting_name:
            ctx["setting"] = setting_name
        super().__init__(message, ctx)
        self.setting_name = setting_name


class AudioDownloadError(TilawaError):
    """Raised when a recitation audio file cannot be fetched."""

    def __init__(self, verse_key: str, url: str, reason: str | None = None) -> None:
        message = f"Cannot download audio for {verse_key}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"url": url})
        self.verse_key = verse_key
        self.url = url
