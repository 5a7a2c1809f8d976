"""
Verse (Ayah) data model and verse key helpers.

The verse key ``"{chapter_id}:{verse_number}"`` is the stable identifier
shared with bookmark storage and the audio cache.
"""

import re

from pydantic import BaseModel, Field, computed_field

from tilawa.exceptions import InvalidVerseKeyError

_VERSE_KEY_RE = re.compile(r"^\s*(\d{1,3})\s*:\s*(\d{1,3})\s*$")


def format_verse_key(chapter_id: int, verse_number: int) -> str:
    """Build the "chapter:verse" key for a verse."""
    return f"{chapter_id}:{verse_number}"


def parse_verse_key(verse_key: str) -> tuple[int, int]:
    """
    Split a verse key into (chapter_id, verse_number).

    Args:
        verse_key: Key such as "2:255"

    Returns:
        Tuple of (chapter_id, verse_number)

    Raises:
        InvalidVerseKeyError: If the key is not of the form "chapter:verse"
    """
    match = _VERSE_KEY_RE.match(verse_key) if isinstance(verse_key, str) else None
    if match is None:
        raise InvalidVerseKeyError(str(verse_key))
    chapter_id, verse_number = int(match.group(1)), int(match.group(2))
    if chapter_id < 1 or verse_number < 1:
        raise InvalidVerseKeyError(verse_key)
    return chapter_id, verse_number


def audio_filename(verse_key: str) -> str:
    """Recitation file name for a verse, e.g. "1:1" -> "001001.mp3"."""
    chapter_id, verse_number = parse_verse_key(verse_key)
    return f"{chapter_id:03d}{verse_number:03d}.mp3"


class Verse(BaseModel):
    """
    Represents a single verse of the Quran.

    Attributes:
        chapter_id: Chapter number (1-114)
        verse_number: Verse number within the chapter (1-based)
        juz_number: Juz (1-30) the verse falls in
        text: The Arabic text of the verse
    """

    chapter_id: int = Field(
        ...,
        description="Chapter number (1-114)",
        ge=1,
        le=114,
    )
    verse_number: int = Field(
        ...,
        description="Verse number within the chapter (1-based)",
        ge=1,
    )
    juz_number: int = Field(
        ...,
        description="Juz the verse belongs to (1-30)",
        ge=1,
        le=30,
    )
    text: str = Field(
        default="",
        description="The Arabic text of the verse",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "chapter_id": 1,
                    "verse_number": 1,
                    "juz_number": 1,
                    "text": "بِسۡمِ ٱللَّهِ ٱلرَّحۡمَٰنِ ٱلرَّحِيمِ",
                }
            ]
        },
    }

    @computed_field
    @property
    def verse_key(self) -> str:
        """Stable "chapter:verse" identifier."""
        return format_verse_key(self.chapter_id, self.verse_number)

    @property
    def position(self) -> tuple[int, int]:
        return (self.chapter_id, self.verse_number)

    def __str__(self) -> str:
        return f"Verse({self.verse_key})"

    def __repr__(self) -> str:
        return f"Verse(verse_key={self.verse_key!r}, juz_number={self.juz_number})"
