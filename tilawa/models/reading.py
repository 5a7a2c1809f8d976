"""
Reading window item models.

A reading window is an ordered list of items, each either a chapter
header or a verse. Items are a tagged union on ``kind``.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from tilawa.models.verse import Verse


class ChapterHeaderItem(BaseModel):
    """Header shown at the top of a chapter block."""

    kind: Literal["header"] = "header"
    chapter_id: int = Field(..., ge=1, le=114)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """List key, unique within a window."""
        return f"header-{self.chapter_id}"


class VerseItem(BaseModel):
    """A verse row inside a chapter block."""

    kind: Literal["verse"] = "verse"
    verse: Verse

    model_config = {"frozen": True}

    @property
    def verse_key(self) -> str:
        return self.verse.verse_key

    @property
    def chapter_id(self) -> int:
        return self.verse.chapter_id

    @property
    def key(self) -> str:
        return self.verse.verse_key

    @classmethod
    def from_verse(cls, verse: Verse) -> "VerseItem":
        return cls(verse=verse)


ReadingItem = Annotated[
    Union[ChapterHeaderItem, VerseItem],
    Field(discriminator="kind"),
]

reading_items_adapter: TypeAdapter[list[ReadingItem]] = TypeAdapter(list[ReadingItem])
