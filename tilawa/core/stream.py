"""
Continuous reading stream for chapter-anchored infinite scrolling.

A ReadingStream is owned by one reading screen. It starts from a single
chapter and grows a whole chapter at a time in either direction as the
reader nears the top or bottom of the window.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from tilawa._logging import get_logger, log_chapter_appended, log_warning
from tilawa.exceptions import TilawaError
from tilawa.models.chapter import CHAPTER_COUNT
from tilawa.models.reading import ChapterHeaderItem, ReadingItem, VerseItem
from tilawa.core.resolver import VerseResolver

logger = get_logger(__name__)

FORWARD = "forward"
BACKWARD = "backward"


class ReadingStream:
    """
    Bidirectionally growing window of chapter headers and verses.

    Each extend call resolves the neighbouring chapter and adds its header
    and verses as one block. The in-flight flags turn re-entrant calls
    (e.g. a scroll callback firing while a block is being resolved) into
    no-ops. Resolver failures are logged and leave the window unchanged.

    Attributes:
        items: Current window contents, top to bottom
        lowest_loaded_chapter: First chapter in the window
        highest_loaded_chapter: Last chapter in the window
        forward_load_in_flight: An extend_forward call is running
        backward_load_in_flight: An extend_backward call is running

    Example:
        stream = ReadingStream(resolver)
        stream.initialize(18)
        stream.extend_forward()   # appends chapter 19
        added = stream.extend_backward()  # prepends chapter 17
    """

    def __init__(self, resolver: VerseResolver) -> None:
        self.resolver = resolver
        self.items: list[ReadingItem] = []
        self.lowest_loaded_chapter: Optional[int] = None
        self.highest_loaded_chapter: Optional[int] = None
        self.forward_load_in_flight = False
        self.backward_load_in_flight = False
        self._forward_exhausted = False
        self._backward_exhausted = False

    def _chapter_block(self, chapter_id: int) -> list[ReadingItem]:
        verses = self.resolver.verses_of_chapter(chapter_id)
        if not verses:
            return []
        block: list[ReadingItem] = [ChapterHeaderItem(chapter_id=chapter_id)]
        block.extend(VerseItem.from_verse(v) for v in verses)
        return block

    @contextmanager
    def _in_flight(self, direction: str) -> Iterator[None]:
        flag = "forward_load_in_flight" if direction == FORWARD else "backward_load_in_flight"
        setattr(self, flag, True)
        try:
            yield
        finally:
            setattr(self, flag, False)

    def reset(self) -> None:
        """Empty the window and forget the loaded range."""
        self.items = []
        self.lowest_loaded_chapter = None
        self.highest_loaded_chapter = None
        self._forward_exhausted = False
        self._backward_exhausted = False

    def initialize(self, anchor_chapter_id: int) -> list[ReadingItem]:
        """
        Reset the window to a single chapter block.

        Args:
            anchor_chapter_id: Chapter the reader opened (1-114)

        Ignored while an extend call is running, since that call would
        otherwise attach its neighbour chapter to the new anchor block.

        Returns:
            The window contents after the call

        Raises:
            ChapterNotFoundError: If anchor_chapter_id is outside 1..114
        """
        if self.forward_load_in_flight or self.backward_load_in_flight:
            log_warning(
                "Reading window not reset while a load is in flight",
                anchor_chapter_id=anchor_chapter_id,
            )
            return list(self.items)

        block = self._chapter_block(anchor_chapter_id)
        self.reset()
        self.items = block
        self.lowest_loaded_chapter = anchor_chapter_id
        self.highest_loaded_chapter = anchor_chapter_id
        logger.debug(f"Reading window initialized at chapter {anchor_chapter_id}")
        return list(self.items)

    def _load_neighbour(self, direction: str) -> Optional[tuple[int, list[ReadingItem]]]:
        if direction == FORWARD:
            chapter_id = self.highest_loaded_chapter + 1
        else:
            chapter_id = self.lowest_loaded_chapter - 1

        try:
            block = self._chapter_block(chapter_id)
        except TilawaError as e:
            log_warning("Reading window not extended", direction=direction, error=e)
            block = []

        if not block:
            if direction == FORWARD:
                self._forward_exhausted = True
            else:
                self._backward_exhausted = True
            return None
        return chapter_id, block

    def extend_forward(self) -> int:
        """
        Append the chapter after the highest loaded one.

        Returns:
            Number of items appended (0 for a no-op)
        """
        if (
            self.forward_load_in_flight
            or self.highest_loaded_chapter is None
            or self.highest_loaded_chapter >= CHAPTER_COUNT
            or self._forward_exhausted
        ):
            return 0

        with self._in_flight(FORWARD):
            loaded = self._load_neighbour(FORWARD)
            if loaded is None:
                return 0
            chapter_id, block = loaded
            self.items = self.items + block
            self.highest_loaded_chapter = chapter_id

        log_chapter_appended(chapter_id, len(block) - 1, FORWARD)
        return len(block)

    def extend_backward(self) -> int:
        """
        Prepend the chapter before the lowest loaded one.

        The whole block is placed in one assignment so the window is never
        observed holding a partial chapter. The returned count lets the view
        offset its scroll position by the prepended rows.

        Returns:
            Number of items prepended (0 for a no-op)
        """
        if (
            self.backward_load_in_flight
            or self.lowest_loaded_chapter is None
            or self.lowest_loaded_chapter <= 1
            or self._backward_exhausted
        ):
            return 0

        with self._in_flight(BACKWARD):
            loaded = self._load_neighbour(BACKWARD)
            if loaded is None:
                return 0
            chapter_id, block = loaded
            self.items = block + self.items
            self.lowest_loaded_chapter = chapter_id

        log_chapter_appended(chapter_id, len(block) - 1, BACKWARD)
        return len(block)

    @staticmethod
    def current_anchor_chapter(visible_item: ReadingItem) -> int:
        """Chapter that owns the first visible item, for the title display."""
        if isinstance(visible_item, (ChapterHeaderItem, VerseItem)):
            return visible_item.chapter_id
        raise TypeError(f"Not a reading item: {visible_item!r}")

    def loaded_chapters(self) -> list[int]:
        """Chapter ids in the window, top to bottom."""
        return [item.chapter_id for item in self.items if isinstance(item, ChapterHeaderItem)]

    def verse_keys(self) -> list[str]:
        """Verse keys in the window, top to bottom."""
        return [item.verse_key for item in self.items if isinstance(item, VerseItem)]

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return (
            f"ReadingStream(chapters={self.lowest_loaded_chapter}-{self.highest_loaded_chapter}, "
            f"items={len(self.items)})"
        )
