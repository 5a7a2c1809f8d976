"""
Basic usage example for the tilawa library.

This example demonstrates the core workflow:
1. Load the verse text table
2. Resolve a chapter and a juz
3. Scroll through chapters with a reading stream
"""

import sys

from tilawa._logging import configure_logging
from tilawa.core import ReadingStream, VerseResolver
from tilawa.data import load_corpus
from tilawa.models import ChapterHeaderItem


def main(quran_json: str, chapter_id: int = 18) -> None:
    configure_logging()

    print("📖 Loading corpus...")
    resolver = VerseResolver(load_corpus(quran_json))

    chapter = resolver.chapter_info(chapter_id)
    verses = resolver.verses_of_chapter(chapter_id)
    print(f"   {chapter}: {len(verses)} verses, juz {verses[0].juz_number}-{verses[-1].juz_number}")

    info = resolver.juz_info(30)
    print(f"   {info}")

    print("\n📜 Reading stream:")
    stream = ReadingStream(resolver)
    stream.initialize(chapter_id)
    stream.extend_forward()
    added = stream.extend_backward()
    print(f"   Prepended {added} rows; chapters loaded: {stream.loaded_chapters()}")

    for item in stream.items[:3]:
        if isinstance(item, ChapterHeaderItem):
            title = resolver.chapter_info(item.chapter_id).name
            print(f"   == {title} ==")
            if resolver.needs_opening_formula(item.chapter_id):
                print(f"   {resolver.opening_formula()}")
        else:
            print(f"   {item.verse_key}: {item.verse.text[:40]}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python basic_usage.py <quran.json> [chapter_id]")
        sys.exit(1)
    main(sys.argv[1], int(sys.argv[2]) if len(sys.argv) > 2 else 18)
