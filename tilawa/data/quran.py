"""
Quran reference data loader.

Provides functions to load the chapter + verse text table from a
``quran.json`` file. The file is a list of chapters::

    [{"id": 1, "name": "الفاتحة", "transliteration": "Al-Fatiha",
      "type": "meccan", "total_verses": 7,
      "verses": [{"id": 1, "text": "..."}, ...]}, ...]

Only ``id`` and ``verses`` are required; chapter metadata comes from the
built-in index in ``tilawa.models.chapter``.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Optional

from tilawa._logging import log_corpus_loaded, log_warning
from tilawa.config import get_settings
from tilawa.exceptions import QuranDataError


class QuranCorpus:
    """
    Read-only verse text table, keyed by chapter id.

    Verse texts are stored in verse order; ``texts[chapter_id][n - 1]`` is
    the text of verse ``n``.
    """

    def __init__(self, texts: dict[int, tuple[str, ...]], source: str = "<memory>") -> None:
        self._texts = dict(texts)
        self.source = source

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]], source: str = "<memory>") -> "QuranCorpus":
        """
        Build a corpus from parsed quran.json chapter records.

        Raises:
            QuranDataError: If a record is malformed, duplicated, or its
                verse ids are not the contiguous sequence 1..N
        """
        texts: dict[int, tuple[str, ...]] = {}
        for record in records:
            try:
                chapter_id = int(record["id"])
                verses = sorted(record.get("verses") or [], key=lambda v: int(v["id"]))
                verse_ids = [int(v["id"]) for v in verses]
                verse_texts = tuple(str(v.get("text", "")) for v in verses)
                declared = record.get("total_verses")
                if declared is not None:
                    declared = int(declared)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise QuranDataError(f"Malformed chapter record in {source}: {e}") from e

            if chapter_id in texts:
                raise QuranDataError(f"Duplicate chapter {chapter_id} in {source}")
            if verse_ids != list(range(1, len(verse_ids) + 1)):
                raise QuranDataError(
                    f"Chapter {chapter_id} in {source} has non-contiguous verse ids"
                )

            if declared is not None and declared != len(verse_texts):
                log_warning(
                    "Declared verse count differs from verses present",
                    chapter_id=chapter_id,
                    declared=declared,
                    present=len(verse_texts),
                )

            texts[chapter_id] = verse_texts

        return cls(texts, source=source)

    def has_chapter(self, chapter_id: int) -> bool:
        return chapter_id in self._texts

    def chapter_ids(self) -> list[int]:
        return sorted(self._texts)

    def verse_texts(self, chapter_id: int) -> tuple[str, ...]:
        """Texts of every verse in a chapter; empty if the chapter is absent."""
        return self._texts.get(chapter_id, ())

    def verse_count(self, chapter_id: Optional[int] = None) -> int:
        """Verses in one chapter, or in the whole corpus when chapter_id is None."""
        if chapter_id is None:
            return sum(len(v) for v in self._texts.values())
        return len(self.verse_texts(chapter_id))

    def __len__(self) -> int:
        return len(self._texts)

    def __repr__(self) -> str:
        return f"QuranCorpus(source={self.source!r}, chapters={len(self)}, verses={self.verse_count()})"


def _resolve_path(path: Optional[str | Path]) -> Path:
    resolved = Path(path) if path is not None else Path(get_settings().quran_json_path)
    if not resolved.exists():
        raise QuranDataError(
            f"Quran text table not found at {resolved}. "
            "Set TILAWA_QURAN_JSON_PATH or pass an explicit path."
        )
    return resolved


@lru_cache(maxsize=4)
def _load_corpus_file(path: str) -> QuranCorpus:
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except FileNotFoundError:
        raise QuranDataError(f"Quran text table not found at {path}")
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise QuranDataError(f"Failed to read Quran text table {path}: {e}") from e

    if not isinstance(records, list):
        raise QuranDataError(f"Quran text table {path} must be a list of chapters")

    corpus = QuranCorpus.from_records(records, source=path)
    log_corpus_loaded(path, len(corpus), corpus.verse_count())
    return corpus


def load_corpus(path: Optional[str | Path] = None) -> QuranCorpus:
    """
    Load the verse text table, once per path.

    Args:
        path: Path to quran.json (default: settings.quran_json_path)

    Returns:
        The loaded QuranCorpus

    Raises:
        QuranDataError: If the file is missing or malformed
    """
    return _load_corpus_file(str(_resolve_path(path)))


def clear_corpus_cache() -> None:
    """Forget previously loaded corpora."""
    _load_corpus_file.cache_clear()
