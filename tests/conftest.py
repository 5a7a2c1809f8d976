"""Shared fixtures: a full-size synthetic corpus written as quran.json."""

import json

import pytest

from tilawa.config import get_settings
from tilawa.core import ReadingStream, VerseResolver
from tilawa.data import clear_corpus_cache, load_corpus
from tilawa.models import CHAPTERS


def make_records(skip_chapters=(), counts=None):
    """quran.json records for every chapter in the index, with placeholder text."""
    counts = counts or {}
    records = []
    for chapter in CHAPTERS.values():
        if chapter.id in skip_chapters:
            continue
        total = counts.get(chapter.id, chapter.total_verses)
        records.append({
            "id": chapter.id,
            "name": chapter.arabic_name,
            "transliteration": chapter.transliteration,
            "type": chapter.revelation_type.value,
            "total_verses": total,
            "verses": [
                {"id": n, "text": f"آية {chapter.id}:{n}"} for n in range(1, total + 1)
            ],
        })
    return records


@pytest.fixture(autouse=True)
def reset_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def quran_json(tmp_path_factory):
    path = tmp_path_factory.mktemp("data") / "quran.json"
    path.write_text(json.dumps(make_records(), ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture(scope="session")
def corpus(quran_json):
    clear_corpus_cache()
    return load_corpus(quran_json)


@pytest.fixture
def resolver(corpus):
    return VerseResolver(corpus, strict=True)


@pytest.fixture
def stream(resolver):
    return ReadingStream(resolver)
