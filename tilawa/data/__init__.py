"""
Quran data module for the tilawa library.

Provides access to the verse text table (quran.json).
"""

from tilawa.data.quran import QuranCorpus, clear_corpus_cache, load_corpus

__all__ = [
    "QuranCorpus",
    "clear_corpus_cache",
    "load_corpus",
]
