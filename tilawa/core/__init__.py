"""
Core modules for the tilawa library.

This package contains the resolution logic for:
- Chapter and juz verse ranges, juz assignment per verse
- Continuous chapter-by-chapter reading windows
"""

from tilawa.core.resolver import VerseResolver, check_juz_partition, juz_of_position
from tilawa.core.stream import ReadingStream

__all__ = [
    # Resolver
    "VerseResolver",
    "check_juz_partition",
    "juz_of_position",
    # Stream
    "ReadingStream",
]
