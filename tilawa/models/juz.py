"""
Juz boundary model and the fixed 30-entry boundary table.
"""

from pydantic import BaseModel, Field, computed_field

JUZ_COUNT = 30


class JuzBoundary(BaseModel):
    """
    The first verse of a Juz.

    Attributes:
        juz_number: Juz number (1-30)
        start_chapter: Chapter the juz starts in
        start_verse: Verse number the juz starts at
    """

    juz_number: int = Field(..., description="Juz number (1-30)", ge=1, le=JUZ_COUNT)
    start_chapter: int = Field(..., description="Chapter the juz starts in", ge=1, le=114)
    start_verse: int = Field(..., description="Verse the juz starts at", ge=1)

    model_config = {"frozen": True}

    @property
    def position(self) -> tuple[int, int]:
        """(chapter, verse) start position, for lexicographic comparison."""
        return (self.start_chapter, self.start_verse)

    def __str__(self) -> str:
        return f"Juz {self.juz_number} @ {self.start_chapter}:{self.start_verse}"


class JuzInfo(BaseModel):
    """
    Summary of a single Juz range.

    Attributes:
        juz_number: Juz number (1-30)
        start_chapter / start_verse: First verse (inclusive)
        end_chapter / end_verse: Last verse (inclusive)
        total_verses: Number of verses in the juz
    """

    juz_number: int = Field(..., ge=1, le=JUZ_COUNT)
    start_chapter: int = Field(..., ge=1, le=114)
    start_verse: int = Field(..., ge=1)
    end_chapter: int = Field(..., ge=1, le=114)
    end_verse: int = Field(..., ge=1)
    total_verses: int = Field(..., ge=1)

    @computed_field
    @property
    def start_key(self) -> str:
        return f"{self.start_chapter}:{self.start_verse}"

    @computed_field
    @property
    def end_key(self) -> str:
        return f"{self.end_chapter}:{self.end_verse}"

    def __str__(self) -> str:
        return f"Juz {self.juz_number}: {self.start_key} - {self.end_key} ({self.total_verses} verses)"


# Standard (chapter, verse) start of each juz
_JUZ_STARTS: dict[int, tuple[int, int]] = {
    1: (1, 1),
    2: (2, 142),
    3: (2, 253),
    4: (3, 93),    # Lan Tanalu
    5: (4, 24),    # Wal Muhsanat
    6: (4, 148),   # La Yuhibbullah
    7: (5, 82),    # Wa Idha Sami'u
    8: (6, 111),   # Wa Law Annana
    9: (7, 88),    # Qalal Mala'u
    10: (8, 41),   # Wa'lamu
    11: (9, 93),   # Ya'tadhirun
    12: (11, 6),   # Wa Ma Min Dabbah
    13: (12, 53),  # Wa Ma Ubarri'u
    14: (15, 1),   # Rubama
    15: (17, 1),   # Subhanalladhi
    16: (18, 75),  # Qal Alam
    17: (21, 1),   # Iqtaraba
    18: (23, 1),   # Qad Aflaha
    19: (25, 21),  # Wa Qalalladhina
    20: (27, 56),  # Amman Khalaqa
    21: (29, 46),  # Utlu Ma Uhiya
    22: (33, 31),  # Wa Man Yaqnut
    23: (36, 28),  # Wa Mali
    24: (39, 32),  # Faman Azlamu
    25: (41, 47),  # Ilayhi Yuraddu
    26: (46, 1),   # Ha Mim
    27: (51, 31),  # Qala Fama Khatbukum
    28: (58, 1),   # Qad Sami'allahu
    29: (67, 1),   # Tabarakalladhi
    30: (78, 1),   # 'Amma Yatasa'alun
}

JUZ_BOUNDARIES: tuple[JuzBoundary, ...] = tuple(
    JuzBoundary(juz_number=juz, start_chapter=chapter, start_verse=verse)
    for juz, (chapter, verse) in sorted(_JUZ_STARTS.items())
)
