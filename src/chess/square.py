"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

# files x ranks
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[0]]
RANK_NAMES = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[1] + 1))


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8). Call `is_valid_algebraic` first on untrusted input."""
        file = FILE_NAMES.index(sq[0]) + 1
        rank = int(sq[1:])
        return cls(file, rank)

    @staticmethod
    def is_valid_algebraic(sq: str) -> bool:
        """A letter for the file + a number for the rank, both on the board"""
        if len(sq) != 2:
            return False
        file_char, rank_char = sq[0], sq[1]
        return file_char in FILE_NAMES and rank_char in RANK_NAMES

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.file - 1]}{self.rank}"

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)

    def is_within_bounds(self) -> bool:
        return (1 <= self.file <= BOARD_DIMENSIONS[0]) and (
            1 <= self.rank <= BOARD_DIMENSIONS[1]
        )


def all_squares() -> list[Square]:
    """Every square, in FEN reading order: a8..h8, a7..h7, ..., a1..h1"""
    return [
        Square(file, rank)
        for rank in range(BOARD_DIMENSIONS[1], 0, -1)
        for file in range(1, BOARD_DIMENSIONS[0] + 1)
    ]
