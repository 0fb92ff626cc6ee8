"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chess_rules.core.exceptions import InvalidCoordinateError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)
FILE_LETTERS = "abcdefgh"


def is_within_bounds(file: int, rank: int) -> bool:
    return (1 <= file <= BOARD_DIMENSIONS[0]) and (1 <= rank <= BOARD_DIMENSIONS[1])


@dataclass(frozen=True)
class Coordinate:
    """
    File/rank pair identifying a square: a1 = (1, 1), h8 = (8, 8).

    NOTE: An off-board coordinate can not exist. Construction fails instead of clamping,
    so anything holding a Coordinate can rely on it being on the board.
    """

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not is_within_bounds(self.file, self.rank):
            raise InvalidCoordinateError(
                f"Square (file={self.file}, rank={self.rank}) lies outside of the board."
            )

    @classmethod
    def from_letter(cls, letter: str, rank: int) -> Coordinate:
        """File given as a letter 'a'-'h', rank already as an integer"""
        file = ord(letter) - ord("a") + 1
        return cls(file, rank)

    @classmethod
    def from_algebraic(cls, sq: str) -> Coordinate:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8)"""
        if len(sq) != 2 or not sq[1].isdigit():
            raise InvalidCoordinateError(f"Cannot interpret {sq!r} as a square.")
        return cls.from_letter(sq[0], int(sq[1]))

    def to_algebraic(self) -> str:
        return f"{self.file_letter}{self.rank}"

    @property
    def file_letter(self) -> str:
        return FILE_LETTERS[self.file - 1]

    def offset(self, df: int, dr: int) -> Optional[Coordinate]:
        """The square (df, dr) away from this one, or None if that would leave the board."""
        file = self.file + df
        rank = self.rank + dr
        if not is_within_bounds(file, rank):
            return None
        return Coordinate(file, rank)

    def __str__(self) -> str:
        return self.to_algebraic()
