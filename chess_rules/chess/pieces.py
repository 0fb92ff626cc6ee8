"""Defines the types of chess pieces"""

from dataclasses import dataclass
from typing import Self

from chess_rules.core.exceptions import InvalidFENError
from chess_rules.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Letters used in (short) algebraic notation. Pawns do not get a letter.
PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

LETTER_TO_PIECE: dict[str, PieceType] = {
    letter: piece_type for piece_type, letter in PIECE_LETTERS.items() if letter
}


@dataclass
class Piece:
    """
    A piece is its type and color, plus two flags that change during the game:

    * has_moved: set the first time the piece moves, never reset
    * doubled_last_turn: only for a pawn that just advanced two squares (cleared again by the next move on the board)
    """

    piece_type: PieceType
    color: Color
    has_moved: bool = False
    doubled_last_turn: bool = False

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        if character.lower() not in FEN_TO_PIECE:
            raise InvalidFENError(f"Invalid piece character: {character!r}")
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.piece_type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.piece_type].lower()
        )

    @property
    def letter(self) -> str:
        return PIECE_LETTERS[self.piece_type]
