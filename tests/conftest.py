"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from chess_rules.chess.board import Board
from chess_rules.chess.pieces import PIECE_TO_FEN
from chess_rules.core.shared_types import Color, PieceType

EMPTY_FEN = "/".join(["8"] * 8)


def place_pieces(pieces: dict[str, str]) -> str:
    """
    Build a FEN placement from {square name: FEN character}

    ex) {"a1": "N", "e7": "p"} -> white knight on a1, black pawn on e7
    """
    rows = [["1"] * 8 for _ in range(8)]
    for square_name, fen_char in pieces.items():
        file_idx = ord(square_name[0]) - ord("a")
        rank_idx = 8 - int(square_name[1])
        rows[rank_idx][file_idx] = fen_char
    return "/".join("".join(row) for row in rows)


@pytest.fixture
def starting_board() -> Board:
    return Board.new()


@pytest.fixture
def board_with_pieces() -> Callable[..., Board]:
    """Call the inner function with {square: FEN character} and optionally the color to move"""

    def _create_board(
        pieces: dict[str, str], turn_color: Color = Color.WHITE, **kwargs
    ) -> Board:
        return Board.from_fen(place_pieces(pieces), turn_color, **kwargs)

    return _create_board


@pytest.fixture
def board_with_single_piece(
    board_with_pieces: Callable[..., Board],
) -> Callable[..., Board]:
    """Call the inner function that will be returned with the desired piece type, color, and square"""

    def _create_board(
        piece_type: PieceType, color: Color, square_name: str = "d4", **kwargs
    ) -> Board:
        fen_char = PIECE_TO_FEN[piece_type]
        fen_char = fen_char.upper() if color == Color.WHITE else fen_char.lower()
        return board_with_pieces({square_name: fen_char}, color, **kwargs)

    return _create_board
