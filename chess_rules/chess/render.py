"""Text picture of the board, as printed by the command line driver. Read-only: no rules in here."""

from chess_rules.chess.board import Board
from chess_rules.chess.coordinate import BOARD_DIMENSIONS, FILE_LETTERS, Coordinate
from chess_rules.core.shared_types import Color, PieceType

UNICODE_SYMBOLS: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

SEPARATOR = "-" * (2 * BOARD_DIMENSIONS[0])


def render_board(board: Board) -> str:
    """
    Ranks from 8 (top) down to 1, files from a to h:

    ----------------
    |♜|♞|♝|♛|♚|♝|♞|♜|8
    ----------------
    ...
     a b c d e f g h
    """
    num_files, num_ranks = BOARD_DIMENSIONS
    lines = [SEPARATOR]
    for rank in range(num_ranks, 0, -1):
        cells = []
        for file in range(1, num_files + 1):
            piece = board.piece_at(Coordinate(file, rank))
            cells.append(
                UNICODE_SYMBOLS[(piece.color, piece.piece_type)] if piece else " "
            )
        lines.append("|" + "|".join(cells) + f"|{rank}")
        lines.append(SEPARATOR)
    lines.append(" " + " ".join(FILE_LETTERS[:num_files]))
    return "\n".join(lines)
