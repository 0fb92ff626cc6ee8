"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the move sets for each piece type.

The moves generated here are pseudo-legal: nothing checks whether your own king is left under attack.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from chess_rules.chess.coordinate import Coordinate
from chess_rules.chess.pieces import PIECE_LETTERS, Piece
from chess_rules.core.shared_types import Color, PieceType


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Coordinate) -> Optional[Piece]: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """
    basic definition of a move to be made

    piece_type and capture describe the board at the time the move is made. They are part of the equality,
    so 'Nxc3' is a different move than 'Nc3'.
    NOTE: piece_type is None only for a move read from an empty square, which never is legal.
    """

    from_square: Coordinate
    to_square: Coordinate
    piece_type: Optional[PieceType]
    capture: bool = False

    @property
    def rank_delta(self) -> int:
        return self.to_square.rank - self.from_square.rank

    def to_uci(self) -> str:
        """Long coordinate notation: <from_square><to_square>, ex. 'e2e4'"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    def to_san(self) -> str:
        """
        Short algebraic notation: <piece letter><x if capture><to_square>

        ex) 'Nf3', 'Nxe5', 'e4'.
        Pawn captures are written with the file they start from: 'exd5'.
        """
        letter = PIECE_LETTERS[self.piece_type] if self.piece_type else ""
        if self.piece_type == PieceType.PAWN and self.capture:
            letter = self.from_square.file_letter
        capture_marker = "x" if self.capture else ""
        return f"{letter}{capture_marker}{self.to_square.to_algebraic()}"

    @classmethod
    def on_board(cls, from_square: Coordinate, to_square: Coordinate, board: Board) -> Self:
        """Fill in the piece type and capture flag from what currently stands on the board."""
        moving_piece = board.piece_at(from_square)
        target_piece = board.piece_at(to_square)
        return cls(
            from_square=from_square,
            to_square=to_square,
            piece_type=moving_piece.piece_type if moving_piece else None,
            capture=target_piece is not None,
        )

    def __str__(self) -> str:
        return self.to_uci()


def _own_piece(square: Coordinate, board: Board) -> Piece:
    piece = board.piece_at(square)
    # for the typechecker: movement rules are only called for occupied squares
    assert piece is not None, f"No piece on {square}"
    return piece


def _is_opponent(square: Coordinate, color: Color, board: Board) -> bool:
    piece = board.piece_at(square)
    return piece is not None and piece.color != color


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Coordinate, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    We define move directions and move along them until we hit another piece or
    the edge of the board. The first piece hit is only included if it can be captured.
    """
    piece = _own_piece(square, board)
    moves: list[Move] = []
    for df, dr in directions:
        target_square = square.offset(df, dr)
        while target_square is not None:
            target_piece = board.piece_at(target_square)
            if target_piece is not None:
                if target_piece.color != piece.color:
                    moves.append(Move(square, target_square, piece.piece_type, True))
                break

            moves.append(Move(square, target_square, piece.piece_type, False))
            target_square = target_square.offset(df, dr)
    return moves


def single_step_move(
    square: Coordinate, board: Board, deltas: list[Vector]
) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    piece = _own_piece(square, board)
    moves: list[Move] = []
    for df, dr in deltas:
        target_square = square.offset(df, dr)
        if target_square is None:
            continue

        target_piece = board.piece_at(target_square)
        # your own piece blocks the square entirely
        if target_piece is not None and target_piece.color == piece.color:
            continue
        moves.append(
            Move(square, target_square, piece.piece_type, target_piece is not None)
        )

    return moves


def candidate_pawn_moves(square: Coordinate, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, if that square is empty.
    - It can move by two in their first move, if both squares in front are empty
    - takes diagonally, only when an opponent's piece stands there

    NOTE: En passant is not generated (the doubled_last_turn flag is tracked but not used)
    """
    pawn = _own_piece(square, board)
    # Pawn pushes : Black moves down the board, White moves up the board
    direction = 1 if pawn.color == Color.WHITE else -1
    moves: list[Move] = []

    one_up = square.offset(0, direction)
    if one_up is not None and board.piece_at(one_up) is None:
        moves.append(Move(square, one_up, PieceType.PAWN, False))

        two_up = one_up.offset(0, direction)
        if (
            not pawn.has_moved
            and two_up is not None
            and board.piece_at(two_up) is None
        ):
            moves.append(Move(square, two_up, PieceType.PAWN, False))

    # pawns take diagonally:
    for df in (-1, 1):
        target_square = square.offset(df, direction)
        if target_square is not None and _is_opponent(target_square, pawn.color, board):
            moves.append(Move(square, target_square, PieceType.PAWN, True))
    return moves


def candidate_knight_moves(square: Coordinate, board: Board) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    knight_deltas: list[Vector] = [
        (2, 1),
        (2, -1),
        (-2, 1),
        (-2, -1),
        (1, 2),
        (1, -2),
        (-1, 2),
        (-1, -2),
    ]
    return single_step_move(square, board, knight_deltas)


def candidate_bishop_moves(square: Coordinate, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    diagonals: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
    return raycasting_move(square, board, diagonals)


def candidate_rook_moves(square: Coordinate, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    straights: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
    return raycasting_move(square, board, straights)


def candidate_queen_moves(square: Coordinate, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_bishop_moves(square, board) + candidate_rook_moves(square, board)


def candidate_king_moves(square: Coordinate, board: Board) -> list[Move]:
    """The king can move by a single square at the time. (No castling)"""
    king_deltas: list[Vector] = [
        (0, 1),
        (0, -1),
        (1, 0),
        (-1, 0),
        (1, 1),
        (1, -1),
        (-1, 1),
        (-1, -1),
    ]
    return single_step_move(square, board, king_deltas)


def no_moves(square: Coordinate, board: Board) -> list[Move]:
    """Piece types without a movement rule (yet) never generate a move"""
    return []


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Coordinate, Board], list[Move]]

# Default rule set: only pawns and knights move.
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: no_moves,
    PieceType.ROOK: no_moves,
    PieceType.QUEEN: no_moves,
    PieceType.KING: no_moves,
}

# Opt-in: sliding pieces and the king get their moves as well.
EXTENDED_MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    **MOVEMENT_RULES,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}
