"""Unit tests for chess_rules/chess/moves.py"""

from typing import Callable

import pytest

from chess_rules.chess.board import Board
from chess_rules.chess.moves import (
    EXTENDED_MOVEMENT_RULES,
    MOVEMENT_RULES,
    Color,
    Move,
    PieceType,
    candidate_bishop_moves,
    candidate_king_moves,
    candidate_knight_moves,
    candidate_pawn_moves,
    candidate_queen_moves,
    candidate_rook_moves,
    no_moves,
    raycasting_move,
)
from chess_rules.chess.coordinate import Coordinate

BoardFactory = Callable[..., Board]


def sq(name: str) -> Coordinate:
    return Coordinate.from_algebraic(name)


def uci_set(moves: list[Move]) -> set[str]:
    return set(move.to_uci() for move in moves)


# -- MOVE ENCODING ---
@pytest.mark.parametrize(
    "from_name, to_name, uci",
    [("e2", "e4", "e2e4"), ("a1", "a5", "a1a5"), ("g3", "a7", "g3a7")],
)
def test_converting_into_uci(from_name: str, to_name: str, uci: str) -> None:
    """UCI notation is simply <from_square><to_square>"""
    move = Move(sq(from_name), sq(to_name), PieceType.PAWN)
    assert move.to_uci() == uci
    assert str(move) == uci


@pytest.mark.parametrize(
    "move, san",
    [
        (Move(sq("e2"), sq("e4"), PieceType.PAWN), "e4"),
        (Move(sq("e4"), sq("d5"), PieceType.PAWN, capture=True), "exd5"),
        (Move(sq("g1"), sq("f3"), PieceType.KNIGHT), "Nf3"),
        (Move(sq("f3"), sq("e5"), PieceType.KNIGHT, capture=True), "Nxe5"),
        (Move(sq("d1"), sq("h5"), PieceType.QUEEN), "Qh5"),
        (Move(sq("e1"), sq("e2"), PieceType.KING), "Ke2"),
    ],
)
def test_converting_into_san(move: Move, san: str) -> None:
    """Piece letter (none for pawns) + capture marker + target square. Pawn captures start with their file."""
    assert move.to_san() == san


def test_moves_compare_by_value() -> None:
    """The capture flag and the piece type are part of the move"""
    quiet = Move(sq("b1"), sq("c3"), PieceType.KNIGHT)
    assert quiet == Move(sq("b1"), sq("c3"), PieceType.KNIGHT, False)
    assert quiet != Move(sq("b1"), sq("c3"), PieceType.KNIGHT, True)
    assert quiet != Move(sq("b1"), sq("c3"), PieceType.BISHOP, False)
    assert len({quiet, Move(sq("b1"), sq("c3"), PieceType.KNIGHT)}) == 1


def test_move_on_board(board_with_pieces: BoardFactory) -> None:
    """Piece type and capture flag are read from the board"""
    board = board_with_pieces({"b1": "N", "c3": "p"})
    move = Move.on_board(sq("b1"), sq("c3"), board)
    assert move == Move(sq("b1"), sq("c3"), PieceType.KNIGHT, True)

    from_empty_square = Move.on_board(sq("d4"), sq("d5"), board)
    assert from_empty_square.piece_type is None
    assert not from_empty_square.capture


# --- PAWN MOVES ---
def test_white_pawn_on_starting_rank(board_with_single_piece: BoardFactory) -> None:
    """Single or double step up the board"""
    board = board_with_single_piece(PieceType.PAWN, Color.WHITE, "e2")
    moves = candidate_pawn_moves(sq("e2"), board)
    assert uci_set(moves) == {"e2e3", "e2e4"}
    assert all(not move.capture for move in moves)


def test_black_pawn_on_starting_rank(board_with_single_piece: BoardFactory) -> None:
    """Black moves down the board"""
    board = board_with_single_piece(PieceType.PAWN, Color.BLACK, "d7")
    moves = candidate_pawn_moves(sq("d7"), board)
    assert uci_set(moves) == {"d7d6", "d7d5"}


def test_moved_pawn_single_step_only(board_with_single_piece: BoardFactory) -> None:
    """A pawn off its starting rank was created as 'has moved'"""
    board = board_with_single_piece(PieceType.PAWN, Color.WHITE, "e3")
    moves = candidate_pawn_moves(sq("e3"), board)
    assert uci_set(moves) == {"e3e4"}


def test_pawn_has_moved_flag_blocks_double_step(
    board_with_single_piece: BoardFactory,
) -> None:
    board = board_with_single_piece(PieceType.PAWN, Color.WHITE, "e2")
    board.position[sq("e2")].has_moved = True
    assert uci_set(candidate_pawn_moves(sq("e2"), board)) == {"e2e3"}


@pytest.mark.parametrize("blocker", ["P", "p"])
def test_pawn_blocked_directly(board_with_pieces: BoardFactory, blocker: str) -> None:
    """Any piece in front stops both pushes (a pawn never takes straight ahead)"""
    board = board_with_pieces({"e2": "P", "e3": blocker})
    assert candidate_pawn_moves(sq("e2"), board) == []


def test_pawn_double_step_blocked(board_with_pieces: BoardFactory) -> None:
    """Only the single step remains when the second square is occupied"""
    board = board_with_pieces({"e2": "P", "e4": "n"})
    assert uci_set(candidate_pawn_moves(sq("e2"), board)) == {"e2e3"}


def test_pawn_captures(board_with_pieces: BoardFactory) -> None:
    """Diagonal moves only onto opponent's pieces, never onto your own"""
    board = board_with_pieces({"e4": "P", "d5": "p", "f5": "N", "e5": "p"})
    moves = candidate_pawn_moves(sq("e4"), board)
    assert moves == [Move(sq("e4"), sq("d5"), PieceType.PAWN, capture=True)]


def test_black_pawn_captures(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e5": "p", "d4": "P", "f4": "B"}, Color.BLACK)
    moves = candidate_pawn_moves(sq("e5"), board)
    assert uci_set(moves) == {"e5e4", "e5d4", "e5f4"}
    assert {move.to_uci() for move in moves if move.capture} == {"e5d4", "e5f4"}


def test_pawn_on_edge_file(board_with_pieces: BoardFactory) -> None:
    """Captures to the left of the a-file simply do not exist"""
    board = board_with_pieces({"a4": "P", "b5": "p"})
    assert uci_set(candidate_pawn_moves(sq("a4"), board)) == {"a4a5", "a4b5"}


def test_pawn_on_last_rank(board_with_single_piece: BoardFactory) -> None:
    """No promotion: a pawn on the final rank has nowhere to go"""
    board = board_with_single_piece(PieceType.PAWN, Color.WHITE, "c8")
    assert candidate_pawn_moves(sq("c8"), board) == []


def test_no_en_passant(board_with_pieces: BoardFactory) -> None:
    """The doubled_last_turn flag is tracked, but never used to generate an en passant capture"""
    board = board_with_pieces({"e5": "P", "d5": "p"})
    board.position[sq("d5")].doubled_last_turn = True
    assert uci_set(candidate_pawn_moves(sq("e5"), board)) == {"e5e6"}


# --- KNIGHT MOVES ---
def test_knight_in_the_center(board_with_single_piece: BoardFactory) -> None:
    board = board_with_single_piece(PieceType.KNIGHT, Color.WHITE, "d4")
    moves = candidate_knight_moves(sq("d4"), board)
    assert uci_set(moves) == {
        "d4b3",
        "d4b5",
        "d4c2",
        "d4c6",
        "d4e2",
        "d4e6",
        "d4f3",
        "d4f5",
    }


def test_knight_in_the_corner(board_with_single_piece: BoardFactory) -> None:
    """Only 2 destinations remain on the board"""
    board = board_with_single_piece(PieceType.KNIGHT, Color.WHITE, "a1")
    moves = candidate_knight_moves(sq("a1"), board)
    assert uci_set(moves) == {"a1b3", "a1c2"}


def test_knight_surrounded_by_own_pieces(board_with_pieces: BoardFactory) -> None:
    """Own pieces on every target square block every move"""
    targets = ["b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5"]
    board = board_with_pieces({"d4": "N", **{name: "P" for name in targets}})
    assert candidate_knight_moves(sq("d4"), board) == []


def test_knight_captures(board_with_pieces: BoardFactory) -> None:
    """Opponent's pieces can be taken, own pieces block"""
    board = board_with_pieces({"b1": "N", "c3": "p", "a3": "P"})
    moves = candidate_knight_moves(sq("b1"), board)
    assert set(moves) == {
        Move(sq("b1"), sq("c3"), PieceType.KNIGHT, capture=True),
        Move(sq("b1"), sq("d2"), PieceType.KNIGHT, capture=False),
    }


# --- DEFAULT RULE TABLE ---
@pytest.mark.parametrize(
    "piece_type",
    [PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN, PieceType.KING],
)
def test_default_rules_do_not_move_other_pieces(
    board_with_single_piece: BoardFactory, piece_type: PieceType
) -> None:
    """Even on an empty board only pawns and knights generate moves by default"""
    board = board_with_single_piece(piece_type, Color.WHITE, "d4")
    assert MOVEMENT_RULES[piece_type] is no_moves
    assert MOVEMENT_RULES[piece_type](sq("d4"), board) == []


def test_rule_tables_cover_every_piece_type() -> None:
    assert set(MOVEMENT_RULES) == set(PieceType)
    assert set(EXTENDED_MOVEMENT_RULES) == set(PieceType)
    assert EXTENDED_MOVEMENT_RULES[PieceType.PAWN] is candidate_pawn_moves
    assert EXTENDED_MOVEMENT_RULES[PieceType.KNIGHT] is candidate_knight_moves


# --- EXTENDED RULE TABLE ---
def test_raycasting_move_empty_board(board_with_single_piece: BoardFactory) -> None:
    """On an empty board, movements should only be restricted by board dimensions"""
    board = board_with_single_piece(PieceType.ROOK, Color.WHITE, "a5")
    moves = raycasting_move(sq("a5"), board, [(1, 0), (-1, 0)])
    assert len(moves) == 7
    assert all(move.to_square.rank == 5 for move in moves)


def test_raycasting_move_w_enemy_blocker(board_with_pieces: BoardFactory) -> None:
    """The first enemy piece on the ray is included (as capture), the ray stops there"""
    board = board_with_pieces({"d2": "R", "d5": "p"})
    moves = raycasting_move(sq("d2"), board, [(0, 1), (0, -1)])
    assert uci_set(moves) == {"d2d1", "d2d3", "d2d4", "d2d5"}
    assert [move.to_uci() for move in moves if move.capture] == ["d2d5"]


def test_raycasting_move_w_friendly_blocker(board_with_pieces: BoardFactory) -> None:
    """When your own piece is blocking, do not include a move to that square in the move list"""
    board = board_with_pieces({"d2": "B", "f4": "P"})
    moves = raycasting_move(sq("d2"), board, [(1, 1), (-1, 1), (1, -1), (-1, -1)])
    assert uci_set(moves) == {"d2c1", "d2e1", "d2e3", "d2c3", "d2b4", "d2a5"}


def test_bishop_moves(board_with_single_piece: BoardFactory) -> None:
    board = board_with_single_piece(PieceType.BISHOP, Color.BLACK, "a1")
    moves = candidate_bishop_moves(sq("a1"), board)
    assert uci_set(moves) == {f"a1{letter}{rank}" for letter, rank in zip("bcdefgh", range(2, 9))}
    assert all(move.piece_type == PieceType.BISHOP for move in moves)


def test_rook_moves(board_with_single_piece: BoardFactory) -> None:
    board = board_with_single_piece(PieceType.ROOK, Color.WHITE, "d4")
    assert len(candidate_rook_moves(sq("d4"), board)) == 14


def test_queen_moves(board_with_single_piece: BoardFactory) -> None:
    """Queen = rook + bishop"""
    board = board_with_single_piece(PieceType.QUEEN, Color.WHITE, "d4")
    assert len(candidate_queen_moves(sq("d4"), board)) == 14 + 13


def test_king_moves(board_with_pieces: BoardFactory) -> None:
    """Single steps in every direction, no castling"""
    board = board_with_pieces({"e1": "K", "h1": "R", "d2": "P", "f2": "q"})
    moves = candidate_king_moves(sq("e1"), board)
    assert uci_set(moves) == {"e1d1", "e1f1", "e1e2", "e1f2"}
    assert [move.to_uci() for move in moves if move.capture] == ["e1f2"]
