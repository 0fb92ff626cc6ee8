"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

import logging
from dataclasses import dataclass, field
from string import digits
from typing import Optional, Self

from chess_rules.chess.coordinate import BOARD_DIMENSIONS, Coordinate
from chess_rules.chess.moves import MOVEMENT_RULES, CandidateMovesFn, Move
from chess_rules.chess.notation import NOTATIONS, NotationCodec
from chess_rules.chess.pieces import FEN_TO_PIECE, Piece
from chess_rules.core.exceptions import IllegalMoveError, InvalidFENError
from chess_rules.core.shared_types import Color, NotationName, PieceType

logger = logging.getLogger(__name__)

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

FEN_TO_COLOR: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}

# Rank on which the pawns of each color start. Only from there a pawn may still make a double step.
PAWN_HOME_RANK: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: BOARD_DIMENSIONS[1] - 1}


@dataclass
class Board:
    """
    The position (occupied squares only), whose turn it is, and the moves played so far.

    An empty square simply has no entry in `position`.
    """

    position: dict[Coordinate, Piece]
    turn_color: Color = Color.WHITE
    history: list[Move] = field(default_factory=list)
    notation: NotationCodec = field(default_factory=lambda: NOTATIONS[NotationName.SHORT])
    movement_rules: dict[PieceType, CandidateMovesFn] = field(
        default_factory=lambda: dict(MOVEMENT_RULES)
    )

    def __post_init__(self) -> None:
        # every board owns its rule table
        self.movement_rules = dict(self.movement_rules)

    @classmethod
    def new(cls, **kwargs) -> Self:
        """Standard starting position, white to move"""
        return cls.from_fen(STARTING_POSITION_FEN, **kwargs)

    @classmethod
    def from_fen(
        cls, fen_str: str, turn_color: Color = Color.WHITE, **kwargs
    ) -> Self:
        """Construct a board using a given FEN string.

        That is, we supply the first part of the FEN string that denotes the board position
        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces. Again, left-to-right reads a1-h1.

        A full FEN string is accepted as well. Its active color ("w" or "b") then decides whose turn it is,
        the remaining fields (castling rights, en passant square, clocks) have no counterpart here and are ignored.

        NOTE: A pawn found outside its starting rank is marked as moved (no double step anymore).
        """
        num_files, num_ranks = BOARD_DIMENSIONS
        fields = fen_str.split()
        if not fields:
            raise InvalidFENError("Empty FEN string")
        if len(fields) > 1:
            if fields[1] not in FEN_TO_COLOR:
                raise InvalidFENError(
                    f"Active color must be 'w' or 'b', got {fields[1]!r}: {fen_str!r}"
                )
            turn_color = FEN_TO_COLOR[fields[1]]

        fen_by_ranks = fields[0].split("/")
        if len(fen_by_ranks) != num_ranks:
            raise InvalidFENError(
                f"Expected {num_ranks} ranks separated by '/', got {len(fen_by_ranks)}: {fen_str!r}"
            )

        position: dict[Coordinate, Piece] = {}
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = num_ranks - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 1
            for character in fen_one_rank:
                if character in digits:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                    continue
                if character.lower() not in FEN_TO_PIECE or file > num_files:
                    raise InvalidFENError(
                        f"Cannot place {character!r} on rank {rank} of {fen_str!r}"
                    )
                piece = Piece.from_fen(character)
                if piece.piece_type == PieceType.PAWN:
                    piece.has_moved = rank != PAWN_HOME_RANK[piece.color]
                position[Coordinate(file, rank)] = piece
                file += 1

            if file != num_files + 1:
                raise InvalidFENError(
                    f"Rank {rank} of {fen_str!r} does not describe exactly {num_files} squares."
                )
        return cls(position, turn_color, **kwargs)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1], 0, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(1, BOARD_DIMENSIONS[0] + 1):
            piece = self.piece_at(Coordinate(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece_at(self, square: Coordinate) -> Optional[Piece]:
        return self.position.get(square)

    def locate(self, piece_type: PieceType, color: Color) -> list[Coordinate]:
        return [
            square
            for square, piece in self.position.items()
            if piece.piece_type == piece_type and piece.color == color
        ]

    def locate_color(self, color: Color) -> list[Coordinate]:
        return [
            square for square, piece in self.position.items() if piece.color == color
        ]

    def legal_moves(self) -> set[Move]:
        """
        All pseudo-legal moves for the side to move.

        Recomputed on every call: the movement rule registered for each piece type is applied to every piece of the
        turn color. Nothing is filtered for king safety.
        """
        moves: set[Move] = set()
        for starting_square in self.locate_color(self.turn_color):
            piece_type = self.position[starting_square].piece_type
            movement_rule = self.movement_rules[piece_type]
            moves.update(movement_rule(starting_square, self))
        logger.debug("%d legal moves for %s", len(moves), self.turn_color)
        return moves

    def make_move(self, move: Move) -> None:
        """
        Apply a move, if it is legal.
        -----

        1. clear the doubled_last_turn flag of every piece
        2. the piece that moves is marked as moved (and doubled, if it is a pawn moving two ranks)
        3. update the position (whatever stood on the target square is captured)
        4. update the history of moves
        5. the other color is to move

        Raises IllegalMoveError (and leaves the board untouched) if the move is not legal.
        """
        if move not in self.legal_moves():
            raise IllegalMoveError(
                f"Move not allowed for {self.turn_color}: {self.format(move)}"
            )

        for piece in self.position.values():
            piece.doubled_last_turn = False

        piece_that_moved = self.position.pop(move.from_square)
        piece_that_moved.has_moved = True
        if piece_that_moved.piece_type == PieceType.PAWN and abs(move.rank_delta) == 2:
            piece_that_moved.doubled_last_turn = True
        self.position[move.to_square] = piece_that_moved

        self.history.append(move)
        self.turn_color = self.turn_color.opponent
        logger.debug("Applied %s, %s to move", move.to_uci(), self.turn_color)

    def parse(self, text: str) -> Move:
        """Read a move in the notation this board is configured with"""
        return self.notation.parse(self, text)

    def format(self, move: Move) -> str:
        """Write a move in the notation this board is configured with"""
        return self.notation.format(move)

    def formatted_history(self) -> list[str]:
        return [self.format(move) for move in self.history]
