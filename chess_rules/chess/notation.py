"""
Text notations for moves.

Two interchangeable strategies, selected by name when the Board is configured:

* short algebraic ("e4", "Nf3", "exd5", "Nbd2"): needs the board to find out where the piece comes from
* long coordinate algebraic ("e2e4"): origin and destination are spelled out, the board fills in the rest
"""

import logging
import re
from string import digits
from typing import Iterable, Optional, Protocol

from chess_rules.chess.coordinate import BOARD_DIMENSIONS, Coordinate
from chess_rules.chess.moves import Move
from chess_rules.chess.pieces import LETTER_TO_PIECE, Piece
from chess_rules.core.exceptions import ConfigError, InvalidCoordinateError, ParseError
from chess_rules.core.shared_types import Color, NotationName, PieceType

logger = logging.getLogger(__name__)


class Board(Protocol):
    """Just the parts the notations need"""

    turn_color: Color

    def piece_at(self, square: Coordinate) -> Optional[Piece]: ...
    def locate(self, piece_type: PieceType, color: Color) -> list[Coordinate]: ...
    def legal_moves(self) -> set[Move]: ...


class NotationCodec(Protocol):
    """Turn text into a Move (given a board), and a Move back into text."""

    name: NotationName

    def parse(self, board: Board, text: str) -> Move: ...
    def format(self, move: Move) -> str: ...


# <piece letter><origin file><origin rank><x><destination file><destination rank>, only the destination is required
SAN_PATTERN = re.compile(
    r"^(?P<piece>[NBRQK])?"
    r"(?P<from_file>[a-h])?"
    r"(?P<from_rank>[0-9])?"
    r"(?P<capture>x)?"
    r"(?P<to_file>[a-h])"
    r"(?P<to_rank>[0-9])$"
)


def _file_number(letter: Optional[str]) -> Optional[int]:
    return ord(letter) - ord("a") + 1 if letter else None


class ShortAlgebraicNotation:
    """
    Short algebraic notation
    ----

    ----
    <piece letter><disambiguation><x if capture><destination square>

    * The piece letter is one of N, B, R, Q, K. No letter means a pawn.
    * Pawn pushes only name the destination ('e4'), pawn captures name the file the pawn leaves from ('exd5').
    * Pieces may be disambiguated by origin file, rank or both: 'Nbd2', 'R1a3', 'Qh4xe1'.

    The origin square is looked up in the current set of legal moves. If none of them fits, the first matching piece
    (by file, then rank) is taken as origin, so the move is well-formed and the Board can reject it as illegal.
    """

    name = NotationName.SHORT

    def parse(self, board: Board, text: str) -> Move:
        line = text.strip()
        if len(line) < 2:
            raise ParseError(f"Move {line!r} is too short.")

        match = SAN_PATTERN.match(line)
        if match is None:
            raise ParseError(f"Cannot read {line!r} as short algebraic notation.")

        piece_type = LETTER_TO_PIECE.get(match["piece"] or "", PieceType.PAWN)
        capture = match["capture"] is not None
        from_file = _file_number(match["from_file"])
        from_rank = int(match["from_rank"]) if match["from_rank"] else None

        try:
            to_square = Coordinate.from_letter(match["to_file"], int(match["to_rank"]))
        except InvalidCoordinateError as e:
            raise ParseError(f"Move {line!r} leaves the board.") from e
        if from_rank is not None and not 1 <= from_rank <= BOARD_DIMENSIONS[1]:
            raise ParseError(f"Move {line!r} starts outside of the board.")

        # pawn pushes stay on their file
        if piece_type == PieceType.PAWN and from_file is None and not capture:
            from_file = to_square.file

        move = self._resolve(board, piece_type, to_square, capture, from_file, from_rank)
        logger.debug("Parsed %r as %s", line, move.to_uci())
        return move

    def format(self, move: Move) -> str:
        return move.to_san()

    def _resolve(
        self,
        board: Board,
        piece_type: PieceType,
        to_square: Coordinate,
        capture: bool,
        from_file: Optional[int],
        from_rank: Optional[int],
    ) -> Move:
        """Find the square the piece starts from"""

        def fits(square: Coordinate) -> bool:
            return (from_file is None or square.file == from_file) and (
                from_rank is None or square.rank == from_rank
            )

        matches = [
            move
            for move in board.legal_moves()
            if move.piece_type == piece_type
            and move.to_square == to_square
            and move.capture == capture
            and fits(move.from_square)
        ]
        if len(matches) > 1:
            options = ", ".join(sorted(move.to_uci() for move in matches))
            raise ParseError(
                f"Ambiguous move to {to_square}: could be any of {options}. Add the origin file or rank."
            )
        if matches:
            return matches[0]

        # No legal move fits. Still construct the move, so it gets reported as illegal rather than unreadable.
        origins = _sorted_squares(
            square
            for square in board.locate(piece_type, board.turn_color)
            if fits(square)
        )
        if not origins:
            raise ParseError(
                f"No {board.turn_color} {piece_type} found that could move to {to_square}."
            )
        return Move(origins[0], to_square, piece_type, capture)


class LongAlgebraicNotation:
    """
    Long coordinate algebraic notation: exactly 4 characters <file><rank><file><rank>, ex. 'e2e4'.

    Piece type and capture are read from the board.
    """

    name = NotationName.LONG

    def parse(self, board: Board, text: str) -> Move:
        line = text.strip()
        if len(line) != 4:
            raise ParseError(
                f"Move {line!r} should be 4 characters: origin and destination square, ex. 'e2e4'."
            )
        if not (line[1] in digits and line[3] in digits):
            raise ParseError(f"Cannot read the ranks in {line!r}.")

        try:
            from_square = Coordinate.from_letter(line[0], int(line[1]))
            to_square = Coordinate.from_letter(line[2], int(line[3]))
        except InvalidCoordinateError as e:
            raise ParseError(f"Move {line!r} leaves the board.") from e

        move = Move.on_board(from_square, to_square, board)
        logger.debug("Parsed %r as %s", line, move.to_uci())
        return move

    def format(self, move: Move) -> str:
        return move.to_uci()


def _sorted_squares(squares: Iterable[Coordinate]) -> list[Coordinate]:
    return sorted(squares, key=lambda square: (square.file, square.rank))


# -- STRATEGY PATTERN: NOTATIONS ---
NOTATIONS: dict[NotationName, NotationCodec] = {
    NotationName.SHORT: ShortAlgebraicNotation(),
    NotationName.LONG: LongAlgebraicNotation(),
}


def get_notation(name: str) -> NotationCodec:
    """Look up a notation by its name ('short' or 'long')"""
    try:
        return NOTATIONS[NotationName(name)]
    except ValueError:
        raise ConfigError(
            f"Unknown notation {name!r}. Pick one from {', '.join(NOTATIONS)}"
        ) from None
