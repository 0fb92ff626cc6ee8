"""Orchestration of one game: from a line of text to the Board and back to a response (the driver only prints)."""

import logging
from typing import Optional

from chess_rules.api.models import (
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    MoveStatus,
)
from chess_rules.chess.board import STARTING_POSITION_FEN, Board
from chess_rules.chess.moves import EXTENDED_MOVEMENT_RULES, MOVEMENT_RULES
from chess_rules.chess.notation import get_notation
from chess_rules.chess.render import render_board
from chess_rules.core.config import EngineConfig
from chess_rules.core.exceptions import IllegalMoveError, ParseError

logger = logging.getLogger(__name__)

ILLEGAL_MOVE_MESSAGE = "Illegal move. Please make a legal move."
PARSE_ERROR_MESSAGE = "Could not parse move. Please use valid algebraic notation."


class GameSession:
    """Owns a single Board for its entire lifetime."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self.board = self._create_board(self.config)
        logger.info(
            "New game: notation=%s, extended movement=%s",
            self.config.notation,
            self.config.extended_movement,
        )

    # -- Driver logic ---
    def submit(self, request: MoveRequest) -> MoveResponse:
        """
        Attempt to make the move written in the request.
        ----

        1. parse the text in the configured notation
        2. apply the move on the board
        3. report back. The board is untouched if either step fails.
        """
        try:
            move = self.board.parse(request.text)
        except ParseError as e:
            logger.warning("Could not parse %r: %s", request.text, e)
            return self._create_response(MoveStatus.PARSE_ERROR, PARSE_ERROR_MESSAGE)

        try:
            self.board.make_move(move)
        except IllegalMoveError as e:
            logger.warning("Rejected %r: %s", request.text, e)
            return self._create_response(MoveStatus.ILLEGAL_MOVE, ILLEGAL_MOVE_MESSAGE)

        formatted = self.board.format(move)
        return self._create_response(
            MoveStatus.ACCEPTED, f"Played {formatted}.", move=formatted
        )

    def legal_moves(self) -> LegalMovesResponse:
        """The legal moves of the side to move, written in the configured notation (sorted for display)."""
        return LegalMovesResponse(
            turn_color=self.board.turn_color,
            notation=self.config.notation,
            legal_moves=sorted(self.board.format(move) for move in self.board.legal_moves()),
        )

    def render(self) -> str:
        return render_board(self.board)

    # -- Internal helpers --
    def _create_board(self, config: EngineConfig) -> Board:
        rules = EXTENDED_MOVEMENT_RULES if config.extended_movement else MOVEMENT_RULES
        return Board.from_fen(
            config.starting_fen or STARTING_POSITION_FEN,
            notation=get_notation(config.notation),
            movement_rules=rules,
        )

    def _create_response(
        self, status: MoveStatus, message: str, move: Optional[str] = None
    ) -> MoveResponse:
        return MoveResponse(
            status=status,
            message=message,
            move=move,
            turn_color=self.board.turn_color,
            history=self.board.formatted_history(),
        )
