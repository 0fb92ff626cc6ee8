"""Requests and Response models"""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, field_validator

from chess_rules.core.exceptions import InvalidRequestError
from chess_rules.core.shared_types import Color, NotationName


class MoveStatus(StrEnum):
    ACCEPTED = "accepted"
    PARSE_ERROR = "parse_error"
    ILLEGAL_MOVE = "illegal_move"


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    """A single line of text typed by the player (trailing newline allowed)."""

    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, value: str) -> str:
        line = value.strip()
        if not line:
            raise InvalidRequestError("Cannot make a move from an empty line.")
        return line


# --- RESPONSE MODELS ---
class MoveResponse(BaseModel):
    status: MoveStatus
    message: str
    move: Optional[str] = None
    turn_color: Color
    history: list[str]

    @property
    def accepted(self) -> bool:
        return self.status == MoveStatus.ACCEPTED


class LegalMovesResponse(BaseModel):
    turn_color: Color
    notation: NotationName
    legal_moves: list[str]
