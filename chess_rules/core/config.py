"""
Engine configuration.

Values come from (in increasing priority) the defaults below, environment variables, and explicit overrides
(the command line driver passes its flags as overrides).
"""

import logging
import os
from typing import Any, Optional, Self

from pydantic import BaseModel, field_validator

from chess_rules.core.exceptions import InvalidRequestError
from chess_rules.core.shared_types import NotationName

ENV_PREFIX = "CHESS_RULES_"
TRUTHY = {"1", "true", "yes", "on"}


class EngineConfig(BaseModel):
    notation: NotationName = NotationName.SHORT
    extended_movement: bool = False
    starting_fen: Optional[str] = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise InvalidRequestError(f"Unknown log level: {value!r}")
        return level

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        """
        Only the structure: 8 ranks separated by slashes, optionally followed by the active color.
        The Board checks the contents. Castling rights, en passant square and clocks are dropped.
        """
        if value is None:
            return value

        fields = value.split()
        if not fields or len(fields[0].split("/")) != 8:
            raise InvalidRequestError(
                "Starting position must contain 8 ranks separated by '/'."
            )
        if len(fields) > 1 and fields[1] not in ("w", "b"):
            raise InvalidRequestError(
                f"Active color must be 'w' or 'b', got {fields[1]!r}."
            )
        return " ".join(fields[:2])

    @classmethod
    def from_env(cls, **overrides: Any) -> Self:
        """Read CHESS_RULES_* environment variables. Overrides that are None are ignored."""
        values: dict[str, Any] = {}
        notation = os.environ.get(f"{ENV_PREFIX}NOTATION")
        if notation:
            values["notation"] = notation.strip().lower()

        extended = os.environ.get(f"{ENV_PREFIX}EXTENDED_MOVEMENT")
        if extended:
            values["extended_movement"] = extended.strip().lower() in TRUTHY

        starting_fen = os.environ.get(f"{ENV_PREFIX}STARTING_FEN")
        if starting_fen:
            values["starting_fen"] = starting_fen

        log_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
