"""
Custom exceptions shared by all layers.

Everything derives from GameError, so callers that do not care about the specific reason can catch a single type.
"""


class GameError(Exception):
    """Top-level error for anything going wrong while playing a game"""


class InvalidCoordinateError(GameError, ValueError):
    """A square outside of the board was requested (file or rank not in 1..8)"""


class ParseError(GameError):
    """Text could not be interpreted as a move in the active notation"""


class IllegalMoveError(GameError):
    """A well-formed move that is not in the current set of legal moves"""


class InvalidFENError(GameError):
    """The FEN placement string does not describe an 8x8 board"""


class InvalidRequestError(GameError):
    """Input rejected at the boundary (request models / configuration validators)"""


class ConfigError(GameError):
    """The configuration asks for something the engine does not provide"""
