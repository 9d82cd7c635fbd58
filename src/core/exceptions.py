"""Custom errors raised inside the rules engines.

The RuleEngine surface never lets these escape for bad input: they are caught where a move is attempted
and turned into a rejected MoveResult.
"""


class GameError(Exception):
    """Base class for anything that goes wrong because of the input (not because of a bug)"""


class InvalidFENError(GameError):
    """String cannot be interpreted as a FEN string"""


class InvalidMoveError(GameError):
    """Move token cannot be parsed (bad syntax, square out of range, unknown promotion piece, ...)"""


class IllegalMoveError(GameError):
    """Move token parses fine, but the rules do not allow it in the current position"""


class GameStateError(GameError):
    """Operation does not make sense in the current state of the game (ex. moving after the game ended)"""
