"""
Type definitions used across games and layers
"""

from enum import StrEnum


class Player(StrEnum):
    """player1 always makes the first move (white in chess)"""

    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @property
    def opponent(self) -> "Player":
        return Player.PLAYER2 if self == Player.PLAYER1 else Player.PLAYER1


class Outcome(StrEnum):
    """Winner label. The empty string means nobody won (yet)."""

    NONE = ""
    DRAW = "draw"
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @classmethod
    def won_by(cls, player: Player) -> "Outcome":
        return cls(player.value)
