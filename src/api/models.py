"""
Wire models: the JSON shape of a GameState when it crosses into / out of a host.

Derived fields (current_player, move_count, winner) are written out for the host's convenience, but never trusted when
reading a payload back in: the engines recompute them from the position.
"""

from pydantic import BaseModel, field_validator

from src.core.shared_types import Outcome, Player
from src.tictactoe.grid import is_valid_grid


class ChessWireState(BaseModel):
    fen: str
    moves: list[str] = []
    current_player: str = Player.PLAYER1.value
    move_count: int = 0


class TicTacToeWireState(BaseModel):
    board: list[list[int]]
    current_player: str = Player.PLAYER1.value
    move_count: int = 0
    winner: str = Outcome.NONE.value
    # optional: payloads written without it decode with an empty history
    moves: list[str] = []

    @field_validator("board")
    @classmethod
    def validate_board(cls, value: list[list[int]]) -> list[list[int]]:
        if not is_valid_grid(value):
            raise ValueError(
                "Board must be a 3x3 grid of 0 (empty), 1 (player1) or 2 (player2), "
                "with as many 1s as 2s or one more."
            )
        return value
