"""
Boundary layer data model(s).

These objects are what the host passes to / receives from a RuleEngine. Each game decides what its `position` looks like
(chess: a FEN string, tic-tac-toe: a 3x3 grid of marks), everything else has the same shape for every game.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from src.core.shared_types import Outcome, Player

PositionT = TypeVar("PositionT")
MoveToken = str


@dataclass(frozen=True)
class GameState(Generic[PositionT]):
    """
    Immutable snapshot of a game.
    ----

    * position: the board snapshot. The single source of truth.
    * history: move tokens applied so far (oldest first)
    * current_player / winner: cached projections of the position. Engines build a new GameState on every transition and
      recompute both from the position, so they never drift from the board.
    """

    position: PositionT
    history: tuple[MoveToken, ...]
    current_player: Player
    winner: Outcome

    @property
    def move_count(self) -> int:
        return len(self.history)


@dataclass(frozen=True)
class MoveResult(Generic[PositionT]):
    """Outcome of a move attempt. On rejection `state` is the untouched input state."""

    state: GameState[PositionT]
    accepted: bool
    reason: str = ""
