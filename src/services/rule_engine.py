"""
Contract every game implements, and the closed set of games a host can pick from.

Hosts only talk to a RuleEngine. Adding a game means: implement the protocol, add a GameKind member, register it below.
"""

from enum import StrEnum
from typing import Any, Callable, Protocol

from src.chess.engine import ChessEngine
from src.core.models import GameState, MoveResult, MoveToken
from src.core.shared_types import Outcome, Player
from src.tictactoe.engine import TicTacToeEngine


class RuleEngine(Protocol):
    """Stateless rules oracle. Every method is a pure function of its arguments."""

    name: str
    description: str

    def initial_state(self) -> GameState[Any]:
        """Starting position, no moves played, player1 to move."""
        ...

    def valid_moves(self, state: GameState[Any]) -> list[MoveToken]:
        """Deterministic, no duplicates, empty iff the game is over."""
        ...

    def try_move(self, state: GameState[Any], token: MoveToken) -> MoveResult[Any]:
        """Explicit accepted / rejected signal. A rejected move leaves the state untouched."""
        ...

    def apply_move(self, state: GameState[Any], token: MoveToken) -> GameState[Any]:
        """New state if the move is legal, otherwise the input state itself. Never raises for a bad token."""
        ...

    def is_terminal(self, state: GameState[Any]) -> bool: ...

    def winner(self, state: GameState[Any]) -> Outcome: ...

    def current_player(self, state: GameState[Any]) -> Player:
        """Recomputed from the position, never read from the cached field."""
        ...

    def render(self, state: GameState[Any]) -> str: ...

    def transcript(self, state: GameState[Any]) -> str: ...


class GameKind(StrEnum):
    CHESS = "chess"
    TIC_TAC_TOE = "tictactoe"


# --- STRATEGY PATTERN: ONE ENGINE PER GAME ---
EngineFactory = Callable[[], RuleEngine]
ENGINES: dict[GameKind, EngineFactory] = {
    GameKind.CHESS: ChessEngine,
    GameKind.TIC_TAC_TOE: TicTacToeEngine,
}


def get_engine(kind: GameKind | str) -> RuleEngine:
    """Fresh engine for the requested game. Raises ValueError for an unknown game name."""
    game_kind = GameKind(kind)
    return ENGINES[game_kind]()


def available_games() -> list[GameKind]:
    return list(ENGINES.keys())
