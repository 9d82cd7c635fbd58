"""
Host-facing boundary: the operations a host calls, with the game state travelling as a JSON string.

Decoding is fail-closed. A payload that cannot be read (bad JSON, wrong shape, invalid FEN, ...) is replaced by the
initial state of the game instead of raising, so the boundary can be fed anything.
"""

import json
from typing import Any, Protocol

from loguru import logger
from pydantic import ValidationError

from src.api.models import ChessWireState, TicTacToeWireState
from src.chess.engine import ChessEngine, ChessState
from src.chess.fen import is_valid_fen
from src.core.models import GameState
from src.services.rule_engine import GameKind, RuleEngine, get_engine
from src.tictactoe.engine import TicTacToeEngine, TicTacToeState
from src.tictactoe.grid import to_grid


class WireCodec(Protocol):
    def decode(self, payload: str) -> GameState[Any]: ...
    def encode(self, state: GameState[Any]) -> str: ...


class ChessWireCodec:
    def __init__(self, engine: ChessEngine) -> None:
        self.engine = engine

    def decode(self, payload: str) -> ChessState:
        try:
            wire = ChessWireState.model_validate_json(payload)
        except ValidationError as err:
            logger.warning(f"Unreadable chess state, using the initial state instead: {err}")
            return self.engine.initial_state()

        if not is_valid_fen(wire.fen):
            logger.warning(f"Invalid FEN {wire.fen!r}, using the initial state instead")
            return self.engine.initial_state()
        return self.engine.load_state(wire.fen, wire.moves)

    def encode(self, state: ChessState) -> str:
        wire = ChessWireState(
            fen=state.position,
            moves=list(state.history),
            current_player=self.engine.current_player(state).value,
            move_count=state.move_count,
        )
        return wire.model_dump_json()


class TicTacToeWireCodec:
    def __init__(self, engine: TicTacToeEngine) -> None:
        self.engine = engine

    def decode(self, payload: str) -> TicTacToeState:
        try:
            wire = TicTacToeWireState.model_validate_json(payload)
        except ValidationError as err:
            logger.warning(f"Unreadable tic-tac-toe state, using the initial state instead: {err}")
            return self.engine.initial_state()
        return self.engine.load_state(to_grid(wire.board), wire.moves)

    def encode(self, state: TicTacToeState) -> str:
        wire = TicTacToeWireState(
            board=[list(row) for row in state.position],
            current_player=self.engine.current_player(state).value,
            move_count=state.move_count,
            winner=self.engine.winner(state).value,
            moves=list(state.history),
        )
        return wire.model_dump_json()


class GameBoundary:
    """The operations every game offers a host"""

    def __init__(self, engine: RuleEngine, codec: WireCodec) -> None:
        self.engine = engine
        self.codec = codec

    def get_initial_state(self) -> str:
        return self.codec.encode(self.engine.initial_state())

    def get_valid_moves(self, payload: str) -> str:
        """JSON array of move tokens"""
        return json.dumps(self.engine.valid_moves(self.codec.decode(payload)))

    def apply_move(self, payload: str, move: str) -> str:
        return self.codec.encode(self.engine.apply_move(self.codec.decode(payload), move))

    def is_game_over(self, payload: str) -> bool:
        return self.engine.is_terminal(self.codec.decode(payload))

    def get_winner(self, payload: str) -> str:
        """'' while the game is going, 'draw', 'player1' or 'player2'"""
        return self.engine.winner(self.codec.decode(payload)).value

    def get_current_player(self, payload: str) -> str:
        return self.engine.current_player(self.codec.decode(payload)).value

    def render(self, payload: str) -> str:
        return self.engine.render(self.codec.decode(payload))

    def get_game_name(self) -> str:
        return self.engine.name

    def get_game_description(self) -> str:
        return self.engine.description

    def log_transcript(self, payload: str) -> str:
        return self.engine.transcript(self.codec.decode(payload))


class ChessBoundary(GameBoundary):
    """Chess has a couple of extra queries on top of the shared ones"""

    engine: ChessEngine

    def __init__(self, engine: ChessEngine) -> None:
        super().__init__(engine, ChessWireCodec(engine))

    def get_fen(self, payload: str) -> str:
        return self.engine.fen(self.codec.decode(payload))

    def is_check(self, payload: str) -> bool:
        return self.engine.is_check(self.codec.decode(payload))

    def is_checkmate(self, payload: str) -> bool:
        return self.engine.is_checkmate(self.codec.decode(payload))

    def is_stalemate(self, payload: str) -> bool:
        return self.engine.is_stalemate(self.codec.decode(payload))

    def get_move_uci(self, move: str) -> str:
        return self.engine.move_uci(move)


def boundary_for(kind: GameKind | str) -> GameBoundary:
    """Boundary for the requested game. Raises ValueError for an unknown game name."""
    engine = get_engine(kind)
    if isinstance(engine, ChessEngine):
        return ChessBoundary(engine)
    if isinstance(engine, TicTacToeEngine):
        return GameBoundary(engine, TicTacToeWireCodec(engine))
    raise ValueError(f"No wire format registered for {kind!r}")
