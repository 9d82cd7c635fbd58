"""
The chess RuleEngine: entrypoint into the chess domain layer for a host.

Every call takes a GameState, rebuilds the ChessPosition from its FEN string, and hands back plain values or a new GameState.
Nothing is stored between calls.
"""

from typing import Iterable

from loguru import logger

from src.chess.fen import STARTING_FEN
from src.chess.pieces import Color
from src.chess.position import ChessPosition, Status
from src.core.exceptions import GameError
from src.core.models import GameState, MoveResult, MoveToken
from src.core.shared_types import Outcome, Player

ChessState = GameState[str]

COLOR_TO_PLAYER: dict[Color, Player] = {
    Color.WHITE: Player.PLAYER1,
    Color.BLACK: Player.PLAYER2,
}
TRANSCRIPT_MOVES_PER_LINE = 8


class ChessEngine:
    name = "Chess"
    description = "Classic chess game with full rules"

    # --- CREATION ---
    def initial_state(self) -> ChessState:
        return self._build(ChessPosition.from_fen(STARTING_FEN), ())

    def load_state(self, fen: str, history: Iterable[MoveToken] = ()) -> ChessState:
        """Build a state from a FEN string. An invalid FEN gives the starting position."""
        return self._build(ChessPosition.decode(fen), tuple(history))

    # --- RULE ENGINE CONTRACT ---
    def valid_moves(self, state: ChessState) -> list[MoveToken]:
        return self._position(state).legal_moves_uci()

    def try_move(self, state: ChessState, token: MoveToken) -> MoveResult[str]:
        """Attempt the move. On rejection the returned state is the input state, untouched."""
        position = self._position(state)
        try:
            new_position = position.play_uci(token)
        except GameError as err:
            logger.debug(f"Rejected chess move {token!r} in {position.to_fen()!r}: {err}")
            return MoveResult(state=state, accepted=False, reason=str(err))
        return MoveResult(
            state=self._build(new_position, state.history + (token,)), accepted=True
        )

    def apply_move(self, state: ChessState, token: MoveToken) -> ChessState:
        return self.try_move(state, token).state

    def is_terminal(self, state: ChessState) -> bool:
        return self._position(state).status() != Status.IN_PROGRESS

    def winner(self, state: ChessState) -> Outcome:
        return self._outcome(self._position(state))

    def current_player(self, state: ChessState) -> Player:
        return COLOR_TO_PLAYER[self._position(state).color_to_move]

    def render(self, state: ChessState) -> str:
        return self._position(state).board.diagram()

    def transcript(self, state: ChessState) -> str:
        position = self._position(state)
        lines = [
            "=== CHESS GAME TRANSCRIPT ===",
            f"Move count: {state.move_count}",
            f"Current FEN: {position.to_fen()}",
            f"Current player: {COLOR_TO_PLAYER[position.color_to_move]}",
            "Moves played:",
        ]
        lines.extend(f"  {i}. {token}" for i, token in enumerate(state.history, start=1))

        valid_moves = position.legal_moves_uci()
        lines.append(f"Valid moves ({len(valid_moves)}):")
        for start in range(0, len(valid_moves), TRANSCRIPT_MOVES_PER_LINE):
            chunk = valid_moves[start : start + TRANSCRIPT_MOVES_PER_LINE]
            lines.append("  " + "".join(f"{token:<6}" for token in chunk))
        lines.append("=" * 30)
        return "\n".join(lines) + "\n"

    # --- CHESS EXTRAS ---
    def fen(self, state: ChessState) -> str:
        return self._position(state).to_fen()

    def is_check(self, state: ChessState) -> bool:
        return self._position(state).is_check()

    def is_checkmate(self, state: ChessState) -> bool:
        return self._position(state).status() == Status.CHECKMATE

    def is_stalemate(self, state: ChessState) -> bool:
        return self._position(state).status() == Status.STALEMATE

    @staticmethod
    def move_uci(token: MoveToken) -> MoveToken:
        """Moves are already written in UCI notation"""
        return token

    # -- PRIVATE HELPERS ---
    @staticmethod
    def _position(state: ChessState) -> ChessPosition:
        return ChessPosition.decode(state.position)

    @staticmethod
    def _outcome(position: ChessPosition) -> Outcome:
        """Checkmate: the side to move got mated, so the opponent won."""
        status = position.status()
        if status == Status.CHECKMATE:
            return Outcome.won_by(COLOR_TO_PLAYER[position.color_to_move.opponent])
        if status == Status.STALEMATE:
            return Outcome.DRAW
        return Outcome.NONE

    def _build(self, position: ChessPosition, history: tuple[MoveToken, ...]) -> ChessState:
        """Every state goes through here, so the cached fields always match the position"""
        return GameState(
            position=position.to_fen(),
            history=history,
            current_player=COLOR_TO_PLAYER[position.color_to_move],
            winner=self._outcome(position),
        )
