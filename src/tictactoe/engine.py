"""The tic-tac-toe RuleEngine. Same contract as the chess engine, far fewer rules."""

from typing import Iterable

from loguru import logger

from src.core.exceptions import GameError, GameStateError, IllegalMoveError
from src.core.models import GameState, MoveResult, MoveToken
from src.core.shared_types import Outcome, Player
from src.tictactoe.grid import (
    EMPTY_GRID,
    GRID_SIZE,
    Grid,
    Mark,
    cell_token,
    count_marks,
    empty_cells,
    is_full,
    is_valid_grid,
    line_winner,
    mark_at,
    parse_cell,
    place_mark,
)

TicTacToeState = GameState[Grid]

PLAYER_MARKS: dict[Player, Mark] = {
    Player.PLAYER1: Mark.PLAYER1,
    Player.PLAYER2: Mark.PLAYER2,
}
MARK_PLAYERS: dict[Mark, Player] = {mark: player for player, mark in PLAYER_MARKS.items()}


def player_to_move(grid: Grid) -> Player:
    """Players alternate and player1 starts: equal mark counts means it is player1's turn"""
    if count_marks(grid, Mark.PLAYER1) == count_marks(grid, Mark.PLAYER2):
        return Player.PLAYER1
    return Player.PLAYER2


def grid_outcome(grid: Grid) -> Outcome:
    """A complete line wins. Without one, a full grid is a draw."""
    mark = line_winner(grid)
    if mark is not None:
        return Outcome.won_by(MARK_PLAYERS[mark])
    return Outcome.DRAW if is_full(grid) else Outcome.NONE


class TicTacToeEngine:
    name = "Tic-Tac-Toe"
    description = "Classic 3x3 tic-tac-toe game"

    def initial_state(self) -> TicTacToeState:
        return self.load_state(EMPTY_GRID)

    def load_state(self, grid: Grid, history: Iterable[MoveToken] = ()) -> TicTacToeState:
        """Build a state from a grid. A grid no game could reach gives the empty grid."""
        if not is_valid_grid(grid):
            logger.warning(f"Invalid tic-tac-toe grid {grid!r}, falling back to the empty grid")
            grid = EMPTY_GRID
        return GameState(
            position=grid,
            history=tuple(history),
            current_player=player_to_move(grid),
            winner=grid_outcome(grid),
        )

    def valid_moves(self, state: TicTacToeState) -> list[MoveToken]:
        if self.is_terminal(state):
            return []
        return [cell_token(cell) for cell in empty_cells(state.position)]

    def try_move(self, state: TicTacToeState, token: MoveToken) -> MoveResult[Grid]:
        """
        Accepted iff the game is still going, the token names a cell on the grid and that cell is empty.
        The mover's mark goes in, then the turn passes to the other player.
        """
        try:
            new_state = self._play(state, token)
        except GameError as err:
            logger.debug(f"Rejected tic-tac-toe move {token!r}: {err}")
            return MoveResult(state=state, accepted=False, reason=str(err))
        return MoveResult(state=new_state, accepted=True)

    def apply_move(self, state: TicTacToeState, token: MoveToken) -> TicTacToeState:
        return self.try_move(state, token).state

    def is_terminal(self, state: TicTacToeState) -> bool:
        return self.winner(state) != Outcome.NONE

    def winner(self, state: TicTacToeState) -> Outcome:
        return grid_outcome(state.position)

    def current_player(self, state: TicTacToeState) -> Player:
        return player_to_move(state.position)

    def render(self, state: TicTacToeState) -> str:
        column_labels = "  " + "   ".join(str(col) for col in range(GRID_SIZE)) + "\n"
        separator = "  " + "|".join(["---"] * GRID_SIZE) + "\n"
        lines = [column_labels]
        for row in range(GRID_SIZE):
            cells = "|".join(
                f" {mark_at(state.position, (row, col)).symbol()} " for col in range(GRID_SIZE)
            )
            lines.append(f"{row} {cells} {row}\n")
            if row < GRID_SIZE - 1:
                lines.append(separator)
        lines.append(column_labels)
        return "".join(lines)

    def transcript(self, state: TicTacToeState) -> str:
        winner = self.winner(state)
        valid_moves = self.valid_moves(state)
        lines = [
            "=== TIC-TAC-TOE GAME TRANSCRIPT ===",
            f"Move count: {state.move_count}",
            f"Current player: {self.current_player(state)}",
            f"Winner: {winner.value or 'None'}",
            "Board state:",
        ]
        for row in state.position:
            lines.append("  " + "".join(f"{Mark(value).symbol(empty='.')} " for value in row))
        quoted = ", ".join(f'"{token}"' for token in valid_moves)
        lines.append(f"Valid moves ({len(valid_moves)}): [{quoted}]")
        lines.append("=" * 35)
        return "\n".join(lines) + "\n"

    # -- PRIVATE HELPERS ---
    def _play(self, state: TicTacToeState, token: MoveToken) -> TicTacToeState:
        grid = state.position
        outcome = grid_outcome(grid)
        if outcome != Outcome.NONE:
            raise GameStateError(f"Game is over. winner: {outcome.value}")

        cell = parse_cell(token)
        if mark_at(grid, cell) != Mark.EMPTY:
            raise IllegalMoveError(f"Cell {token!r} is already taken.")

        mover = player_to_move(grid)
        new_grid = place_mark(grid, cell, PLAYER_MARKS[mover])
        return GameState(
            position=new_grid,
            history=state.history + (cell_token(cell),),
            current_player=player_to_move(new_grid),
            winner=grid_outcome(new_grid),
        )
