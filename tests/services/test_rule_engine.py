"""Unit tests for src/services/rule_engine.py"""

import pytest

from src.chess.engine import ChessEngine
from src.core.shared_types import Outcome, Player
from src.services.rule_engine import GameKind, RuleEngine, available_games, get_engine
from src.tictactoe.engine import TicTacToeEngine


@pytest.mark.parametrize(
    "kind, engine_type",
    [
        ("chess", ChessEngine),
        (GameKind.CHESS, ChessEngine),
        ("tictactoe", TicTacToeEngine),
        (GameKind.TIC_TAC_TOE, TicTacToeEngine),
    ],
)
def test_get_engine(kind: str, engine_type: type) -> None:
    assert isinstance(get_engine(kind), engine_type)


def test_get_engine_returns_fresh_instances() -> None:
    assert get_engine("chess") is not get_engine("chess")


def test_unknown_game() -> None:
    with pytest.raises(ValueError):
        get_engine("go")


def test_available_games() -> None:
    assert available_games() == [GameKind.CHESS, GameKind.TIC_TAC_TOE]


@pytest.mark.parametrize("kind", list(GameKind))
def test_shared_contract(kind: GameKind) -> None:
    """Every registered engine behaves the same way at the start of a game and on a rejected move"""
    engine: RuleEngine = get_engine(kind)
    state = engine.initial_state()

    assert engine.name
    assert engine.description
    assert state.move_count == 0
    assert engine.current_player(state) == Player.PLAYER1
    assert engine.winner(state) == Outcome.NONE
    assert not engine.is_terminal(state)
    assert engine.render(state)
    assert engine.transcript(state)

    moves = engine.valid_moves(state)
    assert moves
    assert len(moves) == len(set(moves))

    rejected = engine.try_move(state, "definitely not a move")
    assert not rejected.accepted
    assert rejected.state is state

    accepted = engine.try_move(state, moves[0])
    assert accepted.accepted
    assert accepted.state.move_count == 1
    assert engine.current_player(accepted.state) == Player.PLAYER2
    assert accepted.state.history == (moves[0],)
