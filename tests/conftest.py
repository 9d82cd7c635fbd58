"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from loguru import logger

from src.chess.engine import ChessEngine
from src.tictactoe.engine import TicTacToeEngine


@pytest.fixture
def chess_engine() -> ChessEngine:
    return ChessEngine()


@pytest.fixture
def tictactoe_engine() -> TicTacToeEngine:
    return TicTacToeEngine()


@pytest.fixture
def log_messages() -> Generator[list[str], None, None]:
    """Collect the messages loguru emits while the test runs. The sink is removed at teardown."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    try:
        yield messages
    finally:
        logger.remove(handler_id)
