"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import BOARD_DIMENSIONS, Square, all_squares


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file - 1]}{rank}")
        for file in range(1, 9)
        for rank in range(1, 9)
    ],
)
def test_algebraic_notation_both_ways(file: int, rank: int, notation: str) -> None:
    """'a1' maps to file 1, rank 1, and back"""
    square = Square.from_algebraic(notation)
    assert square == Square(file, rank)
    assert square.to_algebraic() == notation


@pytest.mark.parametrize("notation", ["a1", "b6", "e5", "h8"])
def test_valid_algebraic(notation: str) -> None:
    assert Square.is_valid_algebraic(notation)


@pytest.mark.parametrize(
    "notation",
    [
        "a9",  # rank beyond range
        "h0",  # rank before range
        "1a",  # wrong order
        "-",
        "a#",
        "x1",  # file beyond the (standard) range
        "A1",  # upper case file
        "a10",
        "e²",  # superscript digit
        "e١",  # arabic-indic digit
        "",
    ],
)
def test_invalid_algebraic(notation: str) -> None:
    assert not Square.is_valid_algebraic(notation)


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for file in range(1, BOARD_DIMENSIONS[0] + 1):
        for rank in range(1, BOARD_DIMENSIONS[1] + 1):
            assert Square(file, rank).is_within_bounds()


def test_square_out_of_bounds() -> None:
    assert not Square(BOARD_DIMENSIONS[0] + 1, BOARD_DIMENSIONS[1] + 1).is_within_bounds()
    assert not Square(0, 4).is_within_bounds()
    assert not Square(-1, -1).is_within_bounds()


def test_offset() -> None:
    assert Square.from_algebraic("e2").offset(0, 2) == Square.from_algebraic("e4")
    assert Square.from_algebraic("b1").offset(-1, 2) == Square.from_algebraic("a3")


def test_all_squares_in_fen_reading_order() -> None:
    squares = all_squares()
    assert len(squares) == 64
    assert len(set(squares)) == 64
    assert squares[0].to_algebraic() == "a8"
    assert squares[7].to_algebraic() == "h8"
    assert squares[-1].to_algebraic() == "h1"
