"""Unit tests for /src/chess/position.py"""

import pytest

from src.chess.castling import CastlingDirection
from src.chess.fen import STARTING_FEN
from src.chess.position import ChessPosition, Status
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidFENError,
    InvalidMoveError,
)

CASTLING_READY_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


def play_all(position: ChessPosition, moves: list[str]) -> ChessPosition:
    for move in moves:
        position = position.play_uci(move)
    return position


# -- CREATION ---
def test_starting_position() -> None:
    position = ChessPosition.starting_position()
    assert position.to_fen() == STARTING_FEN
    assert len(position.legal_moves()) == 20
    assert position.status() == Status.IN_PROGRESS


def test_strict_and_fail_closed_construction() -> None:
    with pytest.raises(InvalidFENError):
        ChessPosition.from_fen("not a fen")
    assert ChessPosition.decode("not a fen").to_fen() == STARTING_FEN


# -- PLAYING MOVES / FEN BOOKKEEPING ---
def test_pawn_double_push_sets_en_passant_square() -> None:
    position = ChessPosition.starting_position().play_uci("e2e4")
    assert position.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"

    position = position.play_uci("e7e5")
    assert position.to_fen() == "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e6 0 2"


def test_knight_move_ticks_half_move_clock() -> None:
    position = play_all(ChessPosition.starting_position(), ["g1f3", "g8f6"])
    assert position.to_fen() == "rnbqkb1r/pppppppp/5n2/8/8/5N2/PPPPPPPP/RNBQKB1R w KQkq - 2 2"


def test_play_leaves_position_untouched() -> None:
    position = ChessPosition.starting_position()
    position.play_uci("d2d4")
    assert position.to_fen() == STARTING_FEN


# -- CASTLING ---
def test_castling_moves_available() -> None:
    legal = ChessPosition.from_fen(CASTLING_READY_FEN).legal_moves_uci()
    assert "e1g1" in legal
    assert "e1c1" in legal


def test_castling_king_side_moves_king_and_rook() -> None:
    position = ChessPosition.from_fen(CASTLING_READY_FEN).play_uci("e1g1")
    assert position.to_fen() == "r3k2r/8/8/8/8/8/8/R4RK1 b kq - 1 1"


def test_castling_queen_side_moves_king_and_rook() -> None:
    position = ChessPosition.from_fen(CASTLING_READY_FEN)
    position = play_all(position, ["a1b1", "e8c8"])
    assert position.to_fen() == "2kr3r/8/8/8/8/8/8/1R2K2R w K - 2 2"


def test_cannot_castle_through_attacked_square() -> None:
    """Black rook on f8 covers f1: no king side castling, queen side is fine"""
    legal = ChessPosition.from_fen("r3kr2/8/8/8/8/8/8/R3K2R w KQq - 0 1").legal_moves_uci()
    assert "e1g1" not in legal
    assert "e1c1" in legal


def test_rook_passing_attacked_square_is_allowed() -> None:
    """b1 is attacked, but only the rook crosses it"""
    legal = ChessPosition.from_fen("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1").legal_moves_uci()
    assert "e1c1" in legal


def test_cannot_castle_out_of_check() -> None:
    legal = ChessPosition.from_fen("4r1k1/8/8/8/8/8/8/R3K2R w KQ - 0 1").legal_moves_uci()
    assert "e1g1" not in legal
    assert "e1c1" not in legal


def test_cannot_castle_through_pieces() -> None:
    legal = ChessPosition.from_fen("4k3/8/8/8/8/8/8/RN2K1NR w KQ - 0 1").legal_moves_uci()
    assert "e1g1" not in legal
    assert "e1c1" not in legal


def test_castling_requires_the_rook() -> None:
    """Rights in the FEN are not enough: the rook has to be there"""
    legal = ChessPosition.from_fen("4k3/8/8/8/8/8/8/4K3 w KQ - 0 1").legal_moves_uci()
    assert "e1g1" not in legal
    assert "e1c1" not in legal


def test_king_move_revokes_both_rights() -> None:
    position = ChessPosition.from_fen(CASTLING_READY_FEN).play_uci("e1e2")
    assert position.state.castling_directions_available(position.color_to_move.opponent) == []
    assert position.to_fen() == "r3k2r/8/8/8/8/8/4K3/R6R b kq - 1 1"


def test_capturing_a_rook_revokes_both_sides_rights() -> None:
    """h1xh8: white loses K (rook left h1), black loses k (rook on h8 captured)"""
    position = ChessPosition.from_fen(CASTLING_READY_FEN).play_uci("h1h8")
    assert position.to_fen() == "r3k2R/8/8/8/8/8/8/R3K3 b Qq - 0 1"
    assert not position.state.has_castling_rights(CastlingDirection.WHITE_KING_SIDE)
    assert not position.state.has_castling_rights(CastlingDirection.BLACK_KING_SIDE)
    assert position.is_check()


# -- EN PASSANT ---
def test_en_passant_capture_removes_pawn() -> None:
    position = ChessPosition.from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
    assert "e5d6" in position.legal_moves_uci()
    position = position.play_uci("e5d6")
    assert position.to_fen() == "4k3/8/3P4/8/8/8/8/4K3 b - - 0 2"


def test_en_passant_only_right_after_double_push() -> None:
    position = ChessPosition.from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 2")
    assert "e5d6" not in position.legal_moves_uci()


def test_en_passant_exposing_king_is_illegal() -> None:
    """Both pawns leave the 5th rank, the rook on h5 would see the king on a5"""
    position = ChessPosition.from_fen("8/8/8/K2pP2r/8/8/8/7k w - d6 0 1")
    legal = position.legal_moves_uci()
    assert "e5d6" not in legal
    assert "e5e6" in legal


# -- PROMOTION ---
def test_promotion_expands_into_four_moves() -> None:
    position = ChessPosition.from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
    legal = position.legal_moves_uci()
    assert {"e7e8n", "e7e8b", "e7e8r", "e7e8q"} <= set(legal)
    assert "e7e8" not in legal


def test_promotion_places_chosen_piece() -> None:
    position = ChessPosition.from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1").play_uci("e7e8q")
    assert position.to_fen() == "4Q3/8/8/8/8/8/k7/4K3 b - - 0 1"


def test_promotion_without_piece_is_rejected() -> None:
    position = ChessPosition.from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
    with pytest.raises(IllegalMoveError):
        position.play_uci("e7e8")


# -- LEGALITY ---
def test_pinned_piece_cannot_move() -> None:
    position = ChessPosition.from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
    assert not any(move.startswith("e2") for move in position.legal_moves_uci())


def test_every_legal_move_keeps_own_king_safe() -> None:
    position = ChessPosition.from_fen(
        "r1bqkbnr/pppp1ppp/2n5/4p2Q/2B1P3/8/PPPP1PPP/RNB1K1NR w KQkq - 2 3"
    )
    for move in position.legal_moves():
        after = position.play(move)
        assert not after.board.is_check(position.color_to_move)


def test_find_legal_move_errors() -> None:
    position = ChessPosition.starting_position()
    with pytest.raises(InvalidMoveError):
        position.find_legal_move("xx")
    with pytest.raises(IllegalMoveError):
        position.find_legal_move("e2e5")


# -- GAME END ---
def test_fools_mate() -> None:
    position = play_all(ChessPosition.starting_position(), ["f2f3", "e7e5", "g2g4", "d8h4"])
    assert position.is_check()
    assert not position.has_legal_move()
    assert position.status() == Status.CHECKMATE

    with pytest.raises(GameStateError):
        position.find_legal_move("e2e4")


def test_stalemate() -> None:
    """White king on a1 cannot move, but is not attacked"""
    position = ChessPosition.from_fen("8/8/8/8/8/kq6/8/K7 w - - 0 1")
    assert not position.is_check()
    assert position.legal_moves() == []
    assert position.status() == Status.STALEMATE


def test_occupied_en_passant_target_is_listed_once() -> None:
    """FEN names d6 as en passant square while a knight stands there: e5xd6 is a normal capture"""
    position = ChessPosition.from_fen("4k3/8/3n4/4P3/8/8/8/4K3 w - d6 0 1")
    legal = position.legal_moves_uci()
    assert legal.count("e5d6") == 1
    assert len(legal) == len(set(legal))
    assert position.play_uci("e5d6").to_fen() == "4k3/8/3P4/8/8/8/8/4K3 b - - 0 1"
