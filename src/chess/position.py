"""
A chess position: the board + the rest of the FEN state. It implements all the rules needed to go from one position to the next.

Positions are treated as values: `play()` hands back a new position and leaves the current one untouched.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import Board
from src.chess.castling import (
    CASTLING_ORDER,
    CASTLING_RULES,
    CastlingDirection,
    castling_options,
)
from src.chess.fen import FENState, decode_fen
from src.chess.moves import (
    AcceptedMove,
    Move,
    candidate_castling_move,
    en_passant_capture_square,
    en_passant_moves,
    is_pawn_push_to_promotion_square,
    pawn_direction,
    pawn_pushes_w_promotion,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import GameStateError, IllegalMoveError


class Status(Enum):
    IN_PROGRESS = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


@dataclass
class ChessPosition:
    board: Board
    state: FENState

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Strict: raises InvalidFENError"""
        state = FENState.from_fen(fen)
        return cls(Board.from_fen(state.position), state)

    @classmethod
    def decode(cls, fen: str) -> Self:
        """Fail-closed: an invalid FEN gives the starting position"""
        state = decode_fen(fen)
        return cls(Board.from_fen(state.position), state)

    @classmethod
    def starting_position(cls) -> Self:
        state = FENState.starting_position()
        return cls(Board.from_fen(state.position), state)

    def to_fen(self) -> str:
        return self.state.to_fen()

    @property
    def color_to_move(self) -> Color:
        return self.state.color_to_move

    # --- LEGAL MOVES ---
    def legal_moves(self) -> list[Move]:
        """
        List of legal moves for the side to move
        ----

        **Combines the following**

        1. generate candidate moves, using the basic movement rules for all pieces (the board does this calculation)
        2. add candidate castling moves
        3. add candidate en passant moves
        4. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
        5. Pawn push to promotion square? --> expand the set of moves to include one for every choice of piece type to promote into.
        """
        color = self.color_to_move
        candidate_moves = self.board.generate_candidate_moves(color)
        candidate_moves.extend(self._generate_castling_moves())

        if self.state.en_passant_square is not None:
            candidate_moves.extend(
                en_passant_moves(self.state.en_passant_square, color, self.board)
            )

        legal_moves: list[Move] = []
        for move in candidate_moves:
            if self._is_putting_yourself_in_check(move):
                continue
            if is_pawn_push_to_promotion_square(move, self.board):
                legal_moves.extend(pawn_pushes_w_promotion(move))
            else:
                legal_moves.append(move)
        return legal_moves

    def legal_moves_uci(self) -> list[str]:
        return [move.to_uci() for move in self.legal_moves()]

    def find_legal_move(self, move_uci: str) -> Move:
        """
        Match a UCI token against the legal moves. The matched move carries the castling / en passant flags.

        Raises InvalidMoveError (cannot parse), GameStateError (game over) or IllegalMoveError.
        """
        requested = Move.from_uci(move_uci)
        legal_moves = {move.to_uci(): move for move in self.legal_moves()}
        if not legal_moves:
            raise GameStateError(f"Game is over. status: {self.status().name.lower()}")
        if requested.to_uci() not in legal_moves:
            raise IllegalMoveError(f"Move not allowed: {move_uci}")
        return legal_moves[requested.to_uci()]

    # --- MAKING A MOVE ---
    def play(self, move: Move) -> Self:
        """
        Apply a move that came out of `legal_moves()` and return the resulting position.
        -----

        1. update the board (NOTE: castling moves the king and the rook, en passant removes the pawn that was taken)
        2. revoke castling rights if needed
        3. set / clear the en passant square
        4. update the move counters
        5. hand the turn to the opponent
        """
        accepted_move = AcceptedMove.from_move_and_board(move, self.board)
        player_color = self.color_to_move

        board = self.board.copy()
        self._move_pieces(board, move)

        half_move_clock = (
            0
            if accepted_move.is_pawn_move or accepted_move.is_capture
            else self.state.half_move_clock + 1
        )
        num_turns = (
            self.state.num_turns + 1
            if player_color == Color.BLACK
            else self.state.num_turns
        )
        state = FENState(
            position=board.to_fen(),
            color_to_move=player_color.opponent,
            castling_rights=self.state.without_castling_rights(
                self._revoked_castling_rights(accepted_move)
            ),
            en_passant_square=self._determine_en_passant_square(accepted_move),
            half_move_clock=half_move_clock,
            num_turns=num_turns,
        )
        return type(self)(board, state)

    def play_uci(self, move_uci: str) -> Self:
        return self.play(self.find_legal_move(move_uci))

    @staticmethod
    def _move_pieces(board: Board, move: Move) -> None:
        """Displace the piece(s) involved in the move on the given board"""
        if move.castling_direction:
            squares = CASTLING_RULES[move.castling_direction]
            board.move_piece(Move(squares.king_from, squares.king_to))
            board.move_piece(Move(squares.rook_from, squares.rook_to))
        elif move.is_en_passant:
            board.move_piece(move)
            board.remove_piece(en_passant_capture_square(move))
        else:
            board.move_piece(move)

    def _is_putting_yourself_in_check(self, move: Move) -> bool:
        """Return True if the move puts (or leaves) you in check

        1. Copy the board
        2. make the candidate move
        3. determine if king is in check on the new board
        """
        board = self.board.copy()
        self._move_pieces(board, move)
        return board.is_check(self.color_to_move)

    # --- CHECKS FOR ENDING THE GAME ---
    def is_check(self) -> bool:
        """Is the side to move in check?"""
        return self.board.is_check(self.color_to_move)

    def has_legal_move(self) -> bool:
        return len(self.legal_moves()) > 0

    def status(self) -> Status:
        if self.has_legal_move():
            return Status.IN_PROGRESS
        return Status.CHECKMATE if self.is_check() else Status.STALEMATE

    # -- CASTLING RULE HELPERS ---
    def _generate_castling_moves(self) -> list[Move]:
        """
        Find the castling moves for the player to move
        ---

        **you are allowed to castle if**

        * You are not currently in check (you cannot castle out of check).
        * Castling rights are not yet revoked, and king and rook are on their starting squares.
        * There is no piece in between the king and the rook.
        * The king does not cross or land on a square that is under attack.
        """
        color = self.color_to_move
        if self.is_check():
            return []

        king = Piece(PieceType.KING, color)
        rook = Piece(PieceType.ROOK, color)
        moves: list[Move] = []
        for direction in self.state.castling_directions_available(color):
            squares = CASTLING_RULES[direction]
            if self.board.piece(squares.king_from) != king:
                continue
            if self.board.piece(squares.rook_from) != rook:
                continue
            if self.board.is_any_occupied(squares.squares_between()):
                continue
            if self.board.is_any_under_attack(squares.king_path(), color.opponent):
                continue
            moves.append(candidate_castling_move(direction))
        return moves

    def _revoked_castling_rights(self, move: AcceptedMove) -> list[CastlingDirection]:
        """
        Checks which rights should get revoked
        ----

        1. If you are moving your king (castling included) --> revoke both of yours
        2. If anything moves away from or lands on a rook's starting square --> revoke the right attached to that square
           (covers moving your own rook and capturing your opponent's rook before it moved)
        """
        revoked: list[CastlingDirection] = []
        if move.moving_piece.type == PieceType.KING:
            revoked.extend(castling_options(move.moving_piece.color))

        touched = {move.move.from_square, move.move.to_square}
        revoked.extend(
            direction
            for direction in CASTLING_ORDER
            if CASTLING_RULES[direction].rook_from in touched
        )
        return revoked

    # --- EN PASSANT RULE HELPERS ----
    def _determine_en_passant_square(self, move: AcceptedMove) -> Optional[Square]:
        """The possible en passant square for the next turn: the square a pawn skipped over with its double push."""
        ranks_moved = abs(move.move.from_square.rank - move.move.to_square.rank)
        if not (move.is_pawn_move and ranks_moved == 2):
            return None
        return move.move.from_square.offset(0, pawn_direction(move.moving_piece.color))
