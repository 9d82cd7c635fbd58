"""The Game board holds the `position` (in chess: the configuration of pieces on the board) and answers geometric questions about it"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.moves import ATTACK_RULES, MOVEMENT_RULES, CandidateMovesFn, Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, FILE_NAMES, Square, all_squares


@dataclass
class Board:
    position: dict[Square, Piece]

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, read from a8 to h8
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        NOTE: expects a string that passed `is_valid_position` (see fen.py)
        """
        position: dict[Square, Piece] = {}
        for rank_idx, fen_one_rank in enumerate(fen_str.split("/")):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 1
            for character in fen_one_rank:
                if character.isalpha():
                    position[Square(file, rank)] = Piece.from_fen(character)
                    file += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    for _ in range(int(character)):
                        position[Square(file, rank)] = Piece.empty()
                        file += 1
        return cls(position)

    @classmethod
    def empty(cls) -> Self:
        return cls({square: Piece.empty() for square in all_squares()})

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1], 0, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(1, BOARD_DIMENSIONS[0] + 1):
            piece = self.piece(Square(file, rank))

            if not piece.is_empty:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def copy(self) -> Self:
        """Scratch copy to try out moves on. Pieces are immutable, so a shallow copy is enough."""
        return type(self)(dict(self.position))

    def piece(self, square: Square) -> Piece:
        return self.position[square]

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        wanted = Piece(piece_type, color)
        return [square for square, piece in self.position.items() if piece == wanted]

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square for square, piece in self.position.items() if piece.color == color
        ]

    def king_square(self, color: Color) -> Optional[Square]:
        """Positions loaded from a FEN are not validated: a king might be missing."""
        kings = self.locate_pieces(PieceType.KING, color)
        return kings[0] if kings else None

    def generate_candidate_moves(self, color: Color) -> list[Move]:
        """
        Before knowing the set of legal moves, we use raycasting to find candidate moves, which will later be tested for legality
        (making sure it does not put yourself in check.)

        ---
        NOTE: Castling, en passant and promotion are taken care of in ChessPosition.
        """
        candidate_moves: list[Move] = []
        for starting_square in self.locate_color(color):
            piece_type = self.piece(starting_square).type
            movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece_type]
            candidate_moves.extend(movement_rule(starting_square, self))
        return candidate_moves

    # -- ATTACKS ---
    def is_under_attack(self, square: Square, by_color: Color) -> bool:
        return any(rule(square, by_color, self) for rule in ATTACK_RULES.values())

    def is_any_under_attack(self, squares: list[Square], by_color: Color) -> bool:
        return any(self.is_under_attack(square, by_color) for square in squares)

    def is_any_occupied(self, squares: list[Square]) -> bool:
        return any(not self.piece(square).is_empty for square in squares)

    def is_check(self, color: Color) -> bool:
        """Is the king of the given color under attack? No king on the board means no check."""
        king_square = self.king_square(color)
        if king_square is None:
            return False
        return self.is_under_attack(king_square, color.opponent)

    # -- UPDATES ---
    def move_piece(self, move: Move) -> None:
        """Update the position on the board (promotion included)"""
        piece_that_moved = self.piece(move.from_square)
        if move.promote_to is not None:
            piece_that_moved = piece_that_moved.promoted_to(move.promote_to)
        self.position[move.from_square] = Piece.empty()
        self.position[move.to_square] = piece_that_moved

    def remove_piece(self, square: Square) -> None:
        self.position[square] = Piece.empty()

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    # -- DISPLAY ---
    def diagram(self) -> str:
        """Fixed width diagram, white at the bottom, with file letters and rank numbers around it"""
        file_labels = "  " + " ".join(FILE_NAMES) + "\n"
        lines = [file_labels]
        for rank in range(BOARD_DIMENSIONS[1], 0, -1):
            symbols = " ".join(
                self.piece(Square(file, rank)).symbol()
                for file in range(1, BOARD_DIMENSIONS[0] + 1)
            )
            lines.append(f"{rank} {symbols}  {rank}\n")
        lines.append(file_labels)
        return "".join(lines)
