"""
Representation of a single position: everything that can be encoded in a FEN string.
"""

from dataclasses import dataclass, field
from typing import Optional

from legalmoves.chess.board import Board
from legalmoves.chess.castling import CastlingDirection, castling_to_fen
from legalmoves.chess.pieces import COLOR_TO_FEN, Color, Piece
from legalmoves.chess.square import Square


@dataclass(frozen=True)
class Position:
    """
    Board + game state needed to determine the legal moves.
    ----

    FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.
    The purpose of FEN is to provide all the necessary information to restart a game from a particular position.

    <board position string> <active color> <castling rights> <en passant square> <# half move clock> <number turns played>

    * The string to describe the board position is described in the Board class
    * The active color is either "w" or "b"
    * Castling rights are denoted as "k" for king-side or "q" for queen-side. Capital letters for the white pieces, small letters for the black pieces.
        In the starting position: KQkq (all rights available), and a "-" is used once all rights are gone.
    * The en passant square indicates the square a pawn just skipped over. If not available a "-" is used.
    * The half move clock counts the number of moves made since the last pawn move or capture.
    * The number of turns starts at 1 and increments after every move black makes.

    The counters are kept for round-trip fidelity only, they play no role in move legality.

    NOTE: build instances through `legalmoves.chess.fen.parse()`, which refuses anything that is not a legal position.
    """

    board: Board
    turn: Color
    castling: frozenset[CastlingDirection] = field(default_factory=frozenset)
    en_passant_square: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    # --- QUERIES USED BY THE GENERATOR ---
    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.board.piece_at(square)

    def king_square(self, color: Color) -> Optional[Square]:
        return self.board.king_square(color)

    def is_attacked(self, square: Square, by_color: Color) -> bool:
        return self.board.is_attacked(square, by_color)

    def castling_rights(self) -> frozenset[CastlingDirection]:
        return self.castling

    def en_passant_target(self) -> Optional[Square]:
        return self.en_passant_square

    def is_check(self) -> bool:
        """Is the side to move in check?"""
        return self.board.is_check(self.turn)

    def checkers(self) -> list[Square]:
        """Squares of the pieces giving check to the side to move"""
        king_square = self.king_square(self.turn)
        if king_square is None:
            return []
        return self.board.attackers(king_square, self.turn.opponent)

    def to_fen(self) -> str:
        """reverse operation of parsing: write a FEN from the given data"""
        en_passant_algebraic = (
            self.en_passant_square.to_algebraic()
            if self.en_passant_square is not None
            else "-"
        )
        return " ".join(
            [
                self.board.to_fen(),
                COLOR_TO_FEN[self.turn],
                castling_to_fen(self.castling),
                en_passant_algebraic,
                str(self.halfmove_clock),
                str(self.fullmove_number),
            ]
        )
