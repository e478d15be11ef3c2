"""The board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from legalmoves.chess.moves import (
    ATTACK_RULES,
    MOVEMENT_RULES,
    CandidateMovesFn,
    CastleMove,
    EnPassantMove,
    Move,
    NormalMove,
    PutMove,
)
from legalmoves.chess.pieces import FEN_TO_ROLE, Color, Piece, Role
from legalmoves.chess.square import ALL_SQUARES, BOARD_DIMENSIONS, Square
from legalmoves.core.exceptions import InvalidPlacementError


@dataclass(frozen=True)
class Board:
    """
    Mapping of the occupied squares to the piece standing on them.

    Treated as a value: applying a move returns a new Board, the original is never touched.
    """

    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using a given FEN string.

        That is, we supply the first part of the FEN string that denotes the board position
        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces. Again, left-to-right reads a1-h1.
        """
        num_files, num_ranks = BOARD_DIMENSIONS
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != num_ranks:
            raise InvalidPlacementError(
                f"Expected {num_ranks} ranks in piece placement, found {len(fen_by_ranks)}: {fen_str!r}"
            )

        position: dict[Square, Piece] = {}
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = num_ranks - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character.lower() in FEN_TO_ROLE and character.isascii():
                    # simple case: a letter directly denotes the piece that should be created
                    if file < num_files:
                        position[Square(file, rank)] = Piece.from_fen(character)
                    file += 1
                elif character in "12345678":
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                else:
                    raise InvalidPlacementError(
                        f"Unknown character {character!r} in piece placement: {fen_str!r}"
                    )

            # make sure you are creating a correctly sized board
            if file != num_files:
                raise InvalidPlacementError(
                    f"Rank {rank + 1} covers {file} files instead of {num_files}: {fen_str!r}"
                )
        return cls(position)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece_at(Square(file, rank))

            if piece is not None:
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

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def locate(self, piece: Piece) -> list[Square]:
        """Squares holding this exact piece, in ascending square order"""
        return [square for square in ALL_SQUARES if self.position.get(square) == piece]

    def locate_color(self, color: Color) -> list[Square]:
        """Squares holding pieces of this color, in ascending square order"""
        return [
            square
            for square in ALL_SQUARES
            if square in self.position and self.position[square].color == color
        ]

    def king_square(self, color: Color) -> Optional[Square]:
        kings = self.locate(Piece(color, Role.KING))
        return kings[0] if kings else None

    def is_any_occupied(self, squares: Iterable[Square]) -> bool:
        return any(square in self.position for square in squares)

    # --- ATTACKS ---
    def attackers(self, square: Square, by_color: Color) -> list[Square]:
        """
        Squares of all pieces of `by_color` attacking the given square.

        Walks outward from the target square along the attack pattern of every piece type (see ATTACK_RULES),
        so the square itself may be empty or occupied by either color.
        """
        found: list[Square] = []
        for attack_rule in ATTACK_RULES:
            found.extend(attack_rule(square, by_color, self))
        return found

    def is_attacked(self, square: Square, by_color: Color) -> bool:
        return any(attack_rule(square, by_color, self) for attack_rule in ATTACK_RULES)

    def is_any_under_attack(self, squares: Iterable[Square], by_color: Color) -> bool:
        return any(self.is_attacked(square, by_color) for square in squares)

    def is_check(self, color: Color) -> bool:
        """Is the king of the given color under attack? A board without that king is never in check."""
        king_square = self.king_square(color)
        if king_square is None:
            return False
        return self.is_attacked(king_square, color.opponent)

    # --- MOVES ---
    def generate_candidate_moves(self, color: Color) -> list[NormalMove]:
        """
        Before knowing the set of legal moves, we use raycasting to find candidate moves, which will later be tested for legality
        (making sure it does not put yourself in check.)

        ---
        NOTE: En passant and castling are taken care of by the generator.
        """
        candidate_moves: list[NormalMove] = []
        for starting_square in self.locate_color(color):
            piece = self.position[starting_square]
            movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.role]
            candidate_moves.extend(movement_rule(starting_square, self))
        return candidate_moves

    def after(self, move: Move, color: Color) -> "Board":
        """
        Hypothetical board after `color` plays the move. The move is assumed pseudo-legal.

        Castling displaces both the king and the rook, en passant removes the pawn standing next to the moving pawn.
        """
        position = dict(self.position)
        match move:
            case NormalMove():
                del position[move.from_square]
                position[move.to_square] = Piece(color, move.promotion or move.role)
            case EnPassantMove():
                del position[move.from_square]
                del position[move.captured_square]
                position[move.to_square] = Piece(color, Role.PAWN)
            case CastleMove():
                del position[move.king_from]
                del position[move.rook_from]
                position[move.king_to] = Piece(color, Role.KING)
                position[move.rook_to] = Piece(color, Role.ROOK)
            case PutMove():
                position[move.to_square] = Piece(color, move.role)
        return Board(position)

    def count_pieces(self, color: Color, role: Optional[Role] = None) -> int:
        return sum(
            1
            for piece in self.position.values()
            if piece.color == color and (role is None or piece.role == role)
        )
