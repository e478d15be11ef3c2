"""
Move kinds + geometry/base movement and capturing/attacking rules

Key idea: Use strategy pattern to define pseudo-legal move sets for each piece type.


Legality is checked later by the generator
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Optional, Protocol

from legalmoves.chess.castling import (
    CASTLING_RULES,
    CastlingDirection,
    direction_from_rook_square,
)
from legalmoves.chess.pieces import ROLE_TO_FEN, Color, Piece, Role
from legalmoves.chess.square import BOARD_DIMENSIONS, Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]


class MoveKind(Enum):
    """Values are the tokens used in the serialized output. Declaration order is the sort order."""

    NORMAL = "Normal"
    EN_PASSANT = "EnPassant"
    CASTLE = "Castle"
    PUT = "Put"


MOVE_KIND_ORDER: dict[MoveKind, int] = {kind: idx for idx, kind in enumerate(MoveKind)}


# --- MOVE KINDS ---
@dataclass(frozen=True)
class NormalMove:
    """Any move of a single piece, captures and promotions included"""

    kind: ClassVar[MoveKind] = MoveKind.NORMAL

    role: Role
    from_square: Square
    to_square: Square
    capture: Optional[Role] = None
    promotion: Optional[Role] = None

    def to_uci(self) -> str:
        piece_char = ROLE_TO_FEN[self.promotion] if self.promotion else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"


@dataclass(frozen=True)
class EnPassantMove:
    """The captured piece is always a pawn, standing next to the moving pawn"""

    kind: ClassVar[MoveKind] = MoveKind.EN_PASSANT

    from_square: Square
    to_square: Square

    @property
    def captured_square(self) -> Square:
        return Square(self.to_square.file, self.from_square.rank)

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


@dataclass(frozen=True)
class CastleMove:
    """The rook square tells which way the king castles"""

    kind: ClassVar[MoveKind] = MoveKind.CASTLE

    king_from: Square
    rook_from: Square

    @property
    def direction(self) -> CastlingDirection:
        return direction_from_rook_square(self.rook_from)

    @property
    def king_to(self) -> Square:
        return CASTLING_RULES[self.direction].king_to

    @property
    def rook_to(self) -> Square:
        return CASTLING_RULES[self.direction].rook_to

    def to_uci(self) -> str:
        return f"{self.king_from.to_algebraic()}{self.king_to.to_algebraic()}"


@dataclass(frozen=True)
class PutMove:
    """Piece drop. Part of the model for completeness: standard chess has no hand to drop from."""

    kind: ClassVar[MoveKind] = MoveKind.PUT

    role: Role
    to_square: Square

    def to_uci(self) -> str:
        return f"{ROLE_TO_FEN[self.role].upper()}@{self.to_square.to_algebraic()}"


Move = NormalMove | EnPassantMove | CastleMove | PutMove


# --- MOVEMENT RULES ---
ROOK_DIRECTIONS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
BISHOP_DIRECTIONS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = ROOK_DIRECTIONS + BISHOP_DIRECTIONS


def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[NormalMove]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    piece = board.piece_at(square)
    assert piece is not None

    moves: list[NormalMove] = []
    for df, dr in directions:
        target_square = square.offset(df, dr)
        while target_square.is_within_bounds():
            occupant = board.piece_at(target_square)
            if occupant is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if occupant.color != piece.color:
                    moves.append(
                        NormalMove(piece.role, square, target_square, occupant.role)
                    )
                break

            moves.append(NormalMove(piece.role, square, target_square))
            target_square = target_square.offset(df, dr)
    return moves


def single_step_move(
    square: Square, board: Board, deltas: list[Vector]
) -> list[NormalMove]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    piece = board.piece_at(square)
    assert piece is not None

    moves: list[NormalMove] = []
    for df, dr in deltas:
        target_square = square.offset(df, dr)
        if not target_square.is_within_bounds():
            continue

        occupant = board.piece_at(target_square)
        if occupant is None:
            moves.append(NormalMove(piece.role, square, target_square))
        elif occupant.color != piece.color:
            moves.append(NormalMove(piece.role, square, target_square, occupant.role))
    return moves


def pawn_home_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[1] - 2


def promotion_rank(color: Color) -> int:
    return BOARD_DIMENSIONS[1] - 1 if color == Color.WHITE else 0


def candidate_pawn_moves(square: Square, board: Board) -> list[NormalMove]:
    """
    A pawn:
    - moves by a single square forward, only onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally, only when there is an opponent piece to take

    NOTE: En passant is a separate move kind, see `en_passant_moves()`
    """
    pawn = board.piece_at(square)
    assert pawn is not None
    forward = pawn.color.forward

    moves: list[NormalMove] = []
    single_push = square.offset(0, forward)
    if single_push.is_within_bounds() and board.piece_at(single_push) is None:
        moves.append(NormalMove(Role.PAWN, square, single_push))

        double_push = square.offset(0, 2 * forward)
        if square.rank == pawn_home_rank(pawn.color) and board.piece_at(double_push) is None:
            moves.append(NormalMove(Role.PAWN, square, double_push))

    # pawns take diagonally:
    for df in (-1, 1):
        target_square = square.offset(df, forward)
        if not target_square.is_within_bounds():
            continue
        occupant = board.piece_at(target_square)
        if occupant is not None and occupant.color != pawn.color:
            moves.append(NormalMove(Role.PAWN, square, target_square, occupant.role))

    expanded: list[NormalMove] = []
    for move in moves:
        if move.to_square.rank == promotion_rank(pawn.color):
            expanded.extend(pawn_moves_w_promotion(move))
        else:
            expanded.append(move)
    return expanded


def candidate_knight_moves(square: Square, board: Board) -> list[NormalMove]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[NormalMove]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, board, BISHOP_DIRECTIONS)


def candidate_rook_moves(square: Square, board: Board) -> list[NormalMove]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, ROOK_DIRECTIONS)


def candidate_queen_moves(square: Square, board: Board) -> list[NormalMove]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, board, ROOK_DIRECTIONS + BISHOP_DIRECTIONS)


def candidate_king_moves(square: Square, board: Board) -> list[NormalMove]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a separate move kind (handled by the generator).
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[NormalMove]]
MOVEMENT_RULES: dict[Role, CandidateMovesFn] = {
    Role.PAWN: candidate_pawn_moves,
    Role.KNIGHT: candidate_knight_moves,
    Role.BISHOP: candidate_bishop_moves,
    Role.ROOK: candidate_rook_moves,
    Role.QUEEN: candidate_queen_moves,
    Role.KING: candidate_king_moves,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attackers(
    square: Square,
    by_color: Color,
    by_roles: tuple[Role, ...],
    board: Board,
    directions: list[Vector],
) -> list[Square]:
    """
    Raycasting algorithm for attacks.
    ---

    ---
    Similar to raycasting moves.
    However, where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_


    This function determines:
    _"Which pieces of the specified color and types, allowed to move along the given directions, have the specified square in their line-of-sight?"_

    ---
    Returns the squares of those pieces.
    """
    found: list[Square] = []
    for df, dr in directions:
        target_square = square.offset(df, dr)
        while target_square.is_within_bounds():
            piece_found = board.piece_at(target_square)
            if piece_found is not None:
                # only the first occupied square along the ray can be attacking.
                if piece_found.color == by_color and piece_found.role in by_roles:
                    found.append(target_square)
                break
            target_square = target_square.offset(df, dr)
    return found


def single_step_attackers(
    square: Square,
    by_color: Color,
    by_role: Role,
    board: Board,
    deltas: list[Vector],
) -> list[Square]:
    """
    Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights that just can move a single step along a direction.
    """
    found: list[Square] = []
    for df, dr in deltas:
        target_square = square.offset(df, dr)
        if not target_square.is_within_bounds():
            continue

        if board.piece_at(target_square) == Piece(by_color, by_role):
            found.append(target_square)
    return found


def pawn_attackers(square: Square, by_color: Color, board: Board) -> list[Square]:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric, so to check IF a white pawn could take on your square -->
    Must look one rank DOWN the board. That is, you are asking "Could a white pawn, that moves UP the board, take on the specified square?"

    Hence, vectors are exactly opposite to the ones used to check if you could move to a square by taking (see `candidate_pawn_moves()`)
    """
    backward = -by_color.forward
    inverse_pawn_take_deltas: list[Vector] = [(1, backward), (-1, backward)]
    return single_step_attackers(
        square, by_color, Role.PAWN, board, inverse_pawn_take_deltas
    )


def knight_attackers(square: Square, by_color: Color, board: Board) -> list[Square]:
    return single_step_attackers(square, by_color, Role.KNIGHT, board, KNIGHT_DELTAS)


def diagonal_attackers(square: Square, by_color: Color, board: Board) -> list[Square]:
    """Bishops and queens share the diagonals"""
    return raycasting_attackers(
        square, by_color, (Role.BISHOP, Role.QUEEN), board, BISHOP_DIRECTIONS
    )


def straight_attackers(square: Square, by_color: Color, board: Board) -> list[Square]:
    """Rooks and queens share the ranks and files"""
    return raycasting_attackers(
        square, by_color, (Role.ROOK, Role.QUEEN), board, ROOK_DIRECTIONS
    )


def king_attackers(square: Square, by_color: Color, board: Board) -> list[Square]:
    return single_step_attackers(square, by_color, Role.KING, board, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
AttackersFn = Callable[[Square, Color, Board], list[Square]]
ATTACK_RULES: tuple[AttackersFn, ...] = (
    pawn_attackers,
    knight_attackers,
    diagonal_attackers,
    straight_attackers,
    king_attackers,
)


# -- CASTLING MOVES ---
def candidate_castling_move(direction: CastlingDirection) -> CastleMove:
    rule = CASTLING_RULES[direction]
    return CastleMove(king_from=rule.king_from, rook_from=rule.rook_from)


# -- EN PASSANT MOVES ---
def en_passant_moves(
    en_passant_square: Square, color: Color, board: Board
) -> list[EnPassantMove]:
    """Given a target en passant square, check the adjacent files (in the rank one up/down from the en passant square) for pawns of the correct color."""

    # NOTE: En passant square is behind the opponent's pawn, so our pawns stand one rank back from it.
    own_pawn = Piece(color, Role.PAWN)
    moves: list[EnPassantMove] = []
    for df in (-1, 1):
        maybe_pawn_square = en_passant_square.offset(df, -color.forward)
        if not maybe_pawn_square.is_within_bounds():
            continue
        if board.piece_at(maybe_pawn_square) == own_pawn:
            moves.append(
                EnPassantMove(from_square=maybe_pawn_square, to_square=en_passant_square)
            )
    return moves


# -- PAWN PROMOTION MOVES --
PROMOTION_OPTIONS: list[Role] = [
    Role.QUEEN,
    Role.ROOK,
    Role.BISHOP,
    Role.KNIGHT,
]


def pawn_moves_w_promotion(pawn_move: NormalMove) -> list[NormalMove]:
    """Return multiple copies of the pawn move with the piece type to promote into filled in."""
    return [
        NormalMove(
            role=pawn_move.role,
            from_square=pawn_move.from_square,
            to_square=pawn_move.to_square,
            capture=pawn_move.capture,
            promotion=role,
        )
        for role in PROMOTION_OPTIONS
    ]
