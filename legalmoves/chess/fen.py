"""
FEN parser: turns a FEN string into a Position, or tells exactly why it cannot.

Parsing happens in two passes:
1. field level: every whitespace separated field is checked on its own (and against the active color for the en passant square)
2. position level: the decoded fields must describe a position that can occur in a game of standard chess
"""

from typing import Optional

from legalmoves.chess.board import Board
from legalmoves.chess.castling import CASTLING_RULES, CastlingDirection, castling_from_fen
from legalmoves.chess.pieces import FEN_TO_COLOR, Color, Piece, Role
from legalmoves.chess.position import Position
from legalmoves.chess.square import (
    BOARD_DIMENSIONS,
    Square,
    is_aligned,
    is_between,
    is_valid_square,
)
from legalmoves.core.exceptions import (
    FenError,
    FieldCountMismatchError,
    IllegalPositionError,
    InvalidCastlingError,
    InvalidColorError,
    InvalidCounterError,
    InvalidEnPassantError,
)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

NUM_FIELDS = 6
NUM_FIELDS_WO_COUNTERS = 4
DEFAULT_COUNTERS = ("0", "1")

MAX_PIECES_PER_COLOR = 16
MAX_PAWNS_PER_COLOR = 8
MAX_CHECKERS = 2

# Pieces a player starts with. Anything beyond these must have been promoted from a pawn.
STARTING_MATERIAL = {Role.QUEEN: 1, Role.ROOK: 2, Role.KNIGHT: 2}
BISHOPS_PER_SQUARE_COLOR = 1


# --- FIELD LEVEL ---
def split_fields(fen: str) -> list[str]:
    """
    FEN is whitespace separated. The two move counters may be left out, they then default to '0 1'.
    """
    fields = fen.split()
    if len(fields) == NUM_FIELDS_WO_COUNTERS:
        fields.extend(DEFAULT_COUNTERS)
    if len(fields) != NUM_FIELDS:
        raise FieldCountMismatchError(
            f"Expected {NUM_FIELDS} (or {NUM_FIELDS_WO_COUNTERS}) fields in FEN, found {len(fields)}: {fen!r}"
        )
    return fields


def parse_color(color: str) -> Color:
    if color not in FEN_TO_COLOR:
        raise InvalidColorError(f"Active color must be 'w' or 'b', not {color!r}")
    return FEN_TO_COLOR[color]


def is_valid_castling_rights(castling: str) -> bool:
    """A valid castling encoding has either KQkq, Kq, etc. (no duplicates) or a '-' if all rights have been revoked."""
    if castling == "-":
        return True
    allowed = {direction.value for direction in CastlingDirection}
    return (
        len(castling) > 0
        and set(castling) <= allowed
        and len(set(castling)) == len(castling)
    )


def parse_castling(castling: str) -> frozenset[CastlingDirection]:
    if not is_valid_castling_rights(castling):
        raise InvalidCastlingError(f"Cannot interpret castling rights: {castling!r}")
    return castling_from_fen(castling)


def en_passant_rank(turn: Color) -> int:
    """The square skipped over by the last double pawn push: 6th rank if white is to move, 3rd rank otherwise"""
    return BOARD_DIMENSIONS[1] - 3 if turn == Color.WHITE else 2


def parse_en_passant(en_passant: str, turn: Color) -> Optional[Square]:
    if en_passant == "-":
        return None
    if not is_valid_square(en_passant):
        raise InvalidEnPassantError(f"Cannot interpret en passant square: {en_passant!r}")

    square = Square.from_algebraic(en_passant)
    if square.rank != en_passant_rank(turn):
        raise InvalidEnPassantError(
            f"En passant square {en_passant!r} is on the wrong rank for {turn} to move"
        )
    return square


def parse_counter(counter: str, name: str) -> int:
    if not (counter.isascii() and counter.isdigit()):
        raise InvalidCounterError(f"{name} must be a non-negative integer, not {counter!r}")
    return int(counter)


# --- POSITION LEVEL ---
def validate_position(position: Position, reject_opponent_in_check: bool = True) -> None:
    """
    Check the decoded fields describe a position that can occur in a game of standard chess.

    * exactly one king per color
    * no pawns on the first or last rank
    * no more pieces than a player starts with (promotions only swap a pawn for another piece)
    * every piece beyond the starting set must have been promoted from one of the missing pawns
    * castling rights match king and rook still standing on their starting squares
    * an en passant square must have the pawn that just skipped it standing in front of it
    * the player who just moved cannot have left their king in check
    * the check on the side to move must be explainable by the last move, see `_validate_checkers()`
    """
    board = position.board
    for color in Color:
        num_kings = board.count_pieces(color, Role.KING)
        if num_kings != 1:
            raise IllegalPositionError(f"Expected exactly one {color} king, found {num_kings}")

        if board.count_pieces(color) > MAX_PIECES_PER_COLOR:
            raise IllegalPositionError(f"Too many {color} pieces on the board")

        num_pawns = board.count_pieces(color, Role.PAWN)
        if num_pawns > MAX_PAWNS_PER_COLOR:
            raise IllegalPositionError(f"Too many {color} pawns on the board")

        if num_pawns + promoted_pieces(board, color) > MAX_PAWNS_PER_COLOR:
            raise IllegalPositionError(
                f"{color} has more promoted pieces than missing pawns"
            )

    back_ranks = (0, BOARD_DIMENSIONS[1] - 1)
    for square, piece in board.position.items():
        if piece.role == Role.PAWN and square.rank in back_ranks:
            raise IllegalPositionError(
                f"Pawn on the first or last rank: {square.to_algebraic()}"
            )

    for direction in position.castling:
        rule = CASTLING_RULES[direction]
        has_king = board.piece_at(rule.king_from) == Piece(direction.color, Role.KING)
        has_rook = board.piece_at(rule.rook_from) == Piece(direction.color, Role.ROOK)
        if not (has_king and has_rook):
            raise IllegalPositionError(
                f"Castling right {direction.value!r} without king and rook on their starting squares"
            )

    if position.en_passant_square is not None:
        _validate_en_passant_square(position)

    if board.is_check(position.turn.opponent) and reject_opponent_in_check:
        raise IllegalPositionError(
            f"{position.turn.opponent} is in check while {position.turn} is to move"
        )

    _validate_checkers(position)


def _validate_en_passant_square(position: Position) -> None:
    """The opponent's pawn just moved from the square behind the en passant square to the one in front of it."""
    ep_square = position.en_passant_square
    assert ep_square is not None

    forward = position.turn.forward
    origin_square = ep_square.offset(0, forward)
    pawn_square = ep_square.offset(0, -forward)
    opponent_pawn = Piece(position.turn.opponent, Role.PAWN)
    if (
        position.board.piece_at(ep_square) is not None
        or position.board.piece_at(origin_square) is not None
        or position.board.piece_at(pawn_square) != opponent_pawn
    ):
        raise InvalidEnPassantError(
            f"No pawn can have just skipped over en passant square {ep_square.to_algebraic()!r}"
        )


def promoted_pieces(board: Board, color: Color) -> int:
    """Pieces beyond the starting set: 1 queen, 2 rooks, 2 knights and a bishop on each square color."""
    promoted = sum(
        max(0, board.count_pieces(color, role) - allowed)
        for role, allowed in STARTING_MATERIAL.items()
    )
    bishops = board.locate(Piece(color, Role.BISHOP))
    light_bishops = sum(1 for square in bishops if square.is_light)
    for count in (light_bishops, len(bishops) - light_bishops):
        promoted += max(0, count - BISHOPS_PER_SQUARE_COLOR)
    return promoted


def _validate_checkers(position: Position) -> None:
    """
    Checks on the side to move must be explainable by the last move.

    * at most two checkers, never both on one line through the king
    * with an en passant square set, the double pushed pawn gave the check,
      or it uncovered the check of a single piece by leaving its starting square
    """
    checkers = position.checkers()
    if not checkers:
        return

    king_square = position.king_square(position.turn)
    assert king_square is not None
    if len(checkers) > MAX_CHECKERS:
        raise IllegalPositionError(f"{position.turn} is in check by more than {MAX_CHECKERS} pieces")

    ep_square = position.en_passant_square
    if ep_square is not None:
        forward = position.turn.forward
        pushed_from = ep_square.offset(0, forward)
        pushed_to = ep_square.offset(0, -forward)
        checker = checkers[0]
        if len(checkers) > 1 or not (
            checker == pushed_to or is_between(pushed_from, king_square, checker)
        ):
            raise IllegalPositionError(
                f"Check on {position.turn} does not follow from a pawn push to {pushed_to.to_algebraic()}"
            )
    elif len(checkers) == 2 and is_aligned(checkers[0], king_square, checkers[1]):
        raise IllegalPositionError(
            f"{position.turn} is in check by two pieces on one line through the king"
        )


# --- ENTRY POINTS ---
def parse(fen: str, *, reject_opponent_in_check: bool = True) -> Position:
    """Parse the FEN into a Position. Raises a FenError subclass naming the first problem found."""
    (
        placement,
        active_color,
        castling_str,
        en_passant_algebraic,
        halfmove_clock,
        fullmove_number,
    ) = split_fields(fen)

    board = Board.from_fen(placement)
    turn = parse_color(active_color)
    castling = parse_castling(castling_str)
    en_passant_square = parse_en_passant(en_passant_algebraic, turn)
    position = Position(
        board=board,
        turn=turn,
        castling=castling,
        en_passant_square=en_passant_square,
        halfmove_clock=parse_counter(halfmove_clock, "Half move clock"),
        fullmove_number=parse_counter(fullmove_number, "Full move number"),
    )

    validate_position(position, reject_opponent_in_check)
    return position


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation and describes a legal position.
    """
    try:
        parse(fen)
    except FenError:
        return False
    return True


def starting_position() -> Position:
    return parse(STARTING_FEN)
