"""
Legal move generation for the side to move.

Two phases:
1. pseudo-legal candidates: the movement rules of every piece, plus en passant and castling
2. legality filter: play every candidate on a copy of the board and drop it if the own king ends up attacked

The filter takes care of pins, discovered checks and moving out of check, there is no separate pin detection.
"""

from legalmoves.chess.castling import CASTLING_RULES, CastlingDirection, castling_options
from legalmoves.chess.moves import (
    MOVE_KIND_ORDER,
    PROMOTION_OPTIONS,
    CastleMove,
    EnPassantMove,
    Move,
    NormalMove,
    PutMove,
    candidate_castling_move,
    en_passant_moves,
)
from legalmoves.chess.position import Position
from legalmoves.chess.square import ALL_SQUARES, Square


def legal_moves(position: Position) -> list[Move]:
    """
    List of legal moves for the side to move, in a deterministic order
    ----

    ----
    **Combines the following**

    1. generate candidate moves, using the basic movement rules for all pieces (the board does this calculation, promotions included)
    2. add candidate en passant moves
    3. add castling moves (only those that pass all castling checks)
    4. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
    5. sort by source square, move kind, destination square and promotion piece

    An empty list means there is no legal move at all (checkmate or stalemate), it is up to the caller to tell which.
    """
    candidate_moves: list[Move] = []
    candidate_moves.extend(position.board.generate_candidate_moves(position.turn))

    en_passant_square = position.en_passant_target()
    if en_passant_square is not None:
        candidate_moves.extend(
            en_passant_moves(en_passant_square, position.turn, position.board)
        )

    candidate_moves.extend(
        candidate_castling_move(direction)
        for direction in legal_castling_directions(position)
    )

    legal = [
        move for move in candidate_moves if not is_putting_yourself_in_check(position, move)
    ]
    return sorted(legal, key=move_sort_key)


def is_putting_yourself_in_check(position: Position, move: Move) -> bool:
    """Return True if the move leaves the mover's king attacked

    plan:
    1. Copy the board with the candidate move applied
    2. determine if king is in check on the new board
    """
    board = position.board.after(move, position.turn)
    return board.is_check(position.turn)


def legal_castling_directions(position: Position) -> list[CastlingDirection]:
    """
    Find the legal castling directions for the side to move
    ---

    **you are allowed to castle if**

    * You are not currently in check (you cannot castle out of check).
    * Castling rights are not yet revoked.
    * All squares in between king and rook are empty.
    * None of the squares the king crosses (its destination included) is under attack.
    """
    color = position.turn
    if position.is_check():
        return []

    board = position.board
    opponent_color = color.opponent
    legal_directions: list[CastlingDirection] = []
    for direction in castling_options(color):
        if direction not in position.castling_rights():
            continue

        rule = CASTLING_RULES[direction]
        if board.is_any_occupied(rule.squares_between()):
            continue

        if board.is_any_under_attack(rule.king_path(), opponent_color):
            continue

        legal_directions.append(direction)
    return legal_directions


# --- ORDERING ---
PROMOTION_ORDER = {role: idx + 1 for idx, role in enumerate(PROMOTION_OPTIONS)}


def _source_square(move: Move) -> int:
    """Drops come from outside the board, they sort after all moves on the board"""
    match move:
        case NormalMove() | EnPassantMove():
            return move.from_square.index
        case CastleMove():
            return move.king_from.index
        case PutMove():
            return len(ALL_SQUARES)


def _destination_square(move: Move) -> Square:
    match move:
        case NormalMove() | EnPassantMove() | PutMove():
            return move.to_square
        case CastleMove():
            return move.king_to


def move_sort_key(move: Move) -> tuple[int, int, int, int]:
    """ascending by source square, then by move kind, then by destination square (then by promotion: queen first, none before any)"""
    promotion = (
        PROMOTION_ORDER[move.promotion]
        if isinstance(move, NormalMove) and move.promotion
        else 0
    )
    return (
        _source_square(move),
        MOVE_KIND_ORDER[move.kind],
        _destination_square(move).index,
        promotion,
    )
