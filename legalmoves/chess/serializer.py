"""Convert moves into the canonical records handed to the outside world"""

from dataclasses import dataclass
from typing import Iterable, Optional, assert_never

from legalmoves.chess.moves import CastleMove, EnPassantMove, Move, NormalMove, PutMove
from legalmoves.chess.pieces import Role
from legalmoves.chess.position import Position

# `from` of a dropped piece: it does not come from a square on the board
HAND = "Hand"


@dataclass(frozen=True)
class OutputRecord:
    """Squares and roles rendered as tokens: 'E1', 'King'. Field names avoid the `from` keyword."""

    kind: str
    role: str
    from_square: str
    capture: Optional[str]
    to_square: str
    promotion: Optional[str]


def _role_name(role: Optional[Role]) -> Optional[str]:
    return role.value if role is not None else None


def serialize(move: Move, position: Position) -> OutputRecord:
    """One record per move. None of the standard move kinds need the position to be rendered."""
    match move:
        case NormalMove():
            return OutputRecord(
                kind=move.kind.value,
                role=move.role.value,
                from_square=move.from_square.name,
                capture=_role_name(move.capture),
                to_square=move.to_square.name,
                promotion=_role_name(move.promotion),
            )
        case EnPassantMove():
            return OutputRecord(
                kind=move.kind.value,
                role=Role.PAWN.value,
                from_square=move.from_square.name,
                capture=Role.PAWN.value,
                to_square=move.to_square.name,
                promotion=None,
            )
        case CastleMove():
            # the king's destination, not the square of the rook it castles with
            return OutputRecord(
                kind=move.kind.value,
                role=Role.KING.value,
                from_square=move.king_from.name,
                capture=None,
                to_square=move.king_to.name,
                promotion=None,
            )
        case PutMove():
            return OutputRecord(
                kind=move.kind.value,
                role=move.role.value,
                from_square=HAND,
                capture=None,
                to_square=move.to_square.name,
                promotion=None,
            )
        case _:
            assert_never(move)


def serialize_all(moves: Iterable[Move], position: Position) -> list[OutputRecord]:
    return [serialize(move, position) for move in moves]
