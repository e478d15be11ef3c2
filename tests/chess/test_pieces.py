"""Unit tests for /legalmoves/chess/pieces.py"""

import pytest

from legalmoves.chess.pieces import Color, Piece, Role


@pytest.mark.parametrize(
    "character, color, role",
    [
        ("P", Color.WHITE, Role.PAWN),
        ("n", Color.BLACK, Role.KNIGHT),
        ("B", Color.WHITE, Role.BISHOP),
        ("r", Color.BLACK, Role.ROOK),
        ("Q", Color.WHITE, Role.QUEEN),
        ("k", Color.BLACK, Role.KING),
    ],
)
def test_piece_from_fen(character: str, color: Color, role: Role) -> None:
    """Upper case for white, lower case for black"""
    piece = Piece.from_fen(character)
    assert piece == Piece(color, role)
    assert piece.to_fen() == character


def test_opponent() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE


def test_forward() -> None:
    """White moves up the board, black down"""
    assert Color.WHITE.forward == 1
    assert Color.BLACK.forward == -1


def test_role_tokens() -> None:
    """The values end up in the API output"""
    assert [role.value for role in Role] == [
        "Pawn",
        "Knight",
        "Bishop",
        "Rook",
        "Queen",
        "King",
    ]
