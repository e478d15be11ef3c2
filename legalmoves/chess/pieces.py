"""Defines the colors and roles of chess pieces"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Self


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """White moves UP the board, black moves DOWN"""
        return 1 if self == Color.WHITE else -1


class Role(StrEnum):
    """Values are the tokens used in the serialized output."""

    PAWN = "Pawn"
    KNIGHT = "Knight"
    BISHOP = "Bishop"
    ROOK = "Rook"
    QUEEN = "Queen"
    KING = "King"


FEN_TO_ROLE: dict[str, Role] = {
    "p": Role.PAWN,
    "n": Role.KNIGHT,
    "b": Role.BISHOP,
    "r": Role.ROOK,
    "q": Role.QUEEN,
    "k": Role.KING,
}

ROLE_TO_FEN: dict[Role, str] = {value: key for key, value in FEN_TO_ROLE.items()}

FEN_TO_COLOR: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}
COLOR_TO_FEN: dict[Color, str] = {value: key for key, value in FEN_TO_COLOR.items()}


@dataclass(frozen=True)
class Piece:
    color: Color
    role: Role

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        role = FEN_TO_ROLE[character.lower()]
        return cls(color, role)

    def to_fen(self) -> str:
        character = ROLE_TO_FEN[self.role]
        return character.upper() if self.color == Color.WHITE else character
