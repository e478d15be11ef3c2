"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase
from typing import Optional

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """Zero-based coordinates: a1 is (0, 0), h8 is (7, 7)"""

    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0].lower()) - ord("a")
        rank = int(sq[1:]) - 1
        return cls(file, rank)

    @classmethod
    def from_index(cls, index: int) -> Square:
        return cls(index % BOARD_DIMENSIONS[0], index // BOARD_DIMENSIONS[0])

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"

    @property
    def index(self) -> int:
        """a1 = 0, b1 = 1, ..., h8 = 63. Used to order moves."""
        return self.rank * BOARD_DIMENSIONS[0] + self.file

    @property
    def name(self) -> str:
        """Token used in the serialized output, ex. 'E1'"""
        return self.to_algebraic().upper()

    @property
    def is_light(self) -> bool:
        """a1 is a dark square"""
        return (self.file + self.rank) % 2 == 1

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )


def is_valid_square(square: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    num_files, num_ranks = BOARD_DIMENSIONS
    if len(square) < 2:
        return False

    # NOTE: The following works as long as we do not go beyond 26 files.
    file_char, rank_char = square[0], square[1:]
    if file_char not in ascii_lowercase[:num_files]:
        return False

    if not (rank_char.isascii() and rank_char.isdigit()):
        return False

    # "e03" would be read as e3
    if rank_char.startswith("0"):
        return False

    return 1 <= int(rank_char) <= num_ranks


def line_direction(from_square: Square, to_square: Square) -> Optional[tuple[int, int]]:
    """Unit step from one square towards the other, if they share a file, rank or diagonal."""
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank
    if (df, dr) == (0, 0):
        return None
    if df == 0 or dr == 0 or abs(df) == abs(dr):
        return ((df > 0) - (df < 0), (dr > 0) - (dr < 0))
    return None


def distance(a: Square, b: Square) -> int:
    """Number of king steps between the squares"""
    return max(abs(a.file - b.file), abs(a.rank - b.rank))


def is_aligned(a: Square, b: Square, c: Square) -> bool:
    """Is c on the (infinite) line through a and b?"""
    direction = line_direction(a, b)
    if direction is None:
        return False
    if c == a:
        return True
    return line_direction(a, c) in (direction, (-direction[0], -direction[1]))


def is_between(square: Square, a: Square, b: Square) -> bool:
    """Is the square on the line segment from a to b, both ends excluded?"""
    direction = line_direction(a, b)
    return (
        direction is not None
        and line_direction(a, square) == direction
        and distance(a, square) < distance(a, b)
    )


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square.from_index(index) for index in range(BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1])
)
