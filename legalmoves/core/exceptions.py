"""
Exceptions raised by the domain layer and mapped to client errors by the API layer.

Every FEN rejection derives from FenError: callers that do not care about the reason can catch the base class,
the subclasses exist so the reason shows up in the logs.
"""


class FenError(ValueError):
    """The supplied string cannot be turned into a playable standard chess position."""


class FieldCountMismatchError(FenError):
    """FEN does not consist of 6 (or 4) whitespace separated fields."""


class InvalidPlacementError(FenError):
    """Piece placement field is malformed: wrong number of ranks/files or unknown characters."""


class InvalidColorError(FenError):
    """Active color is neither 'w' nor 'b'."""


class InvalidCastlingError(FenError):
    """Castling field is neither '-' nor a combination of 'KQkq' without duplicates."""


class InvalidEnPassantError(FenError):
    """En passant field is not a square a pawn could just have skipped over."""


class InvalidCounterError(FenError):
    """Half move clock or full move number is not a non-negative integer."""


class IllegalPositionError(FenError):
    """Structurally fine, but the position can not occur in a game of chess."""


class InvalidRequestError(Exception):
    """The request itself could not be interpreted (before any FEN parsing happens)."""
