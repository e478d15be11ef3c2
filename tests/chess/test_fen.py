"""Unit tests for /legalmoves/chess/fen.py"""

import pytest

from legalmoves.chess.castling import CastlingDirection
from legalmoves.chess.fen import (
    STARTING_FEN,
    en_passant_rank,
    is_valid_castling_rights,
    is_valid_fen,
    parse,
    parse_counter,
    parse_en_passant,
    split_fields,
    starting_position,
)
from legalmoves.chess.pieces import Color, Piece, Role
from legalmoves.chess.square import Square
from legalmoves.core.exceptions import (
    FenError,
    FieldCountMismatchError,
    IllegalPositionError,
    InvalidCastlingError,
    InvalidColorError,
    InvalidCounterError,
    InvalidEnPassantError,
    InvalidPlacementError,
)

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


# --- FIELD LEVEL ---
def test_split_fields_adds_default_counters() -> None:
    assert split_fields("8/8/8/8/8/8/8/8 w - -") == ["8/8/8/8/8/8/8/8", "w", "-", "-", "0", "1"]


def test_split_fields_any_whitespace() -> None:
    assert len(split_fields("  8/8/8/8/8/8/8/8   w\t- -  0 1 ")) == 6


@pytest.mark.parametrize(
    "fen",
    [
        "invalid",
        "",
        "8/8/8/8/8/8/8/8 w -",  # 3 fields
        "8/8/8/8/8/8/8/8 w - - 0",  # 5 fields
        "8/8/8/8/8/8/8/8 w - - 0 1 extra",  # 7 fields
    ],
)
def test_split_fields_wrong_count(fen: str) -> None:
    with pytest.raises(FieldCountMismatchError):
        split_fields(fen)


@pytest.mark.parametrize(
    "castling, expected",
    [
        ("KQkq", True),
        ("-", True),
        ("Kq", True),
        ("qkQK", True),  # order does not matter
        ("KK", False),  # duplicate
        ("KQkqK", False),
        ("X", False),
        ("K-", False),
        ("", False),
    ],
)
def test_is_valid_castling_rights(castling: str, expected: bool) -> None:
    assert is_valid_castling_rights(castling) == expected


def test_en_passant_rank() -> None:
    """0-based: 6th rank for white to move, 3rd rank for black to move"""
    assert en_passant_rank(Color.WHITE) == 5
    assert en_passant_rank(Color.BLACK) == 2


@pytest.mark.parametrize(
    "en_passant, turn, expected",
    [
        ("-", Color.WHITE, None),
        ("e6", Color.WHITE, Square(4, 5)),
        ("a3", Color.BLACK, Square(0, 2)),
    ],
)
def test_parse_en_passant(en_passant: str, turn: Color, expected: Square | None) -> None:
    assert parse_en_passant(en_passant, turn) == expected


@pytest.mark.parametrize(
    "en_passant, turn",
    [
        ("e3", Color.WHITE),  # wrong rank for the side to move
        ("e6", Color.BLACK),
        ("e4", Color.WHITE),
        ("z6", Color.WHITE),
        ("e9", Color.WHITE),
        ("E6", Color.WHITE),
        ("e66", Color.WHITE),
        ("e06", Color.WHITE),  # leading zero
    ],
)
def test_parse_en_passant_invalid(en_passant: str, turn: Color) -> None:
    with pytest.raises(InvalidEnPassantError):
        parse_en_passant(en_passant, turn)


@pytest.mark.parametrize("counter, expected", [("0", 0), ("1", 1), ("57", 57)])
def test_parse_counter(counter: str, expected: int) -> None:
    assert parse_counter(counter, "counter") == expected


@pytest.mark.parametrize("counter", ["-1", "x", "1.5", "", "+3", "٣"])
def test_parse_counter_invalid(counter: str) -> None:
    with pytest.raises(InvalidCounterError):
        parse_counter(counter, "counter")


# --- PARSE ---
def test_parse_starting_position() -> None:
    position = parse(STARTING_FEN)
    assert position.turn == Color.WHITE
    assert position.castling == frozenset(CastlingDirection)
    assert position.en_passant_square is None
    assert position.halfmove_clock == 0
    assert position.fullmove_number == 1
    assert position.piece_at(Square(4, 0)) == Piece(Color.WHITE, Role.KING)
    assert starting_position() == position


def test_parse_en_passant_square() -> None:
    position = parse(AFTER_E4)
    assert position.turn == Color.BLACK
    assert position.en_passant_square == Square.from_algebraic("e3")


def test_parse_without_counters() -> None:
    position = parse("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -")
    assert position.halfmove_clock == 0
    assert position.fullmove_number == 1
    assert position.to_fen() == STARTING_FEN


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_FEN,
        AFTER_E4,
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
    ],
)
def test_fen_roundtrip(fen: str) -> None:
    assert parse(fen).to_fen() == fen


def test_castling_letters_are_normalized() -> None:
    fen = "r3k2r/8/8/8/8/8/8/R3K2R w qkQK - 0 1"
    assert parse(fen).to_fen() == "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


@pytest.mark.parametrize(
    "fen, error",
    [
        ("invalid", FieldCountMismatchError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0", FieldCountMismatchError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNRR w KQkq - 0 1", InvalidPlacementError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1", InvalidPlacementError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1", InvalidColorError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR W KQkq - 0 1", InvalidColorError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkqK - 0 1", InvalidCastlingError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w ABCD - 0 1", InvalidCastlingError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e9 0 1", InvalidEnPassantError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1", InvalidEnPassantError),
        # right rank, but no black pawn just moved past e6
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e6 0 1", InvalidEnPassantError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - x 1", InvalidCounterError),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 -1", InvalidCounterError),
    ],
)
def test_parse_invalid_fields(fen: str, error: type[FenError]) -> None:
    with pytest.raises(error):
        parse(fen)


@pytest.mark.parametrize(
    "fen",
    [
        "8/8/8/8/8/8/8/8 w - - 0 1",  # no kings at all
        "4k3/8/8/8/8/8/8/8 w - - 0 1",  # no white king
        "4k3/8/8/8/8/8/8/3KK3 w - - 0 1",  # two white kings
        "4k3/8/8/8/8/8/8/P3K3 w - - 0 1",  # pawn on the first rank
        "P3k3/8/8/8/8/8/8/4K3 w - - 0 1",  # pawn on the last rank
        "4k3/8/8/8/8/P7/PPPPPPPP/4K3 w - - 0 1",  # 9 white pawns
        "4k3/8/8/8/NNNNNNNN/NNNNNNNN/8/4K3 w - - 0 1",  # 17 white pieces
        "4k3/8/8/8/8/8/8/4K3 w K - 0 1",  # castling right without rook
        "4k3/8/8/8/8/8/8/R3K2R w k - 0 1",  # castling right without black rook
        "r3k2r/8/8/8/8/8/8/R4K1R w Q - 0 1",  # castling right, but king has moved
        "4k3/8/8/8/8/8/8/4R1K1 w - - 0 1",  # black is in check, but it is white's turn
        "4k3/8/8/8/1b6/5n2/8/r3K3 w - - 0 1",  # check by three pieces
        "4k3/8/8/8/8/8/8/r3K2r w - - 0 1",  # two checkers on one line through the king
        "4k3/8/8/3pP3/8/8/8/r3K3 w - d6 0 2",  # check not given or uncovered by the pawn on d5
        "4k3/8/8/8/8/8/PPPPPPPP/QQ2K3 w - - 0 1",  # 8 pawns and a second queen
        "4k3/8/8/8/8/8/PPPPPPPP/R1R1K1RN w - - 0 1",  # 8 pawns and a third rook
        "4k3/8/8/8/8/8/PPPPPPPP/2B1KB1B w - - 0 1",  # 8 pawns and two bishops on light squares
        "4k3/8/8/8/8/8/1PPPPPPP/QQNNNNK1 w - - 0 1",  # 7 pawns, but 3 promoted pieces
    ],
)
def test_parse_illegal_position(fen: str) -> None:
    with pytest.raises(IllegalPositionError):
        parse(fen)


def test_parse_opponent_in_check_allowed() -> None:
    fen = "4k3/8/8/8/8/8/8/4R1K1 w - - 0 1"
    position = parse(fen, reject_opponent_in_check=False)
    assert position.board.is_check(Color.BLACK)


def test_parse_double_check() -> None:
    position = parse("4k3/8/8/8/8/5n2/8/r3K3 w - - 0 1")
    assert set(position.checkers()) == {Square.from_algebraic("a1"), Square.from_algebraic("f3")}


@pytest.mark.parametrize(
    "fen, expected",
    [
        (STARTING_FEN, True),
        (AFTER_E4, True),
        ("invalid", False),
        ("4k3/8/8/8/8/8/8/4R1K1 w - - 0 1", False),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 2", False),
    ],
)
def test_is_valid_fen(fen: str, expected: bool) -> None:
    assert is_valid_fen(fen) == expected


@pytest.mark.parametrize(
    "fen",
    [
        "4k3/8/8/8/8/8/PPPPPPP1/QQ2K3 w - - 0 1",  # 7 pawns and a promoted queen
        "4k3/8/8/8/8/8/PPPPPPPP/2B1K2B w - - 0 1",  # one bishop on each square color
        "4k3/8/8/3p4/4K3/8/8/8 w - d6 0 2",  # check by the pawn that just moved
        "2b1k3/8/4K3/3p4/8/8/8/8 w - d6 0 2",  # the pawn uncovered the check of the bishop on c8
        "4k3/8/8/8/8/5n2/8/r3K3 w - - 0 1",  # two checkers on different lines
    ],
)
def test_parse_possible_position(fen: str) -> None:
    assert parse(fen).to_fen() == fen
