"""Orchestration of communication from API router to the chess domain layer."""

import logging

from legalmoves.chess.fen import parse
from legalmoves.chess.generator import legal_moves
from legalmoves.chess.serializer import OutputRecord, serialize_all
from legalmoves.core.config import Settings
from legalmoves.core.exceptions import FenError

logger = logging.getLogger(__name__)


class LegalMovesService:
    """Decoded FEN in, serialized legal moves out. Holds no state between requests besides its settings."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def legal_moves(self, fen: str) -> list[OutputRecord]:
        """
        Parse the FEN, generate the legal moves and serialize them.
        ----
        Any FenError propagates to the caller (after being logged), there is no fallback position.
        """
        try:
            position = parse(
                fen, reject_opponent_in_check=self.settings.reject_opponent_in_check
            )
        except FenError as exc:
            logger.info("Rejected FEN %r: %s: %s", fen, type(exc).__name__, exc)
            raise

        records = serialize_all(legal_moves(position), position)
        logger.info("Returning legal moves for FEN: %s", fen)
        return records

