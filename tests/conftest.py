"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from legalmoves.chess.fen import parse
from legalmoves.chess.position import Position
from legalmoves.core.config import Settings
from legalmoves.main import create_app


@pytest.fixture
def settings() -> Settings:
    """Defaults only: ignore whatever .env file happens to be around."""
    return Settings(_env_file=None)


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def position_from_fen() -> Callable[[str], Position]:
    """Call the inner function with a FEN to get the parsed position"""

    def _parse(fen: str) -> Position:
        return parse(fen)

    return _parse
