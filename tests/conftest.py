"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

import random

import pytest

from src.api.models import PlayerResponse, RegisterPlayerRequest
from src.db.memory_repository import InMemoryRepository
from src.services.match_service import MatchService


@pytest.fixture
def repository() -> InMemoryRepository:
    """Fresh store for every test, so tests never see each other's players or games."""
    return InMemoryRepository()


@pytest.fixture
def service(repository: InMemoryRepository) -> MatchService:
    """Service on top of an isolated store, with a seeded random source for reproducible CPU choices."""
    return MatchService(repository, rng=random.Random(1234))


@pytest.fixture
def alice(service: MatchService) -> PlayerResponse:
    player, _ = service.register_player(RegisterPlayerRequest(name="Alice"))
    return player


@pytest.fixture
def bob(service: MatchService) -> PlayerResponse:
    player, _ = service.register_player(RegisterPlayerRequest(name="Bob"))
    return player
