import random

import pytest
from fastapi.testclient import TestClient

from app.services.move_selector import MoveSelector
from app.services.scoreboard import InMemoryStore, ScoreBoard
from main import app


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def selector(rng):
    return MoveSelector(rng)


@pytest.fixture
def scoreboard():
    return ScoreBoard(InMemoryStore())


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
