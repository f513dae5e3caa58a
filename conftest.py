import random
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from buddy_pocket.catalog import default_catalog
from buddy_pocket.config import Settings
from buddy_pocket.engine import BuddyEngine
from buddy_pocket.models import PetState
from buddy_pocket.storage import Storage

START = datetime(2026, 3, 4, 9, 0)  # a Wednesday


class FakeClock:
    """Clock that only moves when a test moves it."""

    def __init__(self, start: datetime = START) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def pet() -> PetState:
    return PetState()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def storage(data_dir: Path) -> Storage:
    return Storage(data_dir)


@pytest.fixture
def settings(data_dir: Path) -> Settings:
    return Settings(data_dir=data_dir, save_debounce_seconds=2.0)


@pytest.fixture
def engine(storage, settings, catalog, clock, rng) -> BuddyEngine:
    return BuddyEngine(storage, settings=settings, catalog=catalog, clock=clock, rng=rng)
