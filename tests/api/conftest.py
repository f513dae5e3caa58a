import pytest
from fastapi.testclient import TestClient

from backend.app import create_app
from buddy_pocket.sync import NullProfileSync


@pytest.fixture
def profile_sync() -> NullProfileSync:
    return NullProfileSync()


@pytest.fixture
def client(engine, settings, profile_sync):
    app = create_app(settings=settings, engine=engine, profile_sync=profile_sync)
    with TestClient(app) as c:
        yield c
