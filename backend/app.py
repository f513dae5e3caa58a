import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend.routes import router
from buddy_pocket.config import Settings, load_settings
from buddy_pocket.engine import BuddyEngine
from buddy_pocket.sync import ProfileSync, profile_sync_from_settings

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(
    data_dir: Path | None = None,
    settings: Settings | None = None,
    engine: BuddyEngine | None = None,
    profile_sync: ProfileSync | None = None,
) -> FastAPI:
    if settings is None:
        resolved = data_dir or Path(os.getenv("BUDDY_DATA_DIR", str(DEFAULT_DATA_DIR)))
        settings = load_settings(resolved)
    if engine is None:
        engine = BuddyEngine.from_settings(settings)
    if profile_sync is None:
        profile_sync = profile_sync_from_settings(settings.sync_url, settings.sync_api_key)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("flushing state on shutdown")
        engine.close()

    app = FastAPI(title="BuddyPocket", lifespan=lifespan)
    app.state.engine = engine
    app.state.profile_sync = profile_sync
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses BUDDY_DATA_DIR env var or default)
app = create_app()
