from fastapi import FastAPI
from typing import Optional
import config
from logging_config import setup_logging

from routers.health import router as health_router
from routers.transcribe import router as transcribe_router


def create_app(settings: Optional[config.Settings] = None) -> FastAPI:
    settings = settings or config.load_config()

    setup_logging(settings.log_path, settings.log_level)

    app = FastAPI(title="voice-relay")
    app.state.settings = settings
    app.include_router(health_router)
    app.include_router(transcribe_router)

    return app
