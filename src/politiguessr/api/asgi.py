"""ASGI entrypoint, served with e.g. ``uvicorn politiguessr.api.asgi:app``."""

import logging

from politiguessr.api.app import create_app
from politiguessr.config import Settings
from politiguessr.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
logging.getLogger(__name__).info(
    "Politiguessr API ready: environment=%s", settings.environment
)
