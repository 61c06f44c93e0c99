from __future__ import annotations

from tailor_store.adapters.inbound.web.fastapi_app import create_app
from tailor_store.bootstrap import build_usecases
from tailor_store.config import load_settings
from tailor_store.shared.logger import init_logging

settings = load_settings()
init_logging(level=settings.log_level, json_mode=settings.log_json)

usecases = build_usecases(settings)
app = create_app(usecases)
