"""Single logging setup for the whole service.

Everything logs under the `tailor_store` prefix; `get_logger("orders")`
returns `tailor_store.orders`. `init_logging` attaches one console handler,
plain or JSON, and can be called again to reconfigure.
"""
from __future__ import annotations

import json
import logging
import sys
import threading
from typing import Any, Dict, Optional, Union

LOG_NAME = "tailor_store"
PLAIN_FORMAT = "%(asctime)s [%(levelname)s] (%(name)s) %(message)s"

_lock = threading.Lock()

_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


class JsonFormatter(logging.Formatter):
    """One flat JSON object per record, including `extra=` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _to_level(value: Union[str, int, None], default: int = logging.INFO) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return getattr(logging, str(value).upper(), default)


def init_logging(
    *,
    level: Optional[Union[str, int]] = None,
    json_mode: bool = False,
) -> logging.Logger:
    with _lock:
        root = logging.getLogger(LOG_NAME)
        root.setLevel(_to_level(level))

        for handler in list(root.handlers):
            if getattr(handler, "_tailor_store", False):
                root.removeHandler(handler)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT))
        handler._tailor_store = True  # type: ignore[attr-defined]
        root.addHandler(handler)

        root.debug("logging initialized level=%s json=%s", logging.getLevelName(root.level), json_mode)
        return root


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}")
