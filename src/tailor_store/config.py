"""Runtime settings.

Sources, lowest priority first: built-in defaults, an optional YAML file
(path in `TAILOR_STORE_CONFIG`), then environment variables (a `.env` file
in the working directory is loaded first).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from dotenv import load_dotenv

from tailor_store.shared.logger import get_logger

logger = get_logger("config")

ENV_PREFIX = "TAILOR_STORE_"
CONFIG_PATH_ENV = "TAILOR_STORE_CONFIG"


@dataclass(frozen=True)
class Settings:
    store: str = "memory"  # memory | json
    data_dir: str = "data"
    seed_demo: bool = True
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_json: bool = False


def _coerce(raw: Any, current: Any) -> Any:
    if isinstance(current, bool):
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(current, int):
        return int(raw)
    return str(raw)


def _overlay(settings: Settings, values: Mapping[str, Any], source: str) -> Settings:
    known = {f.name for f in fields(Settings)}
    changes: Dict[str, Any] = {}
    for key, raw in values.items():
        if key not in known:
            logger.warning("ignoring unknown setting %r from %s", key, source)
            continue
        try:
            changes[key] = _coerce(raw, getattr(settings, key))
        except (TypeError, ValueError):
            raise ValueError(f"invalid value for {key} in {source}: {raw!r}") from None
    return replace(settings, **changes)


def _from_yaml(path: Path) -> Mapping[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        node = yaml.safe_load(fh) or {}
    if not isinstance(node, dict):
        raise ValueError(f"{path} must contain a mapping")
    return node


def _from_env(environ: Mapping[str, str]) -> Mapping[str, Any]:
    return {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and key != CONFIG_PATH_ENV
    }


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    use_dotenv: bool = True,
) -> Settings:
    if environ is None:
        if use_dotenv:
            load_dotenv()
        environ = os.environ

    settings = Settings()

    config_path = environ.get(CONFIG_PATH_ENV)
    if config_path:
        path = Path(config_path)
        if path.exists():
            settings = _overlay(settings, _from_yaml(path), str(path))
        else:
            logger.warning("config file %s not found, using defaults", path)

    settings = _overlay(settings, _from_env(environ), "environment")
    logger.debug("settings loaded: %s", settings)
    return settings
