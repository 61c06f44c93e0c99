from __future__ import annotations

import sys

import uvicorn

from tailor_store.adapters.inbound.cli import run_cli
from tailor_store.bootstrap import build_usecases
from tailor_store.config import load_settings
from tailor_store.shared.logger import init_logging

USAGE = (
    "usage: tailor-store [serve]\n"
    "       tailor-store browse '<json>'\n"
    "       tailor-store place-order '<json>'"
)


def serve() -> None:
    settings = load_settings()
    uvicorn.run(
        "tailor_store.asgi:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] == "serve":
        serve()
        return 0

    if len(argv) != 2:
        print(USAGE)
        return 2

    settings = load_settings()
    init_logging(level=settings.log_level, json_mode=settings.log_json)
    return run_cli(build_usecases(settings), argv[0], argv[1])


if __name__ == "__main__":
    raise SystemExit(main())
