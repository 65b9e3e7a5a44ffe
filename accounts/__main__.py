"""Run the API with uvicorn: `python -m accounts [--host H] [--port P]`."""
from __future__ import annotations

import argparse

import uvicorn

from accounts.app import create_app
from accounts.core.config import get_settings
from accounts.core.logging_config import configure_logging, get_logging_config


def main() -> None:
    ap = argparse.ArgumentParser(description="Accounts API server")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    args = ap.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=args.host,
        port=args.port,
        log_config=get_logging_config(settings.log_level),
    )


if __name__ == "__main__":
    main()
