"""Run the server: `python -m toolhub [--host H] [--port P] [--reload]`."""
from __future__ import annotations

import argparse
import sys

import uvicorn

from toolhub.config import ConfigError, load_settings
from toolhub.logging_conf import get_logger, setup_logging


def parse_args(argv: list[str], *, default_host: str, default_port: int) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="toolhub", description="toolhub HTTP server")
    parser.add_argument("--host", default=default_host)
    parser.add_argument("--port", type=int, default=default_port)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (dev only)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging()
        get_logger("app").error("config.invalid", extra={"event": "config_invalid", "error": str(e)})
        raise SystemExit(2) from e

    setup_logging(settings.log_level)
    args = parse_args(
        sys.argv[1:] if argv is None else argv,
        default_host=settings.host,
        default_port=settings.port,
    )
    get_logger("app").info(
        "server.listen",
        extra={"event": "server_listen", "host": args.host, "port": args.port},
    )
    uvicorn.run("toolhub.main:app", host=args.host, port=args.port, reload=args.reload, log_config=None)


if __name__ == "__main__":
    main()
