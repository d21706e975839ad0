"""
Run the TalentMatch API under uvicorn.

Usage:
    python server_entry.py [--host 127.0.0.1] [--port 8000] [--log-level info]

Defaults come from TALENTMATCH_HOST, TALENTMATCH_PORT (or PORT) and
TALENTMATCH_LOG_LEVEL.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

import uvicorn
from talentmatch.config import settings
from talentmatch.logger import configure_logging, is_configured
from talentmatch.main import app as fastapi_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the TalentMatch API")
    parser.add_argument("--host", default=os.getenv("TALENTMATCH_HOST") or "127.0.0.1")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("TALENTMATCH_PORT") or os.getenv("PORT") or "8000"),
    )
    parser.add_argument(
        "--log-level",
        default=(os.getenv("TALENTMATCH_LOG_LEVEL") or settings.log_level).lower(),
        help="uvicorn and application log level (default: %(default)s)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if not is_configured():
        configure_logging(args.log_level.upper(), settings.log_dir)

    uvicorn.run(fastapi_app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
