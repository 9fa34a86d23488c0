#!/usr/bin/env python3
"""
IdeaBoard -- Project idea sharing API server.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 0.0.0.0 --port 3000
  python main.py --reload

Environment variables (see core/config.py for the full list):
  SECRET_KEY     JWT signing key (32+ chars). JWT_SECRET is accepted too.
  DATABASE_URL   SQLAlchemy URL. Defaults to a SQLite file next to this script.
  HTTP_PORT      Default port when --port is not given (3000).
"""

import argparse

import uvicorn

from core.config import get_settings


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="IdeaBoard -- serve the project ideas REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--host",
        default=settings.http_host,
        help=f"Interface to bind (default: {settings.http_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.http_port,
        help=f"Port to listen on (default: {settings.http_port}, from HTTP_PORT)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change (development only)",
    )
    args = parser.parse_args()

    print(f"Server is running on port {args.port}")
    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
