"""Command-line launcher.

Usage:
    python -m mediago_player [--host HOST] [--port PORT] [--video-root DIR] [--enable-docs]

Flags win over HTTP_ADDR / VIDEO_ROOT_PATH from the environment.
"""
from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from mediago_player.config import Settings
from mediago_player.main import create_app

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = "8080"


def build_addr(host: str, port: str, default_addr: str) -> str:
    """Combine --host/--port with the default "host:port" address."""
    if host and port:
        return f"{host}:{port}"

    default_host, sep, default_port = default_addr.rpartition(":")
    if not sep:
        default_host, default_port = default_addr, ""

    if port:
        return f"{default_host or DEFAULT_HOST}:{port}"
    if host:
        return f"{host}:{default_port or DEFAULT_PORT}"
    return default_addr


def split_addr(addr: str) -> tuple[str, int]:
    host, _, port = addr.rpartition(":")
    return host or DEFAULT_HOST, int(port or DEFAULT_PORT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediago_player",
        description="Serve a local video library and the MediaGo Player web UI.",
    )
    parser.add_argument("--host", default="", help="Server host address (default: from HTTP_ADDR or 0.0.0.0)")
    parser.add_argument("--port", default="", help="Server port (default: from HTTP_ADDR or 8080)")
    parser.add_argument("--video-root", default=None, help="Local folder containing video files")
    parser.add_argument("--enable-docs", action="store_true", help="Enable API documentation at /docs")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    env = Settings()

    overrides = {"http_addr": build_addr(args.host, args.port, env.http_addr)}
    if args.video_root is not None:
        overrides["video_root_path"] = args.video_root
    if args.enable_docs:
        overrides["enable_docs"] = True
    cfg = env.model_copy(update=overrides)

    logging.basicConfig(
        level=cfg.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    host, port = split_addr(cfg.http_addr)
    app = create_app(cfg)
    logging.getLogger("mediago_player").info("Listening on %s:%d (mode=%s)", host, port, cfg.app_mode)
    uvicorn.run(app, host=host, port=port, log_level=cfg.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
