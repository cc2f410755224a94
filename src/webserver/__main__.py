"""
=============================================================================
WEB SERVER CLI ENTRY POINT
=============================================================================

    # Run with defaults (localhost:8080, serving the current directory)
    python -m webserver

    # Custom port
    python -m webserver --port 3000

    # Serve another directory
    python -m webserver --root ./www

    # Spec-conformant CRLF header lines
    python -m webserver --crlf

Flags override HTTP_* environment variables, which override defaults
(see ServerConfig.from_env).
=============================================================================
"""

import argparse
import sys

from . import __version__
from .server import HTTPServer
from .config import ServerConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webserver",
        description="Minimal one-request-per-connection HTTP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m webserver                      # Run with defaults
  python -m webserver --port 3000          # Custom port
  python -m webserver --host 0.0.0.0       # Listen on all interfaces
  python -m webserver --root ./www         # Serve files from ./www
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8080)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT / PROTOCOL ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--root", "-r",
        default=None,
        help="Directory request paths are resolved against (default: .)"
    )

    parser.add_argument(
        "--crlf",
        action="store_true",
        default=None,
        help="Terminate header lines with CRLF instead of LF"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"webserver {__version__}"
    )

    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Environment-based config with any given CLI flags applied on top."""
    config = ServerConfig.from_env()

    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.root is not None:
        config.document_root = args.root
    if args.crlf:
        config.crlf_headers = True
    if args.log_level is not None:
        config.log_level = args.log_level

    return config


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        server = HTTPServer(config_from_args(args))
        server.run()
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
