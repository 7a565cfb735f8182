"""CadetMart inventory auth entry point.

Commands:
  serve           Run the inventory auth API
  issue-token     Prompt for the inventory password and print a session token
  inspect-token   Print why a session token is or is not accepted
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

from cadetmart.config import get_settings
from cadetmart.logging_setup import setup_logging
from cadetmart.security.session_tokens import (
    SessionTokenAuthority,
    SessionTokenError,
    TokenStatus,
)

logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return get_version("cadetmart")
    except PackageNotFoundError:
        from cadetmart import __version__

        return __version__


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cadetmart",
        description="CadetMart inventory dashboard auth",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cadetmart serve                    Start the API on HOST:PORT from settings
  cadetmart serve --dev              Start with auto-reload
  cadetmart issue-token              Print a session token for curl testing
  cadetmart inspect-token TOKEN      Explain whether TOKEN is accepted
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")

    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the inventory auth API")
    serve.add_argument("--host", type=str, default=None, help="Host to bind")
    serve.add_argument("--port", type=int, default=None, help="Port to bind")
    serve.add_argument("--dev", action="store_true", help="Enable auto-reload")

    sub.add_parser("issue-token", help="Prompt for the password and print a session token")

    inspect = sub.add_parser("inspect-token", help="Show the status of a session token")
    inspect.add_argument("token", help="Session token (cookie value)")

    return parser


def _issue_token(authority: SessionTokenAuthority) -> int:
    password = getpass.getpass("Inventory password: ")
    try:
        token = authority.issue_token(password)
    except SessionTokenError as exc:
        print(f"Could not issue token: {exc}", file=sys.stderr)
        return 1
    print(token)
    return 0


def _inspect_token(authority: SessionTokenAuthority, token: str) -> int:
    status = authority.inspect_token(token)
    print(status.value)
    return 0 if status is TokenStatus.VALID else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(level=args.log_level or settings.log_level)

    if args.command == "serve":
        from cadetmart.api.serve import run_api_server

        run_api_server(host=args.host, port=args.port, dev=args.dev)
        return 0

    authority = SessionTokenAuthority(settings.session_config())
    if args.command == "issue-token":
        return _issue_token(authority)
    return _inspect_token(authority, args.token)


if __name__ == "__main__":
    sys.exit(main())
