from __future__ import annotations

import argparse

from rich.console import Console
from rich.text import Text

from ytimport.auth import AuthHealthStatus, check
from ytimport.env import get_logging_env
from ytimport.logger import get_logger


# ------------------------------------------------------------
# Parser
# ------------------------------------------------------------


def build_auth_parser(subparsers: argparse._SubParsersAction) -> None:
    auth = subparsers.add_parser(
        "auth",
        help="Check OAuth health and reauthenticate if required",
    )

    auth.add_argument("--verbose", action="store_true", help="Verbose console output")
    auth.add_argument("--quiet", action="store_true", help="Suppress console output")

    auth.add_argument(
        "--provider",
        default="youtube",
        help="Auth provider to check (default: youtube)",
    )


# ------------------------------------------------------------
# Handler
# ------------------------------------------------------------


def handle_auth(args: argparse.Namespace) -> int:
    logger = get_logger("ytimport.auth")
    console = Console()
    le = get_logging_env()

    logger.debug(f"Checking auth provider: {args.provider}")
    result = check(args.provider)

    if result.status == AuthHealthStatus.OK:
        if not le.quiet:
            msg = Text("OAuth OK", style="green")
            if le.verbose:
                msg.append(" (token valid and usable)", style="dim")
            console.print(msg)
        return 0

    if result.status == AuthHealthStatus.OK_API_QUOTA:
        if not le.quiet:
            msg = Text("OAuth OK", style="green")
            msg.append(" (API quota exhausted)", style="yellow")
            console.print(msg)
        return 0

    if result.status == AuthHealthStatus.AUTH_INVALID:
        if not le.quiet:
            console.print(Text("OAuth INVALID - reauthentication required", style="red"))
        return 12

    if not le.quiet:
        console.print(Text("OAuth check failed (unexpected error)", style="red"))
    return 20
