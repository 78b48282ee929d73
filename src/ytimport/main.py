#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from ytimport.bootstrap import bootstrap_base_env, bootstrap_run_context


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ytimport",
        description="Import CSV playlist exports into YouTube playlists.",
    )

    sub = p.add_subparsers(dest="command", required=True)

    # Keep imports inside builder to avoid early side effects.
    from ytimport.cli.cli_auth import build_auth_parser
    from ytimport.cli.cli_env import build_env_parser
    from ytimport.cli.cli_import import build_import_parser

    build_import_parser(sub)
    build_auth_parser(sub)
    build_env_parser(sub)

    return p


def main(argv: list[str] | None = None) -> int:
    # Load config/.env and base environment early
    bootstrap_base_env()

    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    # Stamp run context early
    bootstrap_run_context(
        command=args.command,
        csv_path=getattr(args, "csv", None),
        playlist_title=getattr(args, "title", None),
        dry_run=True if getattr(args, "dry_run", False) else None,
        verbose=bool(getattr(args, "verbose", False)),
        quiet=bool(getattr(args, "quiet", False)),
    )

    # Initialize logging AFTER run-context env stamping
    from ytimport.logger import init_logging, get_logger

    init_logging()

    log = get_logger(__name__)
    log.debug(f"Command: {args.command}")

    if args.command == "import":
        from ytimport.cli.cli_import import handle_import

        return handle_import(args)

    if args.command == "auth":
        from ytimport.cli.cli_auth import handle_auth

        return handle_auth(args)

    if args.command == "env":
        from ytimport.cli.cli_env import handle_env

        return handle_env(args)

    raise RuntimeError(f"Unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
