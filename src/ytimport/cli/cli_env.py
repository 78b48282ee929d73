from __future__ import annotations

import argparse

from rich.console import Console

from ytimport.env import ConfigError, get_env


def build_env_parser(subparsers: argparse._SubParsersAction) -> None:
    subparsers.add_parser("env", help="Show resolved runtime environment")


def handle_env(args: argparse.Namespace) -> int:
    console = Console()

    try:
        data = get_env().as_dict()
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        return 20

    console.print("\n[bold]Runtime Environment[/bold]")
    console.print("─" * 50)

    for section, values in data.items():
        console.print(f"\n[bold cyan]{section}[/bold cyan]")
        for key, value in values.items():
            console.print(f"  {key:<20} = {value}", markup=False)

    console.print()
    return 0
