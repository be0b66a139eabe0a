"""Utility functions for CLI commands."""

import logging
from pathlib import Path
from typing import Tuple

import typer
from pydantic import ValidationError
from rich.console import Console

from tabledoc.config import ProfileConfig
from tabledoc.core.loader import load_profile
from tabledoc.core.registry import RelationRegistry
from tabledoc.exceptions import TableDocError

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_profile_or_exit(profile_path: Path) -> Tuple[ProfileConfig, RelationRegistry]:
    """Load a profile and its tables, exiting with status 1 on failure.

    Returns:
        tuple: (profile, registry)
    """
    try:
        return load_profile(profile_path)
    except FileNotFoundError as e:
        err_console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        err_console.print(f"[red]❌ Invalid profile {profile_path}:[/red]\n{e}")
        raise typer.Exit(1)
    except (TableDocError, ValueError) as e:
        err_console.print(f"[red]❌ Failed to load profile: {e}[/red]")
        raise typer.Exit(1)
