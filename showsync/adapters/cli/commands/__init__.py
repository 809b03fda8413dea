"""Sous-package CLI commands - re-exporte les commandes publiques."""

from showsync.adapters.cli.commands.library_commands import (
    add_series,
    ignore_season,
)
from showsync.adapters.cli.commands.refresh_commands import (
    refresh,
)

__all__ = [
    "add_series",
    "ignore_season",
    "refresh",
]
