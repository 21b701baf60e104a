"""Sous-package CLI commands - re-exporte les commandes publiques."""

from cinesync.adapters.cli.commands.search_commands import (
    details,
    discover,
    genres,
    search,
    suggest,
    trending,
)
from cinesync.adapters.cli.commands.watchlist_commands import watchlist_app

__all__ = [
    "details",
    "discover",
    "genres",
    "search",
    "suggest",
    "trending",
    "watchlist_app",
]
