"""
Entites du domaine.

Exports :
- WatchlistItem : Element de la watchlist (cle composite id + type)
- WatchlistStats : Statistiques agregees
- WatchlistFilter : Filtre d'affichage (tous, vus, a voir)
- WatchlistKey, make_key : Cle composite
- coerce_rating, validate_rating : Validation des notes
"""

from cinesync.core.entities.watchlist import (
    WatchlistFilter,
    WatchlistItem,
    WatchlistKey,
    WatchlistStats,
    coerce_rating,
    make_key,
    validate_rating,
)

__all__ = [
    "WatchlistFilter",
    "WatchlistItem",
    "WatchlistKey",
    "WatchlistStats",
    "coerce_rating",
    "make_key",
    "validate_rating",
]
