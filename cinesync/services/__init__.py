"""
Couche application : controleurs d'etat et pagination.

Exports :
- compute_page_model, clamp_total_pages : Moteur de pagination
- Debouncer, LatestRequestGuard : Anti-rebond et arbitrage de course
- WatchlistStore : Miroir local de la watchlist
- SearchController : Recherche incrementale et suggestions
- GenreBrowser : Navigation par genre
- DetailsService : Panneau de details
- EventDispatcher, UIEvent, UIAction : Evenements d'interface
"""

from cinesync.services.details import DetailsService
from cinesync.services.dispatcher import EventDispatcher, UIAction, UIEvent
from cinesync.services.genre_browser import GenreBrowser
from cinesync.services.pagination import clamp_total_pages, compute_page_model
from cinesync.services.scheduling import Debouncer, LatestRequestGuard
from cinesync.services.search_controller import SearchController
from cinesync.services.watchlist_store import WatchlistStore

__all__ = [
    "DetailsService",
    "Debouncer",
    "EventDispatcher",
    "GenreBrowser",
    "LatestRequestGuard",
    "SearchController",
    "UIAction",
    "UIEvent",
    "WatchlistStore",
    "clamp_total_pages",
    "compute_page_model",
]
