"""
Interface port pour le service de catalogue distant.

Definit le contrat type du catalogue (recherche, watchlist, genres,
tendances, details). L'adaptateur concret passe par la RequestGateway.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from cinesync.core.cancellation import CancellationToken
from cinesync.core.entities import WatchlistItem, WatchlistStats
from cinesync.core.value_objects import Genre, MediaType, SearchPage


class ICatalogClient(ABC):
    """Contrat du client de catalogue consomme par les services."""

    @abstractmethod
    async def search(
        self,
        media_type: MediaType,
        query: str,
        page: int = 1,
        token: Optional[CancellationToken] = None,
        silent: bool = False,
    ) -> SearchPage:
        """
        Recherche des contenus par titre.

        Args :
            media_type : Type de contenu recherche
            query : Texte recherche
            page : Page demandee (1-indexee)
            token : Jeton d'annulation optionnel
            silent : Ne pas notifier l'utilisateur en cas d'echec
        """
        ...

    @abstractmethod
    async def get_watchlist(self, silent: bool = False) -> list[WatchlistItem]:
        ...

    @abstractmethod
    async def add_to_watchlist(self, item: WatchlistItem) -> None:
        ...

    @abstractmethod
    async def remove_from_watchlist(self, media_type: MediaType, item_id: str) -> None:
        ...

    @abstractmethod
    async def mark_as_watched(
        self, media_type: MediaType, item_id: str, rating: float
    ) -> None:
        ...

    @abstractmethod
    async def mark_as_unwatched(self, media_type: MediaType, item_id: str) -> None:
        ...

    @abstractmethod
    async def get_watchlist_stats(self) -> WatchlistStats:
        ...

    @abstractmethod
    async def get_genres(self, media_type: MediaType) -> list[Genre]:
        ...

    @abstractmethod
    async def discover_by_genre(
        self,
        genre_id: int,
        media_type: MediaType,
        page: int = 1,
        sort_by: str = "popularity.desc",
        token: Optional[CancellationToken] = None,
    ) -> SearchPage:
        ...

    @abstractmethod
    async def get_trending(
        self, media_type: MediaType, time_window: str = "week", page: int = 1
    ) -> SearchPage:
        ...

    @abstractmethod
    async def get_details(self, media_type: MediaType, item_id: str) -> dict[str, Any]:
        ...

    @abstractmethod
    async def get_trailers(self, media_type: MediaType, item_id: str) -> list[dict[str, Any]]:
        """Bandes-annonces (appel silencieux, contenu decoratif)."""
        ...

    @abstractmethod
    async def get_providers(self, media_type: MediaType, item_id: str) -> dict[str, Any]:
        """Plateformes de diffusion (appel silencieux, contenu decoratif)."""
        ...
