"""
Client type du service de catalogue distant.

Implemente ICatalogClient au-dessus de la RequestGateway : construit les
chemins de l'API v1, choisit le mode d'appel (normal ou silencieux) et
convertit les payloads JSON en objets du domaine.

Usage:
    client = CatalogClient(gateway)
    page = await client.search(MediaType.MOVIE, "inception")
    items = await client.get_watchlist()
"""

from typing import Any, Optional

from cinesync.core.cancellation import CancellationToken
from cinesync.adapters.api.gateway import RequestGateway
from cinesync.core.entities import WatchlistItem, WatchlistStats
from cinesync.core.ports import ICatalogClient
from cinesync.core.value_objects import Genre, MediaType, SearchPage

API_PREFIX = "/api/v1"
DEFAULT_SORT = "popularity.desc"


class CatalogClient(ICatalogClient):
    """
    Client de l'API v1 du catalogue.

    Les appels de premier plan (recherche, watchlist, details) passent par
    ``gateway.call`` ; les contenus decoratifs par ``gateway.silent_call``.
    """

    def __init__(self, gateway: RequestGateway) -> None:
        self._gateway = gateway

    async def _get(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        token: Optional[CancellationToken] = None,
        silent: bool = False,
    ) -> Any:
        send = self._gateway.silent_call if silent else self._gateway.call
        return await send(f"{API_PREFIX}{path}", params=params, token=token)

    async def search(
        self,
        media_type: MediaType,
        query: str,
        page: int = 1,
        token: Optional[CancellationToken] = None,
        silent: bool = False,
    ) -> SearchPage:
        data = await self._get(
            f"/search/{media_type.collection}",
            params={"q": query, "page": page},
            token=token,
            silent=silent,
        )
        return SearchPage.from_api(data or {}, media_type)

    # -- Watchlist ---------------------------------------------------------

    async def get_watchlist(self, silent: bool = False) -> list[WatchlistItem]:
        data = await self._get("/watchlist", silent=silent)
        return [WatchlistItem.from_api(entry) for entry in (data or [])]

    async def add_to_watchlist(self, item: WatchlistItem) -> None:
        await self._gateway.call(
            f"{API_PREFIX}/watchlist", method="POST", json=item.to_payload()
        )

    async def remove_from_watchlist(self, media_type: MediaType, item_id: str) -> None:
        await self._gateway.call(
            f"{API_PREFIX}/watchlist/{media_type.value}/{item_id}", method="DELETE"
        )

    async def mark_as_watched(
        self, media_type: MediaType, item_id: str, rating: float
    ) -> None:
        await self._gateway.call(
            f"{API_PREFIX}/watchlist/{media_type.value}/{item_id}/watched",
            method="PUT",
            json={"rating": rating},
        )

    async def mark_as_unwatched(self, media_type: MediaType, item_id: str) -> None:
        await self._gateway.call(
            f"{API_PREFIX}/watchlist/{media_type.value}/{item_id}/watched",
            method="DELETE",
        )

    async def get_watchlist_stats(self) -> WatchlistStats:
        data = await self._get("/watchlist/stats")
        return WatchlistStats.from_api(data or {})

    # -- Navigation --------------------------------------------------------

    async def get_genres(self, media_type: MediaType) -> list[Genre]:
        data = await self._get(f"/genres/{media_type.collection}")
        # Le service renvoie soit une liste, soit {"genres": [...]}
        entries = data.get("genres", []) if isinstance(data, dict) else (data or [])
        return [Genre(id=int(entry["id"]), name=entry.get("name", "")) for entry in entries]

    async def discover_by_genre(
        self,
        genre_id: int,
        media_type: MediaType,
        page: int = 1,
        sort_by: str = DEFAULT_SORT,
        token: Optional[CancellationToken] = None,
    ) -> SearchPage:
        data = await self._get(
            f"/discover/genre/{genre_id}",
            params={"type": media_type.collection, "page": page, "sort_by": sort_by},
            token=token,
        )
        return SearchPage.from_api(data or {}, media_type)

    async def get_trending(
        self, media_type: MediaType, time_window: str = "week", page: int = 1
    ) -> SearchPage:
        data = await self._get(
            f"/trending/{media_type.collection}",
            params={"time_window": time_window, "page": page},
        )
        return SearchPage.from_api(data or {}, media_type)

    # -- Details -----------------------------------------------------------

    async def get_details(self, media_type: MediaType, item_id: str) -> dict[str, Any]:
        path = f"/movies/{item_id}" if media_type is MediaType.MOVIE else f"/tv/{item_id}"
        return await self._get(path) or {}

    async def get_trailers(self, media_type: MediaType, item_id: str) -> list[dict[str, Any]]:
        data = await self._get(f"/{media_type.value}/{item_id}/trailers", silent=True)
        if isinstance(data, dict):
            return list(data.get("results") or [])
        return list(data or [])

    async def get_providers(self, media_type: MediaType, item_id: str) -> dict[str, Any]:
        return await self._get(f"/{media_type.value}/{item_id}/providers", silent=True) or {}
