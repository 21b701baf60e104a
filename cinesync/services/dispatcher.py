"""
Distribution des evenements d'interface types.

Les collaborateurs de rendu n'appellent jamais les composants directement :
ils emettent un UIEvent ``{action, id, media_type, payload}`` consomme par
un unique EventDispatcher qui route vers le composant concerne.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from cinesync.core.value_objects import MediaType, Suggestion
from cinesync.services.details import DetailsService
from cinesync.services.search_controller import SearchController
from cinesync.services.watchlist_store import WatchlistStore


class UIAction(Enum):
    """Actions emises par l'interface."""

    TOGGLE_WATCHLIST = "toggle_watchlist"
    REMOVE_FROM_WATCHLIST = "remove_from_watchlist"
    MARK_WATCHED = "mark_watched"
    MARK_UNWATCHED = "mark_unwatched"
    TOGGLE_WATCHED = "toggle_watched"
    SHOW_DETAILS = "show_details"
    SELECT_SUGGESTION = "select_suggestion"
    CHANGE_PAGE = "change_page"


@dataclass(frozen=True)
class UIEvent:
    """
    Evenement d'interface.

    Attributs:
        action: Action demandee
        item_id: Identifiant du contenu vise (vide pour CHANGE_PAGE)
        media_type: Type du contenu vise
        payload: Donnees complementaires (titre, poster, note, page...)
    """

    action: UIAction
    item_id: str = ""
    media_type: MediaType = MediaType.MOVIE
    payload: dict[str, Any] = field(default_factory=dict)


Handler = Callable[[UIEvent], Awaitable[Any]]


class EventDispatcher:
    """Route chaque UIEvent vers le store, le controleur ou les details."""

    def __init__(
        self,
        watchlist: WatchlistStore,
        search: SearchController,
        details: Optional[DetailsService] = None,
    ) -> None:
        self._watchlist = watchlist
        self._search = search
        self._details = details
        self._handlers: dict[UIAction, Handler] = {
            UIAction.TOGGLE_WATCHLIST: self._toggle_watchlist,
            UIAction.REMOVE_FROM_WATCHLIST: self._remove,
            UIAction.MARK_WATCHED: self._mark_watched,
            UIAction.MARK_UNWATCHED: self._mark_unwatched,
            UIAction.TOGGLE_WATCHED: self._toggle_watched,
            UIAction.SHOW_DETAILS: self._show_details,
            UIAction.SELECT_SUGGESTION: self._select_suggestion,
            UIAction.CHANGE_PAGE: self._change_page,
        }

    async def dispatch(self, event: UIEvent) -> Any:
        """
        Execute l'action de l'evenement.

        Returns:
            Le resultat du composant cible (ex: etat d'appartenance apres toggle)

        Raises:
            ValueError: Si l'action n'a pas de destinataire
        """
        handler = self._handlers.get(event.action)
        if handler is None:
            raise ValueError(f"No handler for action {event.action!r}")
        logger.debug("Evenement UI", action=event.action.value, item_id=event.item_id)
        return await handler(event)

    async def _toggle_watchlist(self, event: UIEvent) -> bool:
        return await self._watchlist.toggle(
            event.item_id,
            event.media_type,
            title=event.payload.get("title", ""),
            poster_path=event.payload.get("poster_path"),
            control=event.payload.get("control"),
        )

    async def _remove(self, event: UIEvent) -> None:
        await self._watchlist.remove(event.item_id, event.media_type)

    async def _mark_watched(self, event: UIEvent) -> None:
        await self._watchlist.mark_as_watched(
            event.item_id, event.media_type, event.payload.get("rating", 0)
        )

    async def _mark_unwatched(self, event: UIEvent) -> None:
        await self._watchlist.mark_as_unwatched(event.item_id, event.media_type)

    async def _toggle_watched(self, event: UIEvent) -> None:
        if event.payload.get("watched"):
            await self._mark_unwatched(event)
        else:
            await self._mark_watched(event)

    async def _show_details(self, event: UIEvent) -> Any:
        if self._details is None:
            raise ValueError("Details panel is not available")
        return await self._details.show(event.item_id, event.media_type)

    async def _select_suggestion(self, event: UIEvent) -> None:
        year = event.payload.get("year")
        await self._search.select_suggestion(
            Suggestion(
                title=event.payload["title"],
                year=int(year) if year else None,
                media_type=event.media_type,
                id=event.item_id,
            )
        )

    async def _change_page(self, event: UIEvent) -> None:
        await self._search.change_page(int(event.payload["page"]))
