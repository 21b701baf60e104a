"""
Chargement du panneau de details d'un film ou d'une serie.

Les details sont charges normalement (echec notifie). Les bandes-annonces
et plateformes, purement decoratives, passent par des appels silencieux et
se degradent chacune vers un etat vide sans notification.
"""

from typing import Optional

from loguru import logger

from cinesync.core.errors import GatewayError
from cinesync.core.ports import ICatalogClient
from cinesync.core.value_objects import DetailsView, MediaType
from cinesync.services.watchlist_store import WatchlistStore


class DetailsService:
    """Assemble le contenu du panneau de details."""

    def __init__(self, catalog: ICatalogClient, watchlist: Optional[WatchlistStore] = None) -> None:
        self._catalog = catalog
        self._watchlist = watchlist

    async def show(self, item_id: "str | int", media_type: "str | MediaType") -> DetailsView:
        """
        Charge les details, puis les contenus decoratifs.

        Raises:
            GatewayError: Si les details eux-memes sont indisponibles
        """
        media_type = MediaType.parse(media_type)
        item_id = str(item_id)
        details = await self._catalog.get_details(media_type, item_id)

        try:
            trailers = await self._catalog.get_trailers(media_type, item_id)
        except GatewayError as e:
            logger.debug("Bandes-annonces indisponibles", item_id=item_id, error=str(e))
            trailers = []

        try:
            providers: Optional[dict] = await self._catalog.get_providers(media_type, item_id)
        except GatewayError as e:
            logger.debug("Plateformes indisponibles", item_id=item_id, error=str(e))
            providers = None

        in_watchlist: Optional[bool] = None
        if self._watchlist is not None:
            try:
                in_watchlist = await self._watchlist.is_member(item_id, media_type, silent=True)
            except GatewayError as e:
                logger.debug("Appartenance a la watchlist inconnue", item_id=item_id, error=str(e))

        return DetailsView(
            media_type=media_type,
            details=details,
            trailers=trailers,
            providers=providers,
            in_watchlist=in_watchlist,
        )
