"""
Miroir local de la watchlist, synchronise avec le service distant.

Le service distant detient la copie durable ; le miroir local est
consultatif et peut etre perime des qu'un autre contexte modifie la liste.
Toutes les mutations suivent le schema "confirmer puis appliquer" : le
miroir n'est modifie qu'apres confirmation du service, et reste intact en
cas d'echec.

Une seule mutation a la fois par cle (id, media_type) : les mutations
d'une meme cle sont serialisees par un verrou. Un second toggle sur une cle
dont le toggle est en vol est fusionne avec lui (il attend et renvoie le
meme resultat).
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

from loguru import logger

from cinesync.core.entities import (
    WatchlistFilter,
    WatchlistItem,
    WatchlistKey,
    WatchlistStats,
    coerce_rating,
    make_key,
)
from cinesync.core.errors import GatewayError
from cinesync.core.ports import ICatalogClient, INotifier, IToggleControl
from cinesync.core.value_objects import MediaType

ADD_SUCCESS_MESSAGE = "« {title} » ajoute a la watchlist"
ADD_FAILED_MESSAGE = "Impossible d'ajouter a la watchlist"
REMOVE_SUCCESS_MESSAGE = "Retire de la watchlist"
REMOVE_FAILED_MESSAGE = "Impossible de retirer de la watchlist"
WATCHED_SUCCESS_MESSAGE = "Marque comme vu"
UNWATCHED_SUCCESS_MESSAGE = "Marque comme non vu"
WATCH_STATUS_FAILED_MESSAGE = "Impossible de mettre a jour le statut de visionnage"

WatchlistListener = Callable[[WatchlistKey], None]
T = TypeVar("T")


class WatchlistStore:
    """
    Miroir local de la watchlist et point d'entree de ses mutations.

    Example:
        store = WatchlistStore(catalog=client, notifier=notifier)
        store.bind_control("27205", MediaType.MOVIE, button)
        in_watchlist = await store.toggle("27205", MediaType.MOVIE, "Inception", "/poster.jpg")
        await store.refresh_button_states()
    """

    def __init__(self, catalog: ICatalogClient, notifier: INotifier) -> None:
        """
        Args:
            catalog: Client du service de catalogue
            notifier: Sink des notifications utilisateur
        """
        self._catalog = catalog
        self._notifier = notifier
        self._mirror: dict[WatchlistKey, WatchlistItem] = {}
        self._in_flight: dict[WatchlistKey, asyncio.Task] = {}
        self._locks: dict[WatchlistKey, asyncio.Lock] = {}
        self._controls: dict[WatchlistKey, list[IToggleControl]] = {}
        self._listeners: list[WatchlistListener] = []
        self._cycle_depth = 0
        self._cycle_snapshot: Optional[list[WatchlistItem]] = None

    # -- Lecture -----------------------------------------------------------

    @property
    def items(self) -> list[WatchlistItem]:
        """Contenu du miroir local, dans l'ordre du service."""
        return list(self._mirror.values())

    def is_toggling(self, item_id: str, media_type: "str | MediaType") -> bool:
        """Un toggle est en vol pour cette cle."""
        return make_key(item_id, media_type) in self._in_flight

    async def _remote_items(self, silent: bool = False) -> list[WatchlistItem]:
        # Pendant un cycle de rendu, une liste obtenue avec succes est reutilisee
        if self._cycle_depth and self._cycle_snapshot is not None:
            return self._cycle_snapshot

        items = await self._catalog.get_watchlist(silent=silent)
        self._mirror = {item.key: item for item in items}
        if self._cycle_depth:
            self._cycle_snapshot = items
        return items

    @asynccontextmanager
    async def render_cycle(self) -> AsyncIterator["WatchlistStore"]:
        """
        Partage une meme lecture de la liste distante le temps d'un rendu.

        Les lectures en echec ne sont pas memorisees : la verification
        suivante relance une lecture.
        """
        self._cycle_depth += 1
        try:
            yield self
        finally:
            self._cycle_depth -= 1
            if self._cycle_depth == 0:
                self._cycle_snapshot = None

    async def is_member(
        self,
        item_id: "str | int",
        media_type: "str | MediaType",
        silent: bool = False,
    ) -> bool:
        """
        Verifie l'appartenance d'un contenu a la watchlist distante.

        Relit la liste distante a chaque appel, sauf dans un render_cycle().

        Raises:
            GatewayError: Si la liste distante ne peut pas etre lue
        """
        key = make_key(item_id, media_type)
        items = await self._remote_items(silent=silent)
        return any(item.key == key for item in items)

    async def load(self, watch_filter: WatchlistFilter = WatchlistFilter.ALL) -> list[WatchlistItem]:
        """Relit la watchlist distante et renvoie les elements filtres."""
        self._invalidate_cycle()
        items = await self._remote_items()
        return watch_filter.apply(items)

    async def stats(self) -> WatchlistStats:
        return await self._catalog.get_watchlist_stats()

    # -- Mutations ---------------------------------------------------------

    async def toggle(
        self,
        item_id: "str | int",
        media_type: "str | MediaType",
        title: str = "",
        poster_path: Optional[str] = None,
        control: Optional[IToggleControl] = None,
    ) -> bool:
        """
        Ajoute le contenu s'il est absent, le retire sinon.

        Args:
            item_id: Identifiant du contenu
            media_type: Type de contenu
            title: Titre (utilise a l'ajout)
            poster_path: Poster (utilise a l'ajout)
            control: Bouton a l'origine du clic (desactive pendant l'appel)

        Returns:
            True si le contenu est dans la watchlist apres l'operation

        Raises:
            GatewayError: Si la verification ou la mutation echoue
        """
        key = make_key(item_id, media_type)

        in_flight = self._in_flight.get(key)
        if in_flight is not None:
            logger.debug("Toggle deja en vol, fusion", item_id=key[0], media_type=key[1].value)
            return await asyncio.shield(in_flight)

        task = asyncio.ensure_future(
            self._exclusive(key, lambda: self._toggle(key, title, poster_path, control))
        )
        self._in_flight[key] = task
        task.add_done_callback(lambda done: self._forget_toggle(key, done))
        # L'annulation d'un appelant n'annule pas la mutation partagee
        return await asyncio.shield(task)

    def _forget_toggle(self, key: WatchlistKey, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        if not task.cancelled() and task.exception() is not None:
            logger.debug("Toggle en echec", item_id=key[0], media_type=key[1].value)

    async def _exclusive(self, key: WatchlistKey, operation: Callable[[], Awaitable[T]]) -> T:
        """Execute ``operation`` sous le verrou de la cle (une mutation a la fois)."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        if lock.locked():
            logger.debug("Mutation en attente du verrou", item_id=key[0], media_type=key[1].value)
        async with lock:
            return await operation()

    async def _toggle(
        self,
        key: WatchlistKey,
        title: str,
        poster_path: Optional[str],
        control: Optional[IToggleControl],
    ) -> bool:
        item_id, media_type = key
        controls = list(self._controls.get(key, []))
        if control is not None and control not in controls:
            controls.append(control)

        for button in controls:
            button.set_enabled(False)
        try:
            if await self.is_member(item_id, media_type):
                await self._remove(key)
                in_watchlist = False
            else:
                await self._add(
                    WatchlistItem(
                        id=item_id,
                        media_type=media_type,
                        title=title,
                        poster_path=poster_path,
                    )
                )
                in_watchlist = True

            for button in controls:
                button.set_in_watchlist(in_watchlist)
            return in_watchlist
        finally:
            for button in controls:
                button.set_enabled(True)

    async def add(self, item: WatchlistItem) -> None:
        """
        Ajoute un contenu, applique au miroir apres confirmation du service.

        Raises:
            GatewayError: Si le service refuse ou est injoignable (miroir intact)
        """
        await self._exclusive(item.key, lambda: self._add(item))

    async def _add(self, item: WatchlistItem) -> None:
        try:
            await self._catalog.add_to_watchlist(item)
        except GatewayError:
            self._notifier.error(ADD_FAILED_MESSAGE)
            raise

        self._mirror[item.key] = item.confirmed()
        self._after_mutation(item.key)
        self._notifier.success(ADD_SUCCESS_MESSAGE.format(title=item.title))
        logger.info("Ajout a la watchlist", item_id=item.id, media_type=item.media_type.value)

    async def remove(self, item_id: "str | int", media_type: "str | MediaType") -> None:
        """
        Retire un contenu, applique au miroir apres confirmation du service.

        Raises:
            GatewayError: Si le service refuse ou est injoignable (miroir intact)
        """
        key = make_key(item_id, media_type)
        await self._exclusive(key, lambda: self._remove(key))

    async def _remove(self, key: WatchlistKey) -> None:
        try:
            await self._catalog.remove_from_watchlist(key[1], key[0])
        except GatewayError:
            self._notifier.error(REMOVE_FAILED_MESSAGE)
            raise

        self._mirror.pop(key, None)
        self._after_mutation(key)
        self._notifier.success(REMOVE_SUCCESS_MESSAGE)
        logger.info("Retrait de la watchlist", item_id=key[0], media_type=key[1].value)

    async def mark_as_watched(
        self,
        item_id: "str | int",
        media_type: "str | MediaType",
        rating: "float | int | str | None" = 0,
    ) -> None:
        """
        Marque un contenu comme vu, avec une note optionnelle.

        Une note hors 0-10 est ramenee a 0 (non notee). Le miroir est relu
        depuis le service plutot que corrige localement.
        """
        key = make_key(item_id, media_type)
        value = coerce_rating(rating)
        await self._exclusive(key, lambda: self._mark_as_watched(key, value))

    async def _mark_as_watched(self, key: WatchlistKey, value: float) -> None:
        try:
            await self._catalog.mark_as_watched(key[1], key[0], value)
        except GatewayError:
            self._notifier.error(WATCH_STATUS_FAILED_MESSAGE)
            raise

        self._notifier.success(WATCHED_SUCCESS_MESSAGE)
        await self._resync()
        self._after_mutation(key)

    async def mark_as_unwatched(self, item_id: "str | int", media_type: "str | MediaType") -> None:
        """Marque un contenu comme non vu (la note est remise a 0 par le service)."""
        key = make_key(item_id, media_type)
        await self._exclusive(key, lambda: self._mark_as_unwatched(key))

    async def _mark_as_unwatched(self, key: WatchlistKey) -> None:
        try:
            await self._catalog.mark_as_unwatched(key[1], key[0])
        except GatewayError:
            self._notifier.error(WATCH_STATUS_FAILED_MESSAGE)
            raise

        self._notifier.success(UNWATCHED_SUCCESS_MESSAGE)
        await self._resync()
        self._after_mutation(key)

    async def _resync(self) -> None:
        self._invalidate_cycle()
        try:
            await self._remote_items(silent=True)
        except GatewayError as e:
            # Mutation confirmee : seul le miroir reste a relire plus tard
            logger.warning("Relecture de la watchlist impossible", error=str(e))

    # -- Boutons et abonnes ------------------------------------------------

    def bind_control(
        self, item_id: "str | int", media_type: "str | MediaType", control: IToggleControl
    ) -> None:
        """Enregistre un bouton rendu pour la cle (id, media_type)."""
        controls = self._controls.setdefault(make_key(item_id, media_type), [])
        if control not in controls:
            controls.append(control)

    def unbind_control(
        self, item_id: "str | int", media_type: "str | MediaType", control: IToggleControl
    ) -> None:
        key = make_key(item_id, media_type)
        controls = self._controls.get(key, [])
        if control in controls:
            controls.remove(control)
        if not controls:
            self._controls.pop(key, None)

    def clear_controls(self) -> None:
        """Oublie tous les boutons (nouveau rendu de la page)."""
        self._controls.clear()

    async def refresh_button_states(self) -> dict[WatchlistKey, bool]:
        """
        Met a jour l'etat visuel de chaque bouton rendu.

        Un echec de verification pour un bouton est journalise et n'interrompt
        pas le balayage des autres.

        Returns:
            Etat d'appartenance de chaque cle verifiee avec succes
        """
        states: dict[WatchlistKey, bool] = {}
        async with self.render_cycle():
            for key, controls in list(self._controls.items()):
                try:
                    member = await self.is_member(key[0], key[1], silent=True)
                except GatewayError as e:
                    logger.warning(
                        "Etat du bouton non rafraichi",
                        item_id=key[0],
                        media_type=key[1].value,
                        error=str(e),
                    )
                    continue
                for button in controls:
                    button.set_in_watchlist(member)
                states[key] = member
        return states

    def subscribe(self, listener: WatchlistListener) -> None:
        """Abonne un observateur appele apres chaque mutation confirmee."""
        self._listeners.append(listener)

    def _after_mutation(self, key: WatchlistKey) -> None:
        self._invalidate_cycle()
        for listener in list(self._listeners):
            try:
                listener(key)
            except Exception:
                logger.exception("Observateur de watchlist en echec")

    def _invalidate_cycle(self) -> None:
        self._cycle_snapshot = None
