"""
Commandes CLI de gestion de la watchlist.
"""

import asyncio
from typing import Annotated, Optional

import typer

from cinesync.adapters.cli.helpers import parse_media_type, suppress_loguru, with_container
from cinesync.adapters.cli.rendering import (
    ConsoleToggleControl,
    render_stats,
    render_watchlist,
)
from cinesync.core.entities import WatchlistFilter, WatchlistItem
from cinesync.core.errors import GatewayError
from cinesync.core.value_objects import MediaType
from cinesync.services.dispatcher import UIAction, UIEvent

# Application Typer pour les commandes de watchlist
watchlist_app = typer.Typer(
    name="watchlist",
    help="Gestion de la watchlist personnelle",
    rich_markup_mode="rich",
)

ItemIdArgument = Annotated[str, typer.Argument(help="Identifiant du contenu")]
TvOption = Annotated[bool, typer.Option("--tv", help="Serie TV au lieu d'un film")]
TitleOption = Annotated[str, typer.Option("--title", "-t", help="Titre affiche")]
PosterOption = Annotated[Optional[str], typer.Option("--poster", help="Reference du poster")]


async def _dispatch(container, event: UIEvent):
    try:
        with suppress_loguru():
            return await container.event_dispatcher().dispatch(event)
    except GatewayError:
        # La notification a deja ete affichee
        raise typer.Exit(code=1)


@watchlist_app.command("list")
def list_items(
    watch_filter: Annotated[
        WatchlistFilter,
        typer.Option("--filter", "-f", case_sensitive=False, help="Filtre d'affichage"),
    ] = WatchlistFilter.ALL,
) -> None:
    """Affiche la watchlist."""
    asyncio.run(_list_async(watch_filter))


@with_container()
async def _list_async(container, watch_filter: WatchlistFilter) -> None:
    try:
        with suppress_loguru():
            items = await container.watchlist_store().load(watch_filter)
    except GatewayError:
        raise typer.Exit(code=1)
    render_watchlist(items, watch_filter)


@watchlist_app.command("add")
def add(
    item_id: ItemIdArgument,
    tv: TvOption = False,
    title: TitleOption = "",
    poster: PosterOption = None,
) -> None:
    """Ajoute un contenu a la watchlist."""
    asyncio.run(_add_async(item_id, parse_media_type(tv), title, poster))


@with_container()
async def _add_async(
    container, item_id: str, media_type: MediaType, title: str, poster: Optional[str]
) -> None:
    item = WatchlistItem(id=item_id, media_type=media_type, title=title, poster_path=poster)
    try:
        with suppress_loguru():
            await container.watchlist_store().add(item)
    except GatewayError:
        raise typer.Exit(code=1)


@watchlist_app.command("remove")
def remove(item_id: ItemIdArgument, tv: TvOption = False) -> None:
    """Retire un contenu de la watchlist."""
    asyncio.run(
        _remove_async(item_id, parse_media_type(tv))
    )


@with_container()
async def _remove_async(container, item_id: str, media_type: MediaType) -> None:
    await _dispatch(
        container,
        UIEvent(action=UIAction.REMOVE_FROM_WATCHLIST, item_id=item_id, media_type=media_type),
    )


@watchlist_app.command("toggle")
def toggle(
    item_id: ItemIdArgument,
    tv: TvOption = False,
    title: TitleOption = "",
    poster: PosterOption = None,
) -> None:
    """Ajoute le contenu s'il est absent de la watchlist, le retire sinon."""
    asyncio.run(_toggle_async(item_id, parse_media_type(tv), title, poster))


@with_container()
async def _toggle_async(
    container, item_id: str, media_type: MediaType, title: str, poster: Optional[str]
) -> None:
    control = ConsoleToggleControl(title or item_id)
    await _dispatch(
        container,
        UIEvent(
            action=UIAction.TOGGLE_WATCHLIST,
            item_id=item_id,
            media_type=media_type,
            payload={"title": title, "poster_path": poster, "control": control},
        ),
    )


@watchlist_app.command("watched")
def watched(
    item_id: ItemIdArgument,
    tv: TvOption = False,
    rating: Annotated[
        float, typer.Option("--rating", "-r", help="Note de 1 a 10 (0 = sans note)")
    ] = 0,
) -> None:
    """Marque un contenu comme vu, avec une note optionnelle."""
    asyncio.run(_watched_async(item_id, parse_media_type(tv), rating))


@with_container()
async def _watched_async(container, item_id: str, media_type: MediaType, rating: float) -> None:
    await _dispatch(
        container,
        UIEvent(
            action=UIAction.MARK_WATCHED,
            item_id=item_id,
            media_type=media_type,
            payload={"rating": rating},
        ),
    )


@watchlist_app.command("unwatched")
def unwatched(item_id: ItemIdArgument, tv: TvOption = False) -> None:
    """Marque un contenu comme non vu."""
    asyncio.run(_unwatched_async(item_id, parse_media_type(tv)))


@with_container()
async def _unwatched_async(container, item_id: str, media_type: MediaType) -> None:
    await _dispatch(
        container,
        UIEvent(action=UIAction.MARK_UNWATCHED, item_id=item_id, media_type=media_type),
    )


@watchlist_app.command("stats")
def stats() -> None:
    """Affiche les statistiques de la watchlist."""
    asyncio.run(_stats_async())


@with_container()
async def _stats_async(container) -> None:
    try:
        with suppress_loguru():
            result = await container.watchlist_store().stats()
    except GatewayError:
        raise typer.Exit(code=1)
    render_stats(result)
