"""
Commandes CLI de decouverte : recherche, suggestions, tendances, genres, details.
"""

import asyncio
from typing import Annotated

import typer
from rich.table import Table

from cinesync.adapters.cli.helpers import parse_media_type, suppress_loguru, with_container
from cinesync.adapters.cli.rendering import console, render_details
from cinesync.core.errors import GatewayError
from cinesync.core.value_objects import MediaType, ResultReady, ResultStatus
from cinesync.services.dispatcher import UIAction, UIEvent
from cinesync.services.pagination import clamp_total_pages, compute_page_model

TvOption = Annotated[bool, typer.Option("--tv", help="Series TV au lieu des films")]
PageOption = Annotated[int, typer.Option("--page", "-p", min=1, help="Page de resultats")]


def search(
    query: Annotated[str, typer.Argument(help="Titre recherche")],
    tv: TvOption = False,
    page: PageOption = 1,
) -> None:
    """Recherche des films ou des series par titre."""
    asyncio.run(_search_async(query, parse_media_type(tv), page))


@with_container()
async def _search_async(container, query: str, media_type: MediaType, page: int) -> None:
    controller = container.search_controller()
    controller.media_type = media_type
    with suppress_loguru():
        await controller.submit(query, page=page)

    if container.result_sink().last_event is None:
        console.print(
            f"[yellow]Requete trop courte[/yellow] : "
            f"{container.config().min_query_length} caracteres minimum."
        )


def suggest(query: Annotated[str, typer.Argument(help="Debut de titre")]) -> None:
    """Affiche les suggestions (films puis series) pour un debut de titre."""
    asyncio.run(_suggest_async(query))


@with_container()
async def _suggest_async(container, query: str) -> None:
    controller = container.search_controller()
    with suppress_loguru():
        controller.on_suggestion_input(query)
        await controller.drain()

    if not container.result_sink().suggestions:
        console.print("[dim]Aucune suggestion.[/dim]")


def trending(
    tv: TvOption = False,
    window: Annotated[
        str, typer.Option("--window", "-w", help="Fenetre temporelle (day ou week)")
    ] = "week",
) -> None:
    """Affiche les contenus tendance."""
    if window not in ("day", "week"):
        raise typer.BadParameter("La fenetre doit etre 'day' ou 'week'", param_hint="--window")
    asyncio.run(_trending_async(parse_media_type(tv), window))


@with_container()
async def _trending_async(container, media_type: MediaType, window: str) -> None:
    catalog = container.catalog_client()
    config = container.config()
    try:
        with suppress_loguru():
            result = await catalog.get_trending(media_type, window)
    except GatewayError:
        raise typer.Exit(code=1)

    total_pages = clamp_total_pages(result.total_pages, config.max_total_pages)
    container.result_sink().show_results(
        ResultReady(
            results=result.results,
            media_type=media_type,
            page_model=compute_page_model(result.page, total_pages, config.pagination_radius),
            status=ResultStatus.RESULTS if result.results else ResultStatus.EMPTY,
            total_results=result.total_results,
            title="Tendances de la semaine" if window == "week" else "Tendances du jour",
        )
    )


def genres(tv: TvOption = False) -> None:
    """Liste les genres disponibles."""
    asyncio.run(_genres_async(parse_media_type(tv)))


@with_container()
async def _genres_async(container, media_type: MediaType) -> None:
    browser = container.genre_browser()
    with suppress_loguru():
        await browser.load_genres()
    browser.set_media_type(media_type)

    if not browser.current_genres:
        console.print("[yellow]Aucun genre disponible.[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=f"Genres ({media_type.label})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Nom", style="bold")
    for genre in browser.current_genres:
        table.add_row(str(genre.id), genre.name)
    console.print(table)


def discover(
    genre_id: Annotated[int, typer.Argument(help="Identifiant du genre")],
    tv: TvOption = False,
    page: PageOption = 1,
    sort: Annotated[
        str, typer.Option("--sort", "-s", help="Tri (ex: popularity.desc, vote_average.desc)")
    ] = "popularity.desc",
) -> None:
    """Parcourt le catalogue d'un genre."""
    asyncio.run(_discover_async(genre_id, parse_media_type(tv), page, sort))


@with_container()
async def _discover_async(container, genre_id: int, media_type: MediaType, page: int, sort: str) -> None:
    browser = container.genre_browser()
    with suppress_loguru():
        await browser.load_genres()
        browser.set_media_type(media_type)
        browser.sort_by = sort
        loaded = await browser.select_genre(genre_id, page=page)
    if not loaded:
        raise typer.Exit(code=1)


def details(
    item_id: Annotated[str, typer.Argument(help="Identifiant du contenu")],
    tv: TvOption = False,
) -> None:
    """Affiche le detail d'un film ou d'une serie."""
    asyncio.run(_details_async(item_id, parse_media_type(tv)))


@with_container()
async def _details_async(container, item_id: str, media_type: MediaType) -> None:
    dispatcher = container.event_dispatcher()
    try:
        with suppress_loguru():
            view = await dispatcher.dispatch(
                UIEvent(action=UIAction.SHOW_DETAILS, item_id=item_id, media_type=media_type)
            )
    except GatewayError:
        raise typer.Exit(code=1)
    render_details(view, region=container.config().default_region)
