"""
Collaborateurs de rendu Rich pour la CLI.

Implementent les ports d'interface (notifications, indicateur de
chargement, zone de resultats, boutons de watchlist) et fournissent les
fonctions d'affichage de la watchlist et du panneau de details.
"""

from typing import Optional

from rich.console import Console
from rich.status import Status
from rich.table import Table

from cinesync.core.entities import WatchlistFilter, WatchlistItem, WatchlistStats
from cinesync.core.ports import (
    ILoadingIndicator,
    INotifier,
    IResultSink,
    IToggleControl,
    NotificationLevel,
)
from cinesync.core.value_objects import (
    DetailsView,
    PageModel,
    ResultReady,
    ResultStatus,
    Suggestion,
)

console = Console()

_LEVEL_STYLES = {
    NotificationLevel.INFO: "cyan",
    NotificationLevel.SUCCESS: "green",
    NotificationLevel.ERROR: "bold red",
}


class ConsoleNotifier(INotifier):
    """Notifications transitoires affichees sur une ligne coloree."""

    def __init__(self, output: Optional[Console] = None) -> None:
        self._console = output or console

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        style = _LEVEL_STYLES[level]
        self._console.print(f"[{style}]{message}[/{style}]")


class StatusLoadingIndicator(ILoadingIndicator):
    """Indicateur de chargement sous forme de spinner Rich."""

    def __init__(self, output: Optional[Console] = None, message: str = "Chargement...") -> None:
        self._status = Status(f"[cyan]{message}", console=output or console)
        self.visible = False

    def show(self) -> None:
        if not self.visible:
            self._status.start()
            self.visible = True

    def hide(self) -> None:
        if self.visible:
            self._status.stop()
            self.visible = False


class ConsoleToggleControl(IToggleControl):
    """Bouton de watchlist rendu en ligne de commande."""

    def __init__(self, title: str, output: Optional[Console] = None) -> None:
        self.title = title
        self.enabled = True
        self.in_watchlist: Optional[bool] = None
        self._console = output or console

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def set_in_watchlist(self, in_watchlist: bool) -> None:
        self.in_watchlist = in_watchlist
        marker = "[green]★ dans la watchlist[/green]" if in_watchlist else "[dim]☆ hors watchlist[/dim]"
        self._console.print(f"{self.title} : {marker}")


def format_pagination(model: PageModel) -> str:
    """Rend la barre de pagination sur une ligne (page courante en gras)."""
    if not model.buttons:
        return ""
    parts = ["‹ Precedent" if model.has_prev else "[dim]‹ Precedent[/dim]"]
    for button in model.buttons:
        parts.append(f"[bold reverse] {button.label} [/bold reverse]" if button.current else button.label)
    parts.append("Suivant ›" if model.has_next else "[dim]Suivant ›[/dim]")
    return "  ".join(parts)


class ConsoleResultSink(IResultSink):
    """Zone de resultats : tableau Rich, pagination et suggestions."""

    def __init__(self, output: Optional[Console] = None) -> None:
        self._console = output or console
        self.last_event: Optional[ResultReady] = None
        self.suggestions: list[Suggestion] = []

    def show_results(self, event: ResultReady) -> None:
        self.last_event = event
        label = "Films" if event.media_type.value == "movie" else "Series"

        if event.status is ResultStatus.UNAVAILABLE:
            self._console.print(
                "[bold yellow]Service indisponible[/bold yellow] : "
                "affichage d'un contenu de demonstration."
            )
        elif event.status is ResultStatus.EMPTY:
            self._console.print(
                f"[yellow]Aucun resultat pour {event.title}.[/yellow] "
                "Essayez d'autres mots-cles."
            )
            return

        table = Table(title=f"{label} - {event.title}", caption=f"{event.total_results} resultat(s)")
        table.add_column("ID", style="dim")
        table.add_column("Titre", style="bold")
        table.add_column("Annee")
        table.add_column("Note", justify="right")
        for item in event.results:
            table.add_row(
                item.id,
                item.title,
                str(item.year or ""),
                f"{item.vote_average:.1f}" if item.vote_average > 0 else "",
            )
        self._console.print(table)

        pagination = format_pagination(event.page_model)
        if pagination:
            self._console.print(pagination)

    def show_suggestions(self, suggestions: list[Suggestion]) -> None:
        self.suggestions = list(suggestions)
        for suggestion in suggestions:
            kind = "Film" if suggestion.media_type.value == "movie" else "Serie"
            year = suggestion.year or ""
            self._console.print(f"  → {suggestion.title} [dim]{year} • {kind}[/dim]")

    def clear_results(self) -> None:
        self.last_event = None

    def clear_suggestions(self) -> None:
        self.suggestions = []


def render_watchlist(items: list[WatchlistItem], watch_filter: WatchlistFilter) -> None:
    if not items:
        console.print(f"[dim]{watch_filter.empty_message}[/dim]")
        return

    table = Table(title="Watchlist")
    table.add_column("ID", style="dim")
    table.add_column("Type")
    table.add_column("Titre", style="bold")
    table.add_column("Ajoute le")
    table.add_column("Statut")
    for item in items:
        status = ""
        if item.watched:
            status = "[green]✓ Vu[/green]"
            if item.rating > 0:
                status += f" ★ {item.rating:g}/10"
        table.add_row(
            item.id,
            item.media_type.label,
            item.title,
            item.added_at.strftime("%Y-%m-%d") if item.added_at else "",
            status,
        )
    console.print(table)


def render_stats(stats: WatchlistStats) -> None:
    table = Table(title="Statistiques de la watchlist", show_header=False)
    table.add_column("Libelle")
    table.add_column("Valeur", justify="right", style="bold")
    table.add_row("Total", str(stats.total_items))
    table.add_row("Films", str(stats.movies))
    table.add_row("Series", str(stats.tv_shows))
    table.add_row("Vus", str(stats.watched_items))
    table.add_row("A voir", str(stats.unwatched_items))
    table.add_row("Note moyenne", f"{stats.average_rating:.1f}")
    console.print(table)


def render_details(view: DetailsView, region: str = "US") -> None:
    details = view.details
    date_value = details.get("release_date") or details.get("first_air_date") or ""
    console.print(f"[bold]{view.title}[/bold] [dim]{date_value[:4]}[/dim]")
    if details.get("overview"):
        console.print(details["overview"])
    if details.get("vote_average"):
        console.print(f"★ {float(details['vote_average']):.1f} ({details.get('vote_count', 0)} votes)")

    if view.in_watchlist is not None:
        console.print("[green]Dans la watchlist[/green]" if view.in_watchlist else "[dim]Hors watchlist[/dim]")

    if view.trailers:
        console.print("\n[bold]Bandes-annonces[/bold]")
        for trailer in view.trailers:
            console.print(f"  • {trailer.get('name', '')} [dim]{trailer.get('key', '')}[/dim]")
    else:
        console.print("[dim]Aucune bande-annonce disponible[/dim]")

    regions = (view.providers or {}).get("results") or {}
    offers = regions.get(region) or {}
    names = [provider.get("provider_name", "") for provider in offers.get("flatrate") or []]
    if names:
        console.print(f"[bold]Disponible sur[/bold] : {', '.join(names)}")
    else:
        console.print(f"[dim]Aucune plateforme disponible ({region})[/dim]")
