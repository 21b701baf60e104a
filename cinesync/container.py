"""
Container d'injection de dependances via dependency-injector.

Construit l'objet de contexte de l'application : chaque composant recoit
ses collaborateurs (passerelle, store, collaborateurs de rendu) par
injection, jamais par des variables globales.
"""

from dependency_injector import containers, providers

from .adapters.api.catalog_client import CatalogClient
from .adapters.api.gateway import RequestGateway
from .adapters.cli.rendering import (
    ConsoleNotifier,
    ConsoleResultSink,
    StatusLoadingIndicator,
)
from .config import Settings
from .services.details import DetailsService
from .services.dispatcher import EventDispatcher
from .services.genre_browser import GenreBrowser
from .services.search_controller import SearchController
from .services.watchlist_store import WatchlistStore


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Les collaborateurs de rendu peuvent etre remplaces (tests, autre
    interface) avant la premiere resolution :

        container = Container()
        container.notifier.override(providers.Object(my_notifier))
        store = container.watchlist_store()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Collaborateurs de rendu
    notifier = providers.Singleton(ConsoleNotifier)
    loading_indicator = providers.Singleton(StatusLoadingIndicator)
    result_sink = providers.Singleton(ConsoleResultSink)

    # Passerelle HTTP - Singleton pour partager le client httpx et l'indicateur
    gateway = providers.Singleton(
        RequestGateway,
        base_url=config.provided.api_base_url,
        notifier=notifier,
        loading_indicator=loading_indicator,
        timeout=config.provided.request_timeout,
    )

    catalog_client = providers.Singleton(CatalogClient, gateway=gateway)

    # Miroir de la watchlist - un seul par chargement de page
    watchlist_store = providers.Singleton(
        WatchlistStore,
        catalog=catalog_client,
        notifier=notifier,
    )

    search_controller = providers.Singleton(
        SearchController,
        catalog=catalog_client,
        sink=result_sink,
        search_delay=config.provided.search_delay,
        suggestion_delay=config.provided.suggestion_delay,
        min_query_length=config.provided.min_query_length,
        suggestions_per_type=config.provided.suggestions_per_type,
        max_total_pages=config.provided.max_total_pages,
        window_radius=config.provided.pagination_radius,
        token_factory=gateway.provided.new_token,
    )

    genre_browser = providers.Singleton(
        GenreBrowser,
        catalog=catalog_client,
        sink=result_sink,
        max_total_pages=config.provided.max_total_pages,
        window_radius=config.provided.pagination_radius,
        token_factory=gateway.provided.new_token,
    )

    details_service = providers.Factory(
        DetailsService,
        catalog=catalog_client,
        watchlist=watchlist_store,
    )

    event_dispatcher = providers.Singleton(
        EventDispatcher,
        watchlist=watchlist_store,
        search=search_controller,
        details=details_service,
    )
