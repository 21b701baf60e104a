"""
Controleur de recherche incrementale et de suggestions.

Machine a etats par canal (recherche principale, suggestions) :
    IDLE -> PENDING(requete, jeton) -> SETTLED | CANCELLED | FAILED

- Chaque frappe remplace le minuteur d'anti-rebond en attente (500 ms pour
  la recherche, 300 ms pour les suggestions) ; seul le dernier minuteur
  emet une requete.
- Chaque requete emise recoit un jeton de sequence monotone ; une reponse
  n'est appliquee que si son jeton est le dernier emis.
- En dessous de la longueur minimale (2 caracteres), les zones de
  suggestions et de resultats sont videes sans appel reseau.
- En cas d'echec reseau, la recherche affiche un contenu de repli marque
  UNAVAILABLE, distinct d'un resultat vide.
"""

import asyncio
from typing import Callable, Optional

from loguru import logger

from cinesync.core.cancellation import CancellationToken
from cinesync.core.errors import GatewayError, RequestCancelled
from cinesync.core.ports import ICatalogClient, IResultSink
from cinesync.core.value_objects import (
    MediaType,
    ResultReady,
    ResultStatus,
    SearchPage,
    SearchSession,
    SearchState,
    Suggestion,
)
from cinesync.services.fallback import build_fallback_page
from cinesync.services.pagination import (
    DEFAULT_WINDOW_RADIUS,
    PROVIDER_MAX_PAGES,
    clamp_total_pages,
    compute_page_model,
)
from cinesync.services.scheduling import Debouncer, LatestRequestGuard

SEARCH_DEBOUNCE_SECONDS = 0.5
SUGGESTION_DEBOUNCE_SECONDS = 0.3
MIN_QUERY_LENGTH = 2
SUGGESTIONS_PER_TYPE = 3


class SearchController:
    """
    Controleur du champ de recherche.

    Example:
        controller = SearchController(catalog=client, sink=renderer)
        controller.on_keystroke("inc")
        await controller.drain()
        await controller.change_page(2)
    """

    def __init__(
        self,
        catalog: ICatalogClient,
        sink: IResultSink,
        search_delay: float = SEARCH_DEBOUNCE_SECONDS,
        suggestion_delay: float = SUGGESTION_DEBOUNCE_SECONDS,
        min_query_length: int = MIN_QUERY_LENGTH,
        suggestions_per_type: int = SUGGESTIONS_PER_TYPE,
        max_total_pages: int = PROVIDER_MAX_PAGES,
        window_radius: int = DEFAULT_WINDOW_RADIUS,
        media_type: MediaType = MediaType.MOVIE,
        token_factory: Callable[[], CancellationToken] = CancellationToken,
    ) -> None:
        """
        Args:
            catalog: Client du service de catalogue
            sink: Collaborateur de rendu des resultats et suggestions
            search_delay: Anti-rebond de la recherche principale (secondes)
            suggestion_delay: Anti-rebond des suggestions (secondes)
            min_query_length: Longueur minimale declenchant une requete
            suggestions_per_type: Nombre de suggestions retenues par type
            max_total_pages: Limite de pages imposee par le fournisseur
            window_radius: Rayon de la fenetre de pagination
            media_type: Type de contenu recherche initialement
            token_factory: Fabrique de jetons d'annulation
        """
        self._catalog = catalog
        self._sink = sink
        self._min_query_length = min_query_length
        self._suggestions_per_type = suggestions_per_type
        self._max_total_pages = max_total_pages
        self._window_radius = window_radius
        self._new_token = token_factory

        self._search_debouncer = Debouncer(search_delay, self._run_search)
        self._suggestion_debouncer = Debouncer(suggestion_delay, self._run_suggestions)
        self._search_guard = LatestRequestGuard()
        self._suggestion_guard = LatestRequestGuard()

        self.media_type = media_type
        self.query = ""
        self.page = 1
        self.state = SearchState.IDLE
        self.suggestion_state = SearchState.IDLE
        self.active_session: Optional[SearchSession] = None

    @property
    def latest_token(self) -> int:
        """Dernier jeton de sequence emis pour la recherche principale."""
        return self._search_guard.latest

    # -- Entrees utilisateur -----------------------------------------------

    def on_keystroke(self, text: str) -> None:
        """Frappe dans le champ : alimente la recherche et les suggestions."""
        self.on_input(text)
        self.on_suggestion_input(text)

    def on_input(self, text: str) -> None:
        """Frappe pour la recherche principale (anti-rebond 500 ms)."""
        query = text.strip()
        if len(query) < self._min_query_length:
            self._search_debouncer.cancel()
            self._search_guard.invalidate()
            self.query = query
            self.active_session = None
            self.state = SearchState.IDLE
            self._sink.clear_results()
            return
        self._search_debouncer.trigger(query)

    def on_suggestion_input(self, text: str) -> None:
        """Frappe pour les suggestions (anti-rebond 300 ms)."""
        query = text.strip()
        if len(query) < self._min_query_length:
            self._clear_suggestions()
            return
        self._suggestion_debouncer.trigger(query)

    async def submit(self, text: str, page: int = 1) -> None:
        """Validation (touche Entree) : recherche immediate sans anti-rebond."""
        query = text.strip()
        self._clear_suggestions()
        if len(query) < self._min_query_length:
            self.on_input(query)
            return
        await self._search_debouncer.fire_now(query, max(1, page))

    async def change_page(self, page: int) -> None:
        """Recharge la requete courante a une autre page."""
        if not self.query or len(self.query) < self._min_query_length:
            return
        await self._search_debouncer.fire_now(self.query, max(1, page))

    async def set_media_type(self, media_type: "str | MediaType") -> None:
        """Change le type recherche et relance la requete courante en page 1."""
        self.media_type = MediaType.parse(media_type)
        if self.query and len(self.query) >= self._min_query_length:
            await self._search_debouncer.fire_now(self.query, 1)

    async def select_suggestion(self, suggestion: Suggestion) -> None:
        """Adopte une suggestion : titre et type, puis recherche immediate."""
        self._clear_suggestions()
        self.media_type = suggestion.media_type
        await self._search_debouncer.fire_now(suggestion.title, 1)

    async def drain(self) -> None:
        """Attend les minuteurs en attente et les requetes en vol."""
        await asyncio.gather(
            self._search_debouncer.drain(),
            self._suggestion_debouncer.drain(),
        )

    # -- Recherche principale ----------------------------------------------

    async def _run_search(self, query: str, page: int = 1) -> None:
        token = self._new_token()
        seq = self._search_guard.issue(token)
        session = SearchSession(
            query=query, requested_at=seq, media_type=self.media_type, page=page
        )
        self.query = query
        self.page = page
        self.active_session = session
        self.state = SearchState.PENDING
        logger.debug("Recherche emise", query=query, page=page, seq=seq)

        try:
            result = await self._catalog.search(session.media_type, query, page, token=token)
        except RequestCancelled:
            logger.debug("Recherche annulee", query=query, seq=seq)
            if self._search_guard.is_latest(seq):
                self.state = SearchState.CANCELLED
            return
        except GatewayError as e:
            if not self._search_guard.is_latest(seq):
                logger.debug("Echec d'une recherche remplacee ignore", query=query, seq=seq)
                return
            logger.warning("Recherche indisponible, contenu de repli", query=query, error=str(e))
            self.state = SearchState.FAILED
            self._emit(session, build_fallback_page(query, session.media_type), ResultStatus.UNAVAILABLE)
            return

        if not self._search_guard.is_latest(seq):
            logger.debug(
                "Reponse perimee ignoree",
                query=query,
                seq=seq,
                latest=self._search_guard.latest,
            )
            return

        self.state = SearchState.SETTLED
        status = ResultStatus.RESULTS if result.results else ResultStatus.EMPTY
        self._emit(session, result, status)

    def _emit(self, session: SearchSession, result: SearchPage, status: ResultStatus) -> None:
        total_pages = clamp_total_pages(result.total_pages, self._max_total_pages)
        page_model = compute_page_model(result.page or session.page, total_pages, self._window_radius)
        self._sink.show_results(
            ResultReady(
                results=result.results,
                media_type=session.media_type,
                page_model=page_model,
                status=status,
                total_results=result.total_results,
                session=session,
                title=f'"{session.query}"',
            )
        )

    # -- Suggestions -------------------------------------------------------

    async def _run_suggestions(self, query: str) -> None:
        token = self._new_token()
        seq = self._suggestion_guard.issue(token)
        self.suggestion_state = SearchState.PENDING

        try:
            movies, shows = await asyncio.gather(
                self._catalog.search(MediaType.MOVIE, query, 1, token=token, silent=True),
                self._catalog.search(MediaType.TV, query, 1, token=token, silent=True),
            )
        except RequestCancelled:
            logger.debug("Suggestions annulees", query=query, seq=seq)
            return
        except GatewayError as e:
            # Interrompt la requete soeur encore en vol
            token.cancel("failed")
            if self._suggestion_guard.is_latest(seq):
                logger.debug("Suggestions indisponibles", query=query, error=str(e))
                self.suggestion_state = SearchState.FAILED
                self._sink.clear_suggestions()
            return

        if not self._suggestion_guard.is_latest(seq):
            logger.debug("Suggestions perimees ignorees", query=query, seq=seq)
            return

        self.suggestion_state = SearchState.SETTLED
        suggestions = [
            Suggestion.from_summary(summary)
            for summary in (
                *movies.results[: self._suggestions_per_type],
                *shows.results[: self._suggestions_per_type],
            )
        ]
        if suggestions:
            self._sink.show_suggestions(suggestions)
        else:
            self._sink.clear_suggestions()

    def _clear_suggestions(self) -> None:
        self._suggestion_debouncer.cancel()
        self._suggestion_guard.invalidate()
        self.suggestion_state = SearchState.IDLE
        self._sink.clear_suggestions()
