"""
Navigation du catalogue par genre.

Charge les listes de genres (films et series), puis les resultats pagines
du genre selectionne. Un seul chargement a la fois : une demande arrivant
pendant un chargement est ignoree.
"""

from typing import Callable, Optional

from loguru import logger

from cinesync.core.cancellation import CancellationToken
from cinesync.core.errors import GatewayError, RequestCancelled
from cinesync.core.ports import ICatalogClient, IResultSink
from cinesync.core.value_objects import Genre, MediaType, ResultReady, ResultStatus
from cinesync.services.pagination import (
    DEFAULT_WINDOW_RADIUS,
    PROVIDER_MAX_PAGES,
    clamp_total_pages,
    compute_page_model,
)
from cinesync.services.scheduling import LatestRequestGuard

DEFAULT_SORT = "popularity.desc"


class GenreBrowser:
    """Etat de la vue "genres" : type, genre selectionne, page et tri."""

    def __init__(
        self,
        catalog: ICatalogClient,
        sink: IResultSink,
        max_total_pages: int = PROVIDER_MAX_PAGES,
        window_radius: int = DEFAULT_WINDOW_RADIUS,
        token_factory: Callable[[], CancellationToken] = CancellationToken,
    ) -> None:
        self._catalog = catalog
        self._sink = sink
        self._max_total_pages = max_total_pages
        self._window_radius = window_radius
        self._new_token = token_factory
        self._guard = LatestRequestGuard()

        self.media_type = MediaType.MOVIE
        self.genre: Optional[Genre] = None
        self.page = 1
        self.sort_by = DEFAULT_SORT
        self.is_loading = False
        self.genres: dict[MediaType, list[Genre]] = {MediaType.MOVIE: [], MediaType.TV: []}

    async def load_genres(self) -> dict[MediaType, list[Genre]]:
        """Charge les genres des deux types ; un type en echec reste vide."""
        for media_type in (MediaType.MOVIE, MediaType.TV):
            try:
                self.genres[media_type] = await self._catalog.get_genres(media_type)
            except GatewayError as e:
                logger.warning("Genres indisponibles", media_type=media_type.value, error=str(e))
        return self.genres

    @property
    def current_genres(self) -> list[Genre]:
        return self.genres[self.media_type]

    def set_media_type(self, media_type: "str | MediaType") -> None:
        """Change de type : reinitialise le genre selectionne et la page."""
        self.media_type = MediaType.parse(media_type)
        self.genre = None
        self.page = 1
        self._guard.invalidate()
        self._sink.clear_results()

    async def select_genre(self, genre_id: int, name: str = "", page: int = 1) -> bool:
        """Selectionne un genre et charge sa premiere page (ou ``page``)."""
        if self.is_loading:
            return False
        self.genre = Genre(id=genre_id, name=name or self._genre_name(genre_id))
        self.page = max(1, page)
        return await self._load()

    async def change_page(self, page: int) -> bool:
        if self.genre is None or self.is_loading:
            return False
        self.page = max(1, page)
        return await self._load()

    async def set_sort(self, sort_by: str) -> bool:
        """Change le tri et recharge depuis la premiere page (ignore pendant un chargement)."""
        if self.is_loading:
            return False
        self.sort_by = sort_by
        self.page = 1
        if self.genre is None:
            return False
        return await self._load()

    def _genre_name(self, genre_id: int) -> str:
        for genre in self.current_genres:
            if genre.id == genre_id:
                return genre.name
        return str(genre_id)

    async def _load(self) -> bool:
        """
        Charge la page courante du genre selectionne.

        Returns:
            True si des resultats (eventuellement vides) ont ete rendus
        """
        genre = self.genre
        if genre is None:
            return False

        token = self._new_token()
        seq = self._guard.issue(token)
        media_type = self.media_type
        self.is_loading = True
        try:
            result = await self._catalog.discover_by_genre(
                genre.id, media_type, self.page, self.sort_by, token=token
            )
        except RequestCancelled:
            return False
        except GatewayError as e:
            logger.warning("Chargement du genre en echec", genre_id=genre.id, error=str(e))
            if self._guard.is_latest(seq):
                self._sink.clear_results()
            return False
        finally:
            self.is_loading = False

        if not self._guard.is_latest(seq):
            return False

        total_pages = clamp_total_pages(result.total_pages, self._max_total_pages)
        self._sink.show_results(
            ResultReady(
                results=result.results,
                media_type=media_type,
                page_model=compute_page_model(result.page or self.page, total_pages, self._window_radius),
                status=ResultStatus.RESULTS if result.results else ResultStatus.EMPTY,
                total_results=result.total_results,
                title=f"{genre.name} ({media_type.label})",
            )
        )
        return True
