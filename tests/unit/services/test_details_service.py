"""
Tests unitaires du DetailsService.
"""

from unittest.mock import AsyncMock

import pytest

from cinesync.core.errors import HttpStatusError, NetworkError
from cinesync.core.value_objects import MediaType
from cinesync.services.details import DetailsService
from cinesync.services.watchlist_store import WatchlistStore
from tests.fixtures.catalog_responses import (
    MOVIE_DETAILS_RESPONSE,
    PROVIDERS_RESPONSE,
    TRAILERS_RESPONSE,
)


@pytest.fixture
def details_catalog(mock_catalog: AsyncMock) -> AsyncMock:
    mock_catalog.get_details.return_value = MOVIE_DETAILS_RESPONSE
    mock_catalog.get_trailers.return_value = TRAILERS_RESPONSE["results"]
    mock_catalog.get_providers.return_value = PROVIDERS_RESPONSE
    return mock_catalog


class TestDetailsService:
    """Tests de DetailsService.show()."""

    @pytest.mark.asyncio
    async def test_assembles_view(self, details_catalog):
        service = DetailsService(details_catalog)

        view = await service.show(27205, "movie")

        details_catalog.get_details.assert_awaited_once_with(MediaType.MOVIE, "27205")
        assert view.title == "Inception"
        assert view.trailers[0]["key"] == "YoHD9XEInc0"
        assert view.providers == PROVIDERS_RESPONSE
        assert view.in_watchlist is None

    @pytest.mark.asyncio
    async def test_details_failure_propagates(self, details_catalog):
        details_catalog.get_details.side_effect = HttpStatusError(404, "http://catalog.test/api/v1/movies/1")

        with pytest.raises(HttpStatusError):
            await DetailsService(details_catalog).show("1", MediaType.MOVIE)

    @pytest.mark.asyncio
    async def test_decorative_content_degrades_to_empty(self, details_catalog):
        details_catalog.get_trailers.side_effect = NetworkError("http://catalog.test")
        details_catalog.get_providers.side_effect = HttpStatusError(500, "http://catalog.test")

        view = await DetailsService(details_catalog).show("27205", MediaType.MOVIE)

        assert view.trailers == []
        assert view.providers is None
        assert view.title == "Inception"

    @pytest.mark.asyncio
    async def test_reports_watchlist_membership(self, details_catalog, notifier, inception_item):
        details_catalog.get_watchlist.return_value = [inception_item]
        store = WatchlistStore(details_catalog, notifier)

        view = await DetailsService(details_catalog, watchlist=store).show("27205", "movie")

        assert view.in_watchlist is True
        details_catalog.get_watchlist.assert_awaited_once_with(silent=True)

    @pytest.mark.asyncio
    async def test_unknown_membership_on_failure(self, details_catalog, notifier):
        details_catalog.get_watchlist.side_effect = NetworkError("http://catalog.test")
        store = WatchlistStore(details_catalog, notifier)

        view = await DetailsService(details_catalog, watchlist=store).show("27205", "movie")

        assert view.in_watchlist is None
        assert notifier.messages == []
