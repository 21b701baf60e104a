"""
Fixtures pytest partagees pour les tests CineSync.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock de ICatalogClient (AsyncMock avec spec)
- Doubles enregistreurs des collaborateurs de rendu
- Settings de test avec fichier de log temporaire
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from cinesync.config import Settings
from cinesync.core.entities import WatchlistItem, WatchlistStats
from cinesync.core.ports import ICatalogClient
from cinesync.core.value_objects import MediaType, SearchPage
from tests.fixtures.ui_doubles import (
    RecordingLoadingIndicator,
    RecordingNotifier,
    RecordingResultSink,
    RecordingToggleControl,
)


@pytest.fixture
def mock_catalog() -> AsyncMock:
    """
    Mock de ICatalogClient pour les tests.

    Par defaut : watchlist vide, recherches sans resultat, mutations
    confirmees. Configurer le mock dans chaque test pour des
    comportements specifiques.
    """
    mock = AsyncMock(spec=ICatalogClient)
    mock.get_watchlist.return_value = []
    mock.search.return_value = SearchPage(page=1)
    mock.discover_by_genre.return_value = SearchPage(page=1)
    mock.get_trending.return_value = SearchPage(page=1)
    mock.get_genres.return_value = []
    mock.get_watchlist_stats.return_value = WatchlistStats()
    mock.add_to_watchlist.return_value = None
    mock.remove_from_watchlist.return_value = None
    mock.mark_as_watched.return_value = None
    mock.mark_as_unwatched.return_value = None
    mock.get_details.return_value = {}
    mock.get_trailers.return_value = []
    mock.get_providers.return_value = {}
    return mock


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def loading_indicator() -> RecordingLoadingIndicator:
    return RecordingLoadingIndicator()


@pytest.fixture
def result_sink() -> RecordingResultSink:
    return RecordingResultSink()


@pytest.fixture
def toggle_control() -> RecordingToggleControl:
    return RecordingToggleControl()


@pytest.fixture
def inception_item() -> WatchlistItem:
    """Element de watchlist type (film)."""
    return WatchlistItem(
        id="27205",
        media_type=MediaType.MOVIE,
        title="Inception",
        poster_path="/inception.jpg",
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec fichier de log temporaire."""
    return Settings(
        api_base_url="http://catalog.test/",
        log_file=tmp_path / "test.log",
    )
