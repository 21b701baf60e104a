"""
Tests unitaires du WatchlistStore.

Tests couvrant:
- Verification d'appartenance (relecture distante, idempotence)
- Mutations "confirmer puis appliquer" (miroir intact en cas d'echec)
- Toggle protege contre la reentrance (un seul appel distant)
- Une seule mutation distante a la fois par cle
- Notes hors domaine ramenees a 0
- Rafraichissement des boutons tolerant aux echecs partiels
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from cinesync.core.entities import WatchlistFilter, WatchlistItem, WatchlistStats
from cinesync.core.errors import GatewayError, HttpStatusError, NetworkError
from cinesync.core.value_objects import MediaType
from cinesync.services.watchlist_store import (
    ADD_FAILED_MESSAGE,
    REMOVE_SUCCESS_MESSAGE,
    WATCH_STATUS_FAILED_MESSAGE,
    WatchlistStore,
)
from tests.fixtures.catalog_responses import WATCHLIST_RESPONSE
from tests.fixtures.ui_doubles import RecordingNotifier, RecordingToggleControl


@pytest.fixture
def remote_items() -> list[WatchlistItem]:
    return [WatchlistItem.from_api(entry) for entry in WATCHLIST_RESPONSE]


@pytest.fixture
def store(mock_catalog: AsyncMock, notifier: RecordingNotifier) -> WatchlistStore:
    return WatchlistStore(catalog=mock_catalog, notifier=notifier)


class TestIsMember:
    """Tests de is_member()."""

    @pytest.mark.asyncio
    async def test_member_and_non_member(self, store, mock_catalog, remote_items):
        mock_catalog.get_watchlist.return_value = remote_items

        assert await store.is_member("27205", MediaType.MOVIE) is True
        assert await store.is_member("27205", MediaType.TV) is False

    @pytest.mark.asyncio
    async def test_refetches_on_every_call(self, store, mock_catalog, remote_items):
        """Pas de cache : deux appels consecutifs relisent la liste et concordent."""
        mock_catalog.get_watchlist.return_value = remote_items

        first = await store.is_member(1396, "tv")
        second = await store.is_member(1396, "tv")

        assert first == second is True
        assert mock_catalog.get_watchlist.await_count == 2

    @pytest.mark.asyncio
    async def test_updates_local_mirror(self, store, mock_catalog, remote_items):
        mock_catalog.get_watchlist.return_value = remote_items

        await store.is_member("27205", MediaType.MOVIE)

        assert [item.id for item in store.items] == ["27205", "1396"]

    @pytest.mark.asyncio
    async def test_failure_propagates(self, store, mock_catalog):
        mock_catalog.get_watchlist.side_effect = NetworkError("http://catalog.test")

        with pytest.raises(GatewayError):
            await store.is_member("27205", MediaType.MOVIE)


class TestAddRemove:
    """Tests des mutations confirmer-puis-appliquer."""

    @pytest.mark.asyncio
    async def test_add_applies_after_confirmation(self, store, mock_catalog, notifier, inception_item):
        await store.add(inception_item)

        mock_catalog.add_to_watchlist.assert_awaited_once_with(inception_item)
        assert store.items[0].key == inception_item.key
        assert store.items[0].added_at is not None
        assert notifier.successes == ["« Inception » ajoute a la watchlist"]

    @pytest.mark.asyncio
    async def test_failed_add_leaves_item_absent(self, store, mock_catalog, notifier, inception_item):
        mock_catalog.add_to_watchlist.side_effect = HttpStatusError(500, "http://catalog.test")

        with pytest.raises(HttpStatusError):
            await store.add(inception_item)

        assert store.items == []
        assert await store.is_member("27205", MediaType.MOVIE) is False
        assert notifier.errors == [ADD_FAILED_MESSAGE]

    @pytest.mark.asyncio
    async def test_remove(self, store, mock_catalog, notifier, remote_items):
        mock_catalog.get_watchlist.return_value = remote_items
        await store.load()

        await store.remove("1396", "tv")

        mock_catalog.remove_from_watchlist.assert_awaited_once_with(MediaType.TV, "1396")
        assert [item.id for item in store.items] == ["27205"]
        assert notifier.successes == [REMOVE_SUCCESS_MESSAGE]

    @pytest.mark.asyncio
    async def test_failed_remove_keeps_mirror(self, store, mock_catalog, remote_items):
        mock_catalog.get_watchlist.return_value = remote_items
        await store.load()
        mock_catalog.remove_from_watchlist.side_effect = NetworkError("http://catalog.test")

        with pytest.raises(NetworkError):
            await store.remove("1396", "tv")

        assert len(store.items) == 2

    @pytest.mark.asyncio
    async def test_listeners_called_after_mutation(self, store, inception_item):
        seen = []

        def failing_listener(key):
            raise RuntimeError("boom")

        store.subscribe(failing_listener)
        store.subscribe(seen.append)

        await store.add(inception_item)

        assert seen == [("27205", MediaType.MOVIE)]


class TestToggle:
    """Tests de toggle()."""

    @pytest.mark.asyncio
    async def test_adds_when_absent(self, store, mock_catalog, toggle_control):
        result = await store.toggle("27205", MediaType.MOVIE, "Inception", "/p.jpg", control=toggle_control)

        assert result is True
        added = mock_catalog.add_to_watchlist.await_args.args[0]
        assert added.key == ("27205", MediaType.MOVIE)
        assert added.title == "Inception"
        mock_catalog.remove_from_watchlist.assert_not_called()

    @pytest.mark.asyncio
    async def test_removes_when_present(self, store, mock_catalog, remote_items):
        mock_catalog.get_watchlist.return_value = remote_items

        result = await store.toggle("27205", "movie")

        assert result is False
        mock_catalog.remove_from_watchlist.assert_awaited_once_with(MediaType.MOVIE, "27205")

    @pytest.mark.asyncio
    async def test_control_disabled_during_call_then_reenabled(self, store, toggle_control):
        await store.toggle("27205", MediaType.MOVIE, control=toggle_control)

        assert toggle_control.history == [
            ("enabled", False),
            ("in_watchlist", True),
            ("enabled", True),
        ]

    @pytest.mark.asyncio
    async def test_bound_controls_follow_toggle(self, store):
        other_button = RecordingToggleControl()
        store.bind_control("27205", MediaType.MOVIE, other_button)

        await store.toggle("27205", MediaType.MOVIE)

        assert other_button.in_watchlist is True
        assert other_button.enabled is True

    @pytest.mark.asyncio
    async def test_reentrant_toggle_issues_single_add(self, store, mock_catalog):
        """Deux clics rapides sur la meme cle : un seul ajout distant."""
        release = asyncio.Event()

        async def slow_add(item):
            await release.wait()

        mock_catalog.add_to_watchlist.side_effect = slow_add

        first = asyncio.create_task(store.toggle("27205", MediaType.MOVIE, "Inception"))
        await asyncio.sleep(0.01)
        assert store.is_toggling("27205", MediaType.MOVIE)
        second = asyncio.create_task(store.toggle("27205", "movie", "Inception"))
        await asyncio.sleep(0.01)
        release.set()

        assert await first is True
        assert await second is True
        assert mock_catalog.add_to_watchlist.await_count == 1
        assert not store.is_toggling("27205", MediaType.MOVIE)

    @pytest.mark.asyncio
    async def test_different_keys_are_independent(self, store, mock_catalog):
        await asyncio.gather(
            store.toggle("1", MediaType.MOVIE),
            store.toggle("1", MediaType.TV),
        )

        assert mock_catalog.add_to_watchlist.await_count == 2

    @pytest.mark.asyncio
    async def test_failed_toggle_reenables_control(self, store, mock_catalog, toggle_control):
        mock_catalog.add_to_watchlist.side_effect = NetworkError("http://catalog.test")

        with pytest.raises(NetworkError):
            await store.toggle("27205", MediaType.MOVIE, control=toggle_control)

        assert toggle_control.enabled is True
        assert toggle_control.in_watchlist is None
        assert not store.is_toggling("27205", MediaType.MOVIE)


    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_shared_toggle(self, store, mock_catalog):
        """Le premier appelant annule : le toggle fusionne recoit quand meme le resultat."""
        release = asyncio.Event()

        async def slow_add(item):
            await release.wait()

        mock_catalog.add_to_watchlist.side_effect = slow_add

        first = asyncio.create_task(store.toggle("27205", MediaType.MOVIE, "Inception"))
        await asyncio.sleep(0.01)
        second = asyncio.create_task(store.toggle("27205", MediaType.MOVIE, "Inception"))
        await asyncio.sleep(0.01)
        first.cancel()
        await asyncio.sleep(0.01)
        release.set()

        assert await second is True
        with pytest.raises(asyncio.CancelledError):
            await first
        assert mock_catalog.add_to_watchlist.await_count == 1
        assert [item.id for item in store.items] == ["27205"]
        assert not store.is_toggling("27205", MediaType.MOVIE)


class TestPerKeyExclusion:
    """Une seule mutation distante a la fois par cle (id, media_type)."""

    @staticmethod
    def _track_concurrency(mock_catalog) -> dict:
        stats = {"active": 0, "peak": 0, "order": []}

        def slow(name):
            async def mutation(*args, **kwargs):
                stats["active"] += 1
                stats["peak"] = max(stats["peak"], stats["active"])
                stats["order"].append(name)
                await asyncio.sleep(0.01)
                stats["active"] -= 1

            return mutation

        mock_catalog.add_to_watchlist.side_effect = slow("add")
        mock_catalog.remove_from_watchlist.side_effect = slow("remove")
        mock_catalog.mark_as_watched.side_effect = slow("watched")
        mock_catalog.mark_as_unwatched.side_effect = slow("unwatched")
        return stats

    @pytest.mark.asyncio
    async def test_toggle_and_mark_watched_are_serialized(self, store, mock_catalog):
        stats = self._track_concurrency(mock_catalog)

        await asyncio.gather(
            store.toggle("1", MediaType.MOVIE, "Film"),
            store.mark_as_watched("1", MediaType.MOVIE, 8),
            store.mark_as_watched("1", "movie", 3),
        )

        assert stats["peak"] == 1
        assert sorted(stats["order"]) == ["add", "watched", "watched"]
        assert [call.args[2] for call in mock_catalog.mark_as_watched.await_args_list] == [8.0, 3.0]

    @pytest.mark.asyncio
    async def test_add_remove_unwatched_are_serialized(self, store, mock_catalog, inception_item):
        stats = self._track_concurrency(mock_catalog)

        await asyncio.gather(
            store.add(inception_item),
            store.mark_as_unwatched(inception_item.id, inception_item.media_type),
            store.remove(inception_item.id, inception_item.media_type),
        )

        assert stats["peak"] == 1
        assert stats["order"] == ["add", "unwatched", "remove"]

    @pytest.mark.asyncio
    async def test_other_keys_are_not_blocked(self, store, mock_catalog):
        stats = self._track_concurrency(mock_catalog)

        await asyncio.gather(
            store.mark_as_watched("1", MediaType.MOVIE, 8),
            store.mark_as_watched("1", MediaType.TV, 8),
        )

        assert stats["peak"] == 2

    @pytest.mark.asyncio
    async def test_failed_mutation_releases_key(self, store, mock_catalog):
        mock_catalog.mark_as_watched.side_effect = [NetworkError("http://catalog.test"), None]

        with pytest.raises(NetworkError):
            await store.mark_as_watched("1", MediaType.MOVIE, 8)
        await store.mark_as_watched("1", MediaType.MOVIE, 8)

        assert mock_catalog.mark_as_watched.await_count == 2


class TestWatchStatus:
    """Tests de mark_as_watched() et mark_as_unwatched()."""

    @pytest.mark.asyncio
    async def test_mark_watched_with_rating(self, store, mock_catalog):
        await store.mark_as_watched("27205", MediaType.MOVIE, 8)

        mock_catalog.mark_as_watched.assert_awaited_once_with(MediaType.MOVIE, "27205", 8.0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", [11, -2, "abc", None])
    async def test_out_of_range_rating_sent_as_zero(self, store, mock_catalog, rating):
        await store.mark_as_watched("27205", MediaType.MOVIE, rating)

        mock_catalog.mark_as_watched.assert_awaited_once_with(MediaType.MOVIE, "27205", 0.0)

    @pytest.mark.asyncio
    async def test_mark_watched_resyncs_silently(self, store, mock_catalog, remote_items):
        mock_catalog.get_watchlist.return_value = remote_items

        await store.mark_as_watched("27205", MediaType.MOVIE, 9)

        mock_catalog.get_watchlist.assert_awaited_once_with(silent=True)
        assert len(store.items) == 2

    @pytest.mark.asyncio
    async def test_resync_failure_does_not_fail_mutation(self, store, mock_catalog, notifier):
        mock_catalog.get_watchlist.side_effect = NetworkError("http://catalog.test")

        await store.mark_as_unwatched("27205", MediaType.MOVIE)

        assert notifier.errors == []
        assert len(notifier.successes) == 1

    @pytest.mark.asyncio
    async def test_mark_unwatched_calls_remote(self, store, mock_catalog):
        await store.mark_as_unwatched(27205, "movie")

        mock_catalog.mark_as_unwatched.assert_awaited_once_with(MediaType.MOVIE, "27205")

    @pytest.mark.asyncio
    async def test_failed_watch_status_notifies(self, store, mock_catalog, notifier):
        mock_catalog.mark_as_watched.side_effect = HttpStatusError(404, "http://catalog.test")

        with pytest.raises(HttpStatusError):
            await store.mark_as_watched("27205", MediaType.MOVIE, 5)

        assert notifier.errors == [WATCH_STATUS_FAILED_MESSAGE]
        mock_catalog.get_watchlist.assert_not_called()


class TestRefreshButtonStates:
    """Tests de refresh_button_states()."""

    @pytest.mark.asyncio
    async def test_single_fetch_per_render_cycle(self, store, mock_catalog, remote_items):
        mock_catalog.get_watchlist.return_value = remote_items
        inception, dark, breaking = (RecordingToggleControl() for _ in range(3))
        store.bind_control("27205", MediaType.MOVIE, inception)
        store.bind_control("70523", MediaType.TV, dark)
        store.bind_control("1396", MediaType.TV, breaking)

        states = await store.refresh_button_states()

        assert mock_catalog.get_watchlist.await_count == 1
        assert (inception.in_watchlist, dark.in_watchlist, breaking.in_watchlist) == (True, False, True)
        assert states[("70523", MediaType.TV)] is False

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_sweeping(self, store, mock_catalog, remote_items):
        """Un echec n'est pas memorise : le bouton suivant relance une lecture."""
        mock_catalog.get_watchlist.side_effect = [NetworkError("http://catalog.test"), remote_items]
        first, second = RecordingToggleControl(), RecordingToggleControl()
        store.bind_control("27205", MediaType.MOVIE, first)
        store.bind_control("1396", MediaType.TV, second)

        states = await store.refresh_button_states()

        assert first.in_watchlist is None
        assert second.in_watchlist is True
        assert states == {("1396", MediaType.TV): True}

    @pytest.mark.asyncio
    async def test_refresh_uses_silent_calls(self, store, mock_catalog):
        store.bind_control("1", MediaType.MOVIE, RecordingToggleControl())

        await store.refresh_button_states()

        mock_catalog.get_watchlist.assert_awaited_once_with(silent=True)

    @pytest.mark.asyncio
    async def test_unbound_control_is_not_refreshed(self, store, mock_catalog):
        button = RecordingToggleControl()
        store.bind_control("1", MediaType.MOVIE, button)
        store.unbind_control("1", MediaType.MOVIE, button)

        assert await store.refresh_button_states() == {}
        mock_catalog.get_watchlist.assert_not_called()


class TestLoadAndStats:
    """Tests de load() et stats()."""

    @pytest.mark.asyncio
    async def test_load_applies_filter(self, store, mock_catalog, remote_items):
        mock_catalog.get_watchlist.return_value = remote_items

        watched = await store.load(WatchlistFilter.WATCHED)

        assert [item.id for item in watched] == ["27205"]
        assert len(store.items) == 2

    @pytest.mark.asyncio
    async def test_stats(self, store, mock_catalog):
        mock_catalog.get_watchlist_stats.return_value = WatchlistStats(total_items=4)

        assert (await store.stats()).total_items == 4
