"""
Tests unitaires de CancellationToken.
"""

import asyncio

import pytest

from cinesync.core.cancellation import CancellationToken
from cinesync.core.errors import GatewayError, RequestCancelled


class TestCancellationToken:
    """Tests du jeton d'annulation cooperatif."""

    def test_cancel_is_idempotent_and_keeps_first_reason(self):
        token = CancellationToken()

        token.cancel("superseded")
        token.cancel("other")

        assert token.cancelled
        assert token.reason == "superseded"

    def test_request_cancelled_is_not_gateway_error(self):
        assert not issubclass(RequestCancelled, GatewayError)

    @pytest.mark.asyncio
    async def test_guard_returns_result(self):
        token = CancellationToken()

        async def work():
            return 42

        assert await token.guard(work()) == 42

    @pytest.mark.asyncio
    async def test_guard_raises_when_already_cancelled(self):
        token = CancellationToken()
        token.cancel()

        async def work():
            return 42

        coro = work()
        with pytest.raises(RequestCancelled):
            await token.guard(coro)
        coro.close()

    @pytest.mark.asyncio
    async def test_cancel_during_operation_aborts_it(self):
        token = CancellationToken()
        started = asyncio.Event()
        aborted = asyncio.Event()

        async def slow():
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                aborted.set()
                raise

        task = asyncio.create_task(token.guard(slow()))
        await started.wait()
        token.cancel("superseded")

        with pytest.raises(RequestCancelled) as exc_info:
            await task
        assert exc_info.value.reason == "superseded"
        await asyncio.wait_for(aborted.wait(), timeout=1)

    @pytest.mark.asyncio
    async def test_guard_propagates_operation_error(self):
        token = CancellationToken()

        async def failing():
            raise GatewayError("boom")

        with pytest.raises(GatewayError):
            await token.guard(failing())
