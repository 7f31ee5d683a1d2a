"""Unit tests for SeriesPoller

Tests the background poller including:
- Stale-while-revalidate state transitions
- Error recording without raising
- Discarding out-of-order responses
- Listener notification
"""
import asyncio
import threading
from datetime import datetime

import pytest

from climatedash.core.exceptions import EmptyResultError, TransportError
from climatedash.tasks.series_poller import SeriesPoller, SeriesState


class SlowClient:
    """Client whose fetch blocks until released"""

    data_url = "https://example.invalid/slow"

    def __init__(self, result):
        self.result = result
        self.release = threading.Event()

    def fetch_series(self):
        self.release.wait(timeout=5)
        return list(self.result)


class TestSeriesState:
    """Test derived state flags"""

    def test_initial_state_is_loading(self):
        state = SeriesState()
        assert state.is_loading
        assert not state.has_data
        assert not state.is_error
        assert not state.is_refetching

    def test_refetching_requires_data(self, sample_points):
        assert not SeriesState(in_flight=1).is_refetching
        assert SeriesState(points=tuple(sample_points), in_flight=1).is_refetching

    def test_error_is_not_loading(self):
        assert not SeriesState(error="boom").is_loading


class TestRefresh:
    """Test single refresh behavior"""

    def test_success_replaces_series(self, fake_client, sample_points):
        poller = SeriesPoller(fake_client)

        state = asyncio.run(poller.refresh())

        assert state.points == tuple(sample_points)
        assert state.error is None
        assert isinstance(state.last_updated, datetime)
        assert state.in_flight == 0
        assert poller.state is state

    def test_failure_is_recorded_not_raised(self, client_factory):
        poller = SeriesPoller(client_factory(error=TransportError("HTTP error! status: 500", status=500)))

        state = asyncio.run(poller.refresh())

        assert state.error == "HTTP error! status: 500"
        assert state.points is None
        assert not state.is_loading

    def test_failure_keeps_previous_series(self, fake_client, sample_points):
        """Stale-while-revalidate: the last good series survives a failed fetch"""
        poller = SeriesPoller(fake_client)
        asyncio.run(poller.refresh())
        first_update = poller.state.last_updated

        fake_client.error = EmptyResultError("No valid data points found in the response")
        state = asyncio.run(poller.refresh())

        assert state.points == tuple(sample_points)
        assert state.last_updated == first_update
        assert state.is_error

    def test_recovery_clears_error(self, fake_client):
        fake_client.error = TransportError("down")
        poller = SeriesPoller(fake_client)
        asyncio.run(poller.refresh())

        fake_client.error = None
        state = asyncio.run(poller.refresh())

        assert state.error is None
        assert state.has_data

    def test_unexpected_exception_is_recorded(self, client_factory):
        poller = SeriesPoller(client_factory(error=RuntimeError("boom")))
        state = asyncio.run(poller.refresh())
        assert state.error == "boom"

    def test_empty_series_is_data(self, client_factory):
        """An empty source yields an empty series, not an error"""
        poller = SeriesPoller(client_factory(result=[]))
        state = asyncio.run(poller.refresh())
        assert state.points == ()
        assert state.error is None

    def test_listener_called_on_success_only(self, fake_client, sample_points):
        received = []
        poller = SeriesPoller(fake_client)
        poller.add_listener(received.append)

        asyncio.run(poller.refresh())
        fake_client.error = TransportError("down")
        asyncio.run(poller.refresh())

        assert received == [tuple(sample_points)]


class TestOverlappingRequests:
    """Test that an older response never overwrites a newer one"""

    def test_stale_response_discarded(self, sample_points, client_factory):
        old_points = sample_points[:1]
        new_points = sample_points
        slow_client = SlowClient(old_points)
        fast_client = client_factory(result=new_points)
        poller = SeriesPoller(slow_client)

        async def scenario():
            first = asyncio.create_task(poller.refresh())
            await asyncio.sleep(0)  # first request is now in flight
            poller.client = fast_client
            second_state = await poller.refresh()
            slow_client.release.set()
            first_state = await first
            return first_state, second_state

        first_state, second_state = asyncio.run(scenario())

        assert second_state.points == tuple(new_points)
        assert first_state.points == tuple(new_points)
        assert poller.state.points == tuple(new_points)
        assert poller.state.in_flight == 0

    def test_refetching_while_in_flight(self, fake_client, sample_points):
        slow_client = SlowClient(sample_points)
        poller = SeriesPoller(fake_client)

        async def scenario():
            await poller.refresh()
            poller.client = slow_client
            task = asyncio.create_task(poller.refresh())
            await asyncio.sleep(0)
            during = poller.state
            slow_client.release.set()
            await task
            return during

        during = asyncio.run(scenario())

        assert during.is_refetching
        assert during.has_data
        assert not poller.state.is_refetching


class TestPollingLoop:
    """Test background task lifecycle"""

    def test_start_polls_until_stopped(self, fake_client):
        poller = SeriesPoller(fake_client, interval_seconds=1)

        async def scenario():
            poller.start()
            await asyncio.sleep(0.5)
            await poller.stop()

        asyncio.run(scenario())

        assert fake_client.calls >= 1
        assert poller.state.has_data

    def test_listener_error_does_not_stop_loop(self, fake_client):
        """A failing iteration is logged and polling carries on"""
        poller = SeriesPoller(fake_client, interval_seconds=1)

        def broken_listener(points):
            raise ValueError("listener failed")

        poller.add_listener(broken_listener)

        async def scenario():
            task = poller.start()
            await asyncio.sleep(1.5)
            alive = not task.done()
            await poller.stop()
            return alive

        alive = asyncio.run(scenario())

        assert alive
        assert fake_client.calls >= 2
        assert poller.state.has_data

    def test_stop_without_start(self, fake_client):
        asyncio.run(SeriesPoller(fake_client).stop())
