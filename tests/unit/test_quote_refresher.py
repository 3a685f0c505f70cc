"""
Unit tests for QuoteRefresher.

Tests cover:
- Interval scheduling and single in-flight fetch
- Publishing results only from poll()
- Passing the current tickers to the fetcher
- Abandoning fetches that run past the fetch timeout
"""

import concurrent.futures
from unittest.mock import MagicMock

import pytest

from marketline.core.exceptions import NetworkError
from marketline.domain.views import FetchResult
from marketline.services import QuoteRefresher, TickerSet

from tests.conftest import FakeClock, ImmediateExecutor, ManualExecutor


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_refresher(fetcher, credential, market_data, clock, executor, tickers=("AAPL",), fetch_timeout=None):
    return QuoteRefresher(
        fetcher=fetcher,
        credential=credential,
        ticker_set=TickerSet(tickers),
        market_data=market_data,
        interval_seconds=10.0,
        fetch_timeout_seconds=fetch_timeout,
        clock=clock,
        executor=executor,
    )


class TestScheduling:
    """Tests for tick() timing."""

    def test_first_tick_fetches_immediately(self, stub_fetcher, credential, market_data, clock):
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, ImmediateExecutor())

        assert refresher.tick() is True
        assert refresher.poll() is True
        assert market_data.snapshot.quote("AAPL") is not None

    def test_tick_waits_for_interval(self, stub_fetcher, credential, market_data, clock):
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, ImmediateExecutor())
        refresher.tick()
        refresher.poll()

        clock.advance(9)
        assert refresher.tick() is False

        clock.advance(1)
        assert refresher.tick() is True

    def test_only_one_fetch_in_flight(self, stub_fetcher, credential, market_data, clock):
        """
        GIVEN a fetch that has not finished
        WHEN the interval elapses again
        THEN no second fetch is started
        """
        executor = ManualExecutor()
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, executor)

        refresher.tick()
        clock.advance(60)

        assert refresher.tick() is False
        assert refresher.refresh_now() is False
        assert refresher.in_flight
        assert len(executor.submitted) == 1

    def test_refresh_now_ignores_interval(self, stub_fetcher, credential, market_data, clock):
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, ImmediateExecutor())
        refresher.tick()
        refresher.poll()

        assert refresher.refresh_now() is True

    def test_refresh_during_fetch_runs_when_it_finishes(self, stub_fetcher, credential, market_data, clock):
        """
        GIVEN a fetch started before a ticker was added
        WHEN a refresh is requested while it runs
        THEN the next fetch starts as soon as the first is published
        """
        executor = ManualExecutor()
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, executor)
        refresher.tick()

        assert refresher.refresh_now() is False

        executor.futures[0].set_result(stub_fetcher.fetch(credential, ("AAPL",)))
        refresher.poll()

        assert refresher.tick() is True
        assert len(executor.submitted) == 2


class TestPoll:
    """Tests for result delivery."""

    def test_poll_before_completion_publishes_nothing(self, stub_fetcher, credential, market_data, clock):
        executor = ManualExecutor()
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, executor)
        before = market_data.snapshot
        refresher.tick()

        assert refresher.poll() is False
        assert market_data.snapshot is before

        executor.futures[0].set_result(stub_fetcher.fetch(credential, ("AAPL",)))

        assert refresher.poll() is True
        assert market_data.snapshot is not before
        assert not refresher.in_flight

    def test_failed_fetch_keeps_snapshot(self, credential, market_data, clock):
        fetcher = MagicMock()
        fetcher.fetch.return_value = FetchResult(error=NetworkError("down"))
        refresher = make_refresher(fetcher, credential, market_data, clock, ImmediateExecutor())
        before = market_data.snapshot

        refresher.tick()

        assert refresher.poll() is False
        assert market_data.snapshot is before
        assert market_data.ok() == (False, "")

    def test_fetcher_exception_does_not_escape(self, credential, market_data, clock):
        fetcher = MagicMock()
        fetcher.fetch.side_effect = RuntimeError("fetcher bug")
        refresher = make_refresher(fetcher, credential, market_data, clock, ImmediateExecutor())

        refresher.tick()

        assert refresher.poll() is False
        assert not refresher.in_flight

    def test_fetch_receives_current_tickers(self, stub_fetcher, credential, market_data, clock):
        executor = ManualExecutor()
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, executor, tickers=("msft", "aapl"))

        refresher.tick()

        fn, args, _ = executor.submitted[0]
        assert fn == stub_fetcher.fetch
        assert args == (credential, ("MSFT", "AAPL"))

    def test_close_shuts_down_executor(self, stub_fetcher, credential, market_data, clock):
        executor = MagicMock()
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, executor)

        refresher.close()

        executor.shutdown.assert_called_once_with(wait=False, cancel_futures=True)


class TestFetchTimeout:
    """Tests for abandoning fetches that outlive fetch_timeout_seconds."""

    def test_overdue_fetch_is_published_as_network_error(self, stub_fetcher, credential, market_data, clock):
        """
        GIVEN a fetch that never completes
        WHEN the fetch timeout elapses
        THEN poll() drops it and the service reports unhealthy with the old snapshot
        """
        executor = ManualExecutor()
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, executor, fetch_timeout=10.0)
        before = market_data.snapshot
        refresher.tick()

        clock.advance(9)
        assert refresher.poll() is False
        assert refresher.in_flight
        assert market_data.ok() == (True, "")

        clock.advance(1)
        assert refresher.poll() is False

        assert not refresher.in_flight
        assert isinstance(market_data.last_error, NetworkError)
        assert "timed out" in market_data.last_error.message
        assert market_data.snapshot is before

    def test_late_result_is_discarded(self, stub_fetcher, credential, market_data, clock):
        executor = ManualExecutor()
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, executor, fetch_timeout=10.0)
        before = market_data.snapshot
        refresher.tick()
        clock.advance(10)
        refresher.poll()

        executor.futures[0].set_result(stub_fetcher.fetch(credential, ("AAPL",)))

        assert refresher.poll() is False
        assert market_data.snapshot is before

    def test_next_fetch_starts_after_abandon(self, stub_fetcher, credential, market_data, clock):
        executor = ManualExecutor()
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, executor, fetch_timeout=5.0)
        refresher.tick()
        clock.advance(5)
        refresher.poll()

        clock.advance(5)

        assert refresher.tick() is True
        assert len(executor.submitted) == 2

    def test_owned_worker_is_replaced(self, credential, market_data, clock):
        fetcher = MagicMock()
        refresher = QuoteRefresher(
            fetcher=fetcher,
            credential=credential,
            ticker_set=TickerSet(),
            market_data=market_data,
            fetch_timeout_seconds=1.0,
            clock=clock,
        )
        stuck = MagicMock()
        stuck.submit.return_value = concurrent.futures.Future()
        refresher._executor = stuck
        refresher.tick()

        clock.advance(1)
        refresher.poll()

        stuck.shutdown.assert_called_once_with(wait=False, cancel_futures=True)
        assert refresher._executor is not stuck
        refresher.close()

    def test_no_timeout_waits_indefinitely(self, stub_fetcher, credential, market_data, clock):
        refresher = make_refresher(stub_fetcher, credential, market_data, clock, ManualExecutor())
        refresher.tick()

        clock.advance(3600)

        assert refresher.poll() is False
        assert refresher.in_flight
