# coding=utf-8
"""Unit tests for :mod:`osde2e.checks`."""
import unittest
from datetime import timedelta
from unittest import mock

from osde2e import checks, constants, exceptions

from .test_wait import FakeClock


class WaitForItemsTestCase(unittest.TestCase):
    """Test :func:`osde2e.checks.wait_for_items`."""

    def setUp(self):
        """Create a fake clock."""
        self.clock = FakeClock()
        self.kwargs = {"clock": self.clock, "sleep": self.clock.sleep}

    def test_items_appear(self):
        """The first sufficiently large collection is returned."""
        fetch = mock.Mock(side_effect=[[], [], ["cert-secret"]])
        items = checks.wait_for_items(
            fetch, interval=30, timeout=900, **self.kwargs
        )
        self.assertEqual(items, ["cert-secret"])
        self.assertEqual(fetch.call_count, 3)

    def test_minimum(self):
        """Fewer than ``minimum`` items keep the wait going."""
        fetch = mock.Mock(side_effect=[["a"], ["a", "b"]])
        items = checks.wait_for_items(
            fetch, minimum=2, interval=1, timeout=10, **self.kwargs
        )
        self.assertEqual(items, ["a", "b"])

    def test_timeout(self):
        """No items before the timeout is a timeout, not an error."""
        fetch = mock.Mock(return_value=[])
        fetch.__name__ = "list_secrets"
        with self.assertRaises(exceptions.WaitTimedOutError) as err:
            checks.wait_for_items(fetch, interval=1, timeout=3, **self.kwargs)
        self.assertIn("list_secrets", str(err.exception))

    def test_default_interval_and_timeout(self):
        """Without an interval or timeout, the poll defaults are used."""
        fetch = mock.Mock(return_value=[])
        with self.assertRaises(exceptions.WaitTimedOutError) as err:
            checks.wait_for_items(fetch=fetch, **self.kwargs)
        self.assertEqual(
            self.clock.now, constants.DEFAULT_POLL_TIMEOUT.total_seconds()
        )
        self.assertEqual(
            set(self.clock.sleeps),
            {constants.DEFAULT_POLL_INTERVAL.total_seconds()},
        )
        self.assertEqual(err.exception.attempts, 31)
        self.assertEqual(fetch.call_count, 31)

    def test_fetch_error(self):
        """An error raised by ``fetch`` propagates on the first call."""
        fetch = mock.Mock(side_effect=ConnectionError("api server is down"))
        with self.assertRaises(ConnectionError):
            checks.wait_for_items(fetch, interval=1, timeout=10, **self.kwargs)
        self.assertEqual(fetch.call_count, 1)


class PollingTimeoutTestCase(unittest.TestCase):
    """Test :func:`osde2e.checks.polling_timeout`."""

    def test_configured(self):
        """The configured timeout is returned."""
        cfg = mock.Mock()
        cfg.tests.polling_timeout = timedelta(minutes=45)
        self.assertEqual(checks.polling_timeout(cfg), timedelta(minutes=45))

    def test_zero(self):
        """A zero timeout falls back to the default."""
        cfg = mock.Mock()
        cfg.tests.polling_timeout = timedelta()
        self.assertEqual(
            checks.polling_timeout(cfg), constants.DEFAULT_POLL_TIMEOUT
        )
