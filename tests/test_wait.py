# coding=utf-8
"""Unit tests for :mod:`osde2e.wait`."""
import unittest
from datetime import timedelta
from unittest import mock

from osde2e import exceptions, wait


class FakeClock():
    """A clock that only moves when something sleeps."""

    def __init__(self):
        """Start at zero."""
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        """Return the current time."""
        return self.now

    def sleep(self, seconds):
        """Advance the current time."""
        self.sleeps.append(seconds)
        self.now += seconds


def _waiter(interval, timeout, predicate, clock):
    return wait.Waiter(
        interval, timeout, predicate, clock=clock, sleep=clock.sleep
    )


class WaitUntilTestCase(unittest.TestCase):
    """Test :func:`osde2e.wait.wait_until`."""

    def setUp(self):
        """Create a fake clock."""
        self.clock = FakeClock()

    def test_ready_after_retries(self):
        """A predicate that becomes true ends the wait successfully."""
        predicate = mock.Mock(side_effect=[False, False, False, True])
        result = wait.wait_until(
            1, 10, predicate, clock=self.clock, sleep=self.clock.sleep
        )
        self.assertIs(result, True)
        self.assertEqual(predicate.call_count, 4)
        self.assertEqual(self.clock.sleeps, [1, 1, 1])

    def test_ready_immediately(self):
        """The first check happens without delay."""
        predicate = mock.Mock(return_value=True)
        wait.wait_until(
            30, 60, predicate, clock=self.clock, sleep=self.clock.sleep
        )
        self.assertEqual(predicate.call_count, 1)
        self.assertEqual(self.clock.sleeps, [])

    def test_timeout(self):
        """A predicate that is never true times out."""
        predicate = mock.Mock(return_value=False)
        with self.assertRaises(exceptions.WaitTimedOutError) as err:
            wait.wait_until(
                1, 2, predicate, "the secret",
                clock=self.clock, sleep=self.clock.sleep,
            )
        self.assertEqual(predicate.call_count, 3)
        self.assertEqual(err.exception.attempts, 3)
        self.assertEqual(err.exception.elapsed, timedelta(seconds=2))
        self.assertIn("the secret", str(err.exception))

    def test_predicate_error(self):
        """A predicate error propagates unchanged and ends the wait."""
        error = RuntimeError("cannot list secrets")
        predicate = mock.Mock(side_effect=[error, True])
        with self.assertRaises(RuntimeError) as err:
            wait.wait_until(
                1, 10, predicate, clock=self.clock, sleep=self.clock.sleep
            )
        self.assertIs(err.exception, error)
        self.assertEqual(predicate.call_count, 1)

    def test_timeout_is_not_predicate_error(self):
        """Timeouts and predicate errors are distinguishable."""
        self.assertFalse(issubclass(exceptions.WaitTimedOutError, RuntimeError))
        predicate = mock.Mock(side_effect=exceptions.WaitTimedOutError(
            timedelta(), 1
        ))
        waiter = _waiter(1, 10, predicate, self.clock)
        with self.assertRaises(exceptions.WaitTimedOutError):
            waiter.run()
        self.assertIs(waiter.state, wait.WaitState.FAILED)

    def test_nested_wait_timeout(self):
        """A nested timeout is told apart from the outer one by state."""
        inner = _waiter(1, 2, mock.Mock(return_value=False), self.clock)
        outer = _waiter(5, 60, inner.run, self.clock)
        with self.assertRaises(exceptions.WaitTimedOutError) as err:
            outer.run()
        self.assertIs(err.exception, inner.error)
        self.assertIs(inner.state, wait.WaitState.TIMED_OUT)
        self.assertIs(outer.state, wait.WaitState.FAILED)
        self.assertIs(outer.error, inner.error)
        self.assertEqual(outer.attempts, 1)

    def test_last_sleep_is_shortened(self):
        """The waiter does not sleep past the deadline."""
        predicate = mock.Mock(return_value=False)
        with self.assertRaises(exceptions.WaitTimedOutError):
            wait.wait_until(
                2, 5, predicate, clock=self.clock, sleep=self.clock.sleep
            )
        self.assertEqual(self.clock.sleeps, [2, 2, 1])
        self.assertEqual(predicate.call_count, 4)

    def test_timedelta_arguments(self):
        """Intervals and timeouts may be given as timedeltas."""
        predicate = mock.Mock(side_effect=[False, True])
        wait.wait_until(
            timedelta(seconds=30),
            timedelta(minutes=15),
            predicate,
            clock=self.clock,
            sleep=self.clock.sleep,
        )
        self.assertEqual(self.clock.sleeps, [30])

    def test_zero_timeout(self):
        """A zero timeout still checks once."""
        predicate = mock.Mock(return_value=False)
        with self.assertRaises(exceptions.WaitTimedOutError):
            wait.wait_until(
                1, 0, predicate, clock=self.clock, sleep=self.clock.sleep
            )
        self.assertEqual(predicate.call_count, 1)

    def test_invalid_arguments(self):
        """Non-positive intervals and negative timeouts are rejected."""
        for interval, timeout in ((0, 10), (-1, 10), (1, -1)):
            with self.subTest(interval=interval, timeout=timeout):
                with self.assertRaises(ValueError):
                    wait.wait_until(interval, timeout, mock.Mock())


class WaiterStateTestCase(unittest.TestCase):
    """Test the states of :class:`osde2e.wait.Waiter`."""

    def setUp(self):
        """Create a fake clock."""
        self.clock = FakeClock()

    def test_initial_state(self):
        """A new waiter is waiting."""
        waiter = _waiter(1, 1, mock.Mock(), self.clock)
        self.assertIs(waiter.state, wait.WaitState.WAITING)
        self.assertEqual(waiter.attempts, 0)

    def test_succeeded(self):
        """A successful wait is recorded."""
        waiter = _waiter(1, 10, mock.Mock(return_value=True), self.clock)
        waiter.run()
        self.assertIs(waiter.state, wait.WaitState.SUCCEEDED)
        self.assertIsNone(waiter.error)

    def test_failed(self):
        """A predicate error is recorded."""
        error = ValueError("boom")
        waiter = _waiter(1, 10, mock.Mock(side_effect=error), self.clock)
        with self.assertRaises(ValueError):
            waiter.run()
        self.assertIs(waiter.state, wait.WaitState.FAILED)
        self.assertIs(waiter.error, error)

    def test_timed_out(self):
        """A timeout is recorded."""
        waiter = _waiter(1, 2, mock.Mock(return_value=False), self.clock)
        with self.assertRaises(exceptions.WaitTimedOutError):
            waiter.run()
        self.assertIs(waiter.state, wait.WaitState.TIMED_OUT)
        self.assertIsInstance(waiter.error, exceptions.WaitTimedOutError)

    def test_terminal(self):
        """A waiter cannot be run again once it is done."""
        predicate = mock.Mock(return_value=True)
        waiter = _waiter(1, 10, predicate, self.clock)
        waiter.run()
        with self.assertRaises(RuntimeError):
            waiter.run()
        self.assertEqual(predicate.call_count, 1)

    def test_description(self):
        """The predicate's name is the default description."""
        def secret_exists():
            return True
        waiter = _waiter(1, 1, secret_exists, self.clock)
        self.assertEqual(waiter.description, "secret_exists")
