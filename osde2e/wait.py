# coding=utf-8
"""Wait for asynchronous cluster state to settle.

Much of what a cluster does happens in the background: operators create
secrets, the API server picks up certificates, and so on. Tests check such
state by polling it until it looks right or until they give up. This module
provides that polling loop. A typical use looks like this:

>>> from osde2e.wait import wait_until
>>> def secret_exists():
...     return len(list_secrets('openshift-config')) > 0
>>> wait_until(30, 15 * 60, secret_exists)
True

Every wait ends in exactly one of three ways:

* The predicate returns a truthy value, and ``True`` is returned.
* The predicate raises an exception, which propagates unchanged. The
  predicate is not called again.
* The timeout elapses while the predicate keeps returning falsy values, and
  :class:`osde2e.exceptions.WaitTimedOutError` is raised.
"""
import enum
import time
from datetime import timedelta

from osde2e import exceptions
from osde2e.log import logger


class WaitState(enum.Enum):
    """The states of a :class:`Waiter`."""

    WAITING = 'waiting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'
    TIMED_OUT = 'timed out'


def _to_seconds(value):
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


class Waiter():
    """Poll a predicate at a fixed interval until it is true.

    The first poll happens immediately. The predicate is called synchronously
    and never concurrently with itself. An in-flight predicate call is never
    interrupted, so predicates making network requests should have timeouts of
    their own.

    A waiter may only be run once. Its ``state``, ``attempts`` and ``error``
    attributes describe the outcome afterwards.

    :param interval: Seconds, or a ``datetime.timedelta``, between polls.
    :param timeout: Seconds, or a ``datetime.timedelta``, after which to give
        up.
    :param predicate: A callable taking no arguments.
    :param description: A human readable description of what is awaited. It
        is used in log messages and in timeout errors.
    :param clock: A callable returning monotonic seconds.
    :param sleep: A callable that sleeps for the given number of seconds.
    """

    def __init__(self, interval, timeout, predicate, description=None,
                 clock=time.monotonic, sleep=time.sleep):
        """Initialize this object with needed instance attributes."""
        self.interval = _to_seconds(interval)
        self.timeout = _to_seconds(timeout)
        if self.interval <= 0:
            raise ValueError(
                'The poll interval must be positive, not {}.'.format(interval)
            )
        if self.timeout < 0:
            raise ValueError(
                'The timeout must not be negative, not {}.'.format(timeout)
            )
        self.predicate = predicate
        self.description = description or getattr(
            predicate, '__name__', 'condition'
        )
        self.state = WaitState.WAITING
        self.attempts = 0
        self.error = None
        self._clock = clock
        self._sleep = sleep

    def run(self):
        """Poll the predicate until the wait reaches a terminal state.

        :returns: ``True`` once the predicate returns a truthy value.
        :raises osde2e.exceptions.WaitTimedOutError: If the timeout elapses
            first.
        :raises RuntimeError: If this waiter has already run.
        :raises: Whatever the predicate raises.
        """
        if self.state is not WaitState.WAITING:
            raise RuntimeError(
                'This waiter for {} is already {}.'.format(
                    self.description, self.state.value
                )
            )
        start = self._clock()
        deadline = start + self.timeout
        while True:
            self.attempts += 1
            logger.debug(
                'Checking %s (attempt %s).', self.description, self.attempts
            )
            try:
                ready = self.predicate()
            except Exception as err:
                self.state = WaitState.FAILED
                self.error = err
                raise
            if ready:
                self.state = WaitState.SUCCEEDED
                return True
            now = self._clock()
            if now >= deadline:
                self.state = WaitState.TIMED_OUT
                self.error = exceptions.WaitTimedOutError(
                    timedelta(seconds=now - start),
                    self.attempts,
                    self.description,
                )
                raise self.error
            self._sleep(min(self.interval, deadline - now))


def wait_until(interval, timeout, predicate, description=None, **kwargs):
    """Block until ``predicate`` returns a truthy value.

    See :class:`Waiter` for the meaning of the arguments. Extra keyword
    arguments are passed to it as well.

    :returns: ``True``.
    :raises osde2e.exceptions.WaitTimedOutError: If ``timeout`` elapses
        while the predicate keeps returning falsy values.
    :raises: Whatever the predicate raises, unchanged.

    A predicate that itself waits may raise
    :class:`osde2e.exceptions.WaitTimedOutError` too, and that error
    propagates looking just like a timeout of this wait. Callers nesting
    waits who need to tell the two apart should build a :class:`Waiter` and
    check its ``state`` after ``run``: it is ``WaitState.FAILED`` for an error
    raised by the predicate and ``WaitState.TIMED_OUT`` for its own timeout.
    """
    return Waiter(interval, timeout, predicate, description, **kwargs).run()
