# coding=utf-8
"""Verification helpers built on :mod:`osde2e.wait`.

Health and feature checks often boil down to "wait until the cluster lists at
least N of something." For example, the certificate manager operator should
create a certificate secret in the ``openshift-config`` namespace, and the API
server should then report a named certificate. The cluster client that lists
those objects is supplied by the caller.
"""
from osde2e import constants
from osde2e.log import logger
from osde2e.wait import wait_until


def polling_timeout(cfg):
    """Return how long checks may wait for an object, per ``cfg``.

    :param osde2e.config.Config cfg: The configuration of the run.
    :returns: A ``datetime.timedelta``. Falls back to
        :data:`osde2e.constants.DEFAULT_POLL_TIMEOUT` if the configured value
        is zero.
    """
    return cfg.tests.polling_timeout or constants.DEFAULT_POLL_TIMEOUT


def wait_for_items(fetch, minimum=1, description=None,
                   interval=constants.DEFAULT_POLL_INTERVAL,
                   timeout=constants.DEFAULT_POLL_TIMEOUT, **kwargs):
    """Wait until ``fetch`` returns at least ``minimum`` items.

    :param fetch: A callable taking no arguments and returning a sized
        collection, such as a list of secrets.
    :param minimum: How many items must be present.
    :param description: Passed to :func:`osde2e.wait.wait_until`. Defaults to
        a description built from ``fetch`` and ``minimum``.
    :param interval: Passed to :func:`osde2e.wait.wait_until`. Defaults to
        :data:`osde2e.constants.DEFAULT_POLL_INTERVAL`.
    :param timeout: Passed to :func:`osde2e.wait.wait_until`. Defaults to
        :data:`osde2e.constants.DEFAULT_POLL_TIMEOUT`. See
        :func:`polling_timeout` for the configured value.
    :returns: The last collection returned by ``fetch``.
    :raises osde2e.exceptions.WaitTimedOutError: If fewer than ``minimum``
        items are present when ``timeout`` elapses.
    :raises: Whatever ``fetch`` raises.
    """
    if description is None:
        description = 'at least {} item(s) from {}'.format(
            minimum, getattr(fetch, '__name__', 'fetch')
        )
    fetched = []

    def enough_items():
        items = fetch()
        fetched[:] = [items]
        logger.debug('Found %s of %s item(s).', len(items), minimum)
        return len(items) >= minimum

    wait_until(interval, timeout, enough_items, description, **kwargs)
    return fetched[0]
