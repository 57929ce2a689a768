# coding=utf-8
"""Crude analysis of test logs with regular expressions.

A log metric names a regular expression and a pair of thresholds. Every match
of the expression in a build log increments the metric's counter, and the run
is considered healthy only if the final count lies strictly between the
thresholds. For example, this metric fails a run as soon as one panic is
logged:

>>> from osde2e.metrics import LogMetric
>>> panics = LogMetric('panics', r'panic:', high_threshold=1)
>>> panics.is_passing(panics.count_matches('all good'))
True
>>> panics.is_passing(panics.count_matches('panic: oh no'))
False

Metrics are normally declared in the ``logMetrics`` list of a YAML
configuration file. See :mod:`osde2e.config`.
"""
import collections
import re

from osde2e import constants, exceptions
from osde2e.log import logger


MetricResult = collections.namedtuple('MetricResult', 'name count passing')
"""The outcome of evaluating one :class:`LogMetric` against a log."""


class LogMetric(collections.namedtuple(
        'LogMetric', 'name regex high_threshold low_threshold')):
    """A named regular expression and the bounds its match count must obey.

    :param name: The name of the metric.
    :param regex: A regular expression, as a string.
    :param high_threshold: A count equal to or above this value fails.
        Defaults to 9999, which is effectively unbounded.
    :param low_threshold: A count equal to or below this value fails.
        Defaults to -1, which any count passes.
    """

    __slots__ = ()

    def __new__(cls, name='', regex='',
                high_threshold=constants.HIGH_THRESHOLD_DEFAULT,
                low_threshold=constants.LOW_THRESHOLD_DEFAULT):
        """Provide defaults for every attribute."""
        return super().__new__(cls, name, regex, high_threshold, low_threshold)

    def count_matches(self, log_text):
        """Return the number of non-overlapping matches in ``log_text``.

        ``log_text`` may be a string or bytes. Bytes are decoded as UTF-8,
        replacing undecodable sequences, so the regular expression always
        matches with Unicode semantics. An empty log, or an empty regular
        expression, yields 0.

        An empty match directly after the end of the previous match is not
        counted, so ``a*`` matches ``baa`` twice, not three times.
        """
        if not log_text or not self.regex:
            return 0
        if isinstance(log_text, bytes):
            log_text = log_text.decode('utf-8', errors='replace')
        pattern = re.compile(self.regex)
        count, pos, previous_end = 0, 0, -1
        while pos <= len(log_text):
            match = pattern.search(log_text, pos)
            if match is None:
                break
            start, end = match.span()
            if start == end:
                if start != previous_end:
                    count += 1
                pos = end + 1
            else:
                count += 1
                pos = end
            previous_end = end
        return count

    def is_passing(self, count):
        """Return whether ``count`` lies strictly between the thresholds."""
        return self.low_threshold < count < self.high_threshold

    def to_document(self):
        """Return this metric as it appears in a YAML document."""
        return {
            'name': self.name,
            'regex': self.regex,
            'highThreshold': self.high_threshold,
            'lowThreshold': self.low_threshold,
        }


EMPTY_METRIC = LogMetric()
"""Returned by :meth:`LogMetrics.get_metric_by_name` for unknown names."""


class LogMetrics(tuple):
    """An ordered, immutable collection of :class:`LogMetric` objects."""

    __slots__ = ()

    def __new__(cls, metrics=()):
        """Build the collection from any iterable of metrics."""
        return super().__new__(cls, metrics)

    def __repr__(self):
        """Create string representation of the object."""
        return '{}({})'.format(type(self).__name__, list(self))

    @classmethod
    def from_document(cls, items):
        """Build metrics from the ``logMetrics`` list of a YAML document.

        :raises osde2e.exceptions.InvalidFieldTypeError: If a threshold is not
            an integer or a regular expression does not compile.
        """
        metrics = []
        for index, item in enumerate(items or ()):
            if not isinstance(item, dict):
                raise exceptions.InvalidFieldTypeError(
                    'logMetrics[{}]'.format(index), item, 'a mapping'
                )
            name = item.get('name', '')
            field = 'logMetrics[{}]'.format(name or index)
            regex = item.get('regex', '')
            try:
                re.compile(regex)
            except (re.error, TypeError) as err:
                raise exceptions.InvalidFieldTypeError(
                    field + '.regex', regex, 'a regular expression'
                ) from err
            thresholds = {}
            for key, attr, default in (
                    ('highThreshold', 'high_threshold',
                     constants.HIGH_THRESHOLD_DEFAULT),
                    ('lowThreshold', 'low_threshold',
                     constants.LOW_THRESHOLD_DEFAULT),
            ):
                value = item.get(key, default)
                if isinstance(value, bool) or not isinstance(value, int):
                    raise exceptions.InvalidFieldTypeError(
                        '{}.{}'.format(field, key), value, 'integer'
                    )
                thresholds[attr] = value
            metrics.append(LogMetric(name, regex, **thresholds))
        return cls(metrics)

    def to_document(self):
        """Return these metrics as they appear in a YAML document."""
        return [metric.to_document() for metric in self]

    def get_metric_by_name(self, name):
        """Return the first metric named ``name``.

        If there is no such metric, return :data:`EMPTY_METRIC` instead of
        raising an exception. Callers rely on this.
        """
        for metric in self:
            if metric.name == name:
                return metric
        return EMPTY_METRIC

    def count_matches(self, metric_name, log_text):
        """Count the matches of the metric named ``metric_name``.

        Unknown metrics count 0 matches.
        """
        return self.get_metric_by_name(metric_name).count_matches(log_text)

    def evaluate(self, log_text):
        """Evaluate every metric against ``log_text``.

        :returns: A tuple of :class:`MetricResult`, one per metric, in order.
        """
        results = []
        for metric in self:
            count = metric.count_matches(log_text)
            passing = metric.is_passing(count)
            logger.debug(
                'Log metric %s matched %s times (passing: %s).',
                metric.name, count, passing,
            )
            results.append(MetricResult(metric.name, count, passing))
        return tuple(results)
