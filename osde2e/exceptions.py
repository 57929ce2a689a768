# coding=utf-8
"""Custom exceptions defined by osde2e."""


class ConfigError(Exception):
    """The osde2e configuration cannot be resolved.

    Every configuration error is fatal. It is raised before any test runs, and
    it aborts the whole run. See :mod:`osde2e.config` for more information.
    """


class ConfigFileNotFoundError(ConfigError):
    """We cannot find the requested osde2e configuration file.

    See :func:`osde2e.config.load` for more information on how configuration
    files are located.
    """


class ConfigValidationError(ConfigError):
    """The configuration file has validation errors.

    See :func:`osde2e.config.validate_document` for more information on how
    configuration validation is handled.
    """

    def __init__(self, error_messages, *args, **kwargs):
        """Require that the validation messages list is defined."""
        super().__init__(error_messages, *args, **kwargs)
        self.error_messages = error_messages

    def __str__(self):
        """Provide a human-friendly string representation of this exception."""
        return (
            'Configuration file is not valid:\n\n'
            '{}'
        ).format('\n'.join(self.error_messages))


class MissingRequiredFieldError(ConfigError):
    """One or more required configuration fields have no value.

    All unset fields are reported at once, not just the first one found.
    """

    def __init__(self, fields, *args, **kwargs):
        """Require that the list of missing fields is defined."""
        super().__init__(fields, *args, **kwargs)
        self.fields = tuple(fields)

    def __str__(self):
        """Provide a human-friendly string representation of this exception."""
        return 'The following required fields are not set: {}'.format(
            ', '.join(self.fields)
        )


class InvalidFieldTypeError(ConfigError):
    """A configuration value cannot be parsed as its declared type."""

    def __init__(self, field, value, expected, *args, **kwargs):
        """Require the field name, raw value and expected type."""
        super().__init__(field, value, expected, *args, **kwargs)
        self.field = field
        self.value = value
        self.expected = expected

    def __str__(self):
        """Provide a human-friendly string representation of this exception."""
        return 'Field {} expects {}, but got {!r}.'.format(
            self.field, self.expected, self.value
        )


class WaitTimedOutError(Exception):
    """We timed out while polling a condition and waiting for it to be true.

    This is distinct from an error raised by the polled condition itself: a
    condition that keeps returning a falsy value is "not ready yet," not
    broken. See :func:`osde2e.wait.wait_until` for more information.
    """

    def __init__(self, elapsed, attempts, description=None, *args, **kwargs):
        """Require the elapsed time and the number of attempts."""
        super().__init__(elapsed, attempts, description, *args, **kwargs)
        self.elapsed = elapsed
        self.attempts = attempts
        self.description = description

    def __str__(self):
        """Provide a human-friendly string representation of this exception."""
        return '{} is not true after {:.1f}s and {} attempts.'.format(
            self.description or 'Condition',
            self.elapsed.total_seconds(),
            self.attempts,
        )
