# coding=utf-8
"""Tools for resolving the configuration of a test run.

osde2e needs to know about the cluster under test and about how tests should
behave. For example, it needs an OCM token to provision clusters, and it needs
to know how long to wait for cluster objects to appear. This module gathers
that information from three sources and merges it into one immutable
:class:`Config` object.

The sources are, from highest to lowest precedence:

1. An optional YAML document, such as::

       ocm:
         token: "..."
         env: stage
       tests:
         pollingTimeout: 45
       logMetrics:
         - name: panics
           regex: "panic:"
           highThreshold: 1

2. Environment variables, one per field. See :data:`FIELDS` for the mapping.
3. Built-in defaults.

A field with none of these is set to the zero value of its type, unless the
field is required, in which case resolution fails. Resolution happens once, at
process start, and the result is shared read-only by every consumer.
"""
import collections
import os
import random
import re
import string
import tempfile
from datetime import timedelta

import jsonschema
import yaml
from xdg import BaseDirectory

from osde2e import constants, exceptions
from osde2e.log import logger
from osde2e.metrics import LogMetrics

_SENTINEL = object()

_TRUE_STRINGS = ('1', 't', 'T', 'TRUE', 'true', 'True')
_FALSE_STRINGS = ('0', 'f', 'F', 'FALSE', 'false', 'False')
_DURATION_UNITS = {
    'h': 'hours',
    'm': 'minutes',
    's': 'seconds',
    'ms': 'milliseconds',
}
_DURATION_PART = re.compile(r'(\d+(?:\.\d+)?)(ms|h|m|s)')


# A field type knows how to parse raw values, how to dump parsed values back
# into a YAML document, and what its zero value is.
FieldType = collections.namedtuple('FieldType', 'name parse dump zero json_type')


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_string(value):
    """Parse a string. Numbers, as YAML likes to produce them, are accepted."""
    if isinstance(value, str):
        return value
    if _is_number(value):
        return str(value)
    raise TypeError(value)


def parse_integer(value):
    """Parse a base 10 integer from an ``int`` or a string."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        return int(value.strip(), 10)
    raise TypeError(value)


def parse_boolean(value):
    """Parse a boolean.

    Strings follow the usual conventions of the Go ecosystem, so "1", "t" and
    "TRUE" are true while "0", "f" and "FALSE" are false.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.strip() in _TRUE_STRINGS:
            return True
        if value.strip() in _FALSE_STRINGS:
            return False
        raise ValueError(value)
    raise TypeError(value)


def parse_list(value):
    """Parse a list of strings.

    Environment variables hold comma separated lists. Blank items are dropped.
    """
    if isinstance(value, str):
        return tuple(item.strip() for item in value.split(',') if item.strip())
    if isinstance(value, (list, tuple)):
        return tuple(parse_string(item) for item in value)
    raise TypeError(value)


def duration(unit):
    """Return a duration :class:`FieldType` whose bare numbers are in ``unit``.

    :param unit: One of the keyword arguments of ``datetime.timedelta``, such
        as ``'minutes'`` or ``'hours'``.
    """
    def parse(value):
        if isinstance(value, timedelta):
            return value
        if _is_number(value):
            return timedelta(**{unit: value})
        if not isinstance(value, str):
            raise TypeError(value)
        value = value.strip()
        try:
            return timedelta(**{unit: float(value)})
        except ValueError:
            pass
        # Go style durations, such as "1h30m", "90s" or "-1.5h".
        sign, parts = 1, value
        if parts[:1] in ('-', '+'):
            sign, parts = (-1 if parts[0] == '-' else 1), parts[1:]
        if not parts or _DURATION_PART.sub('', parts):
            raise ValueError(value)
        total = timedelta()
        for amount, suffix in _DURATION_PART.findall(parts):
            total += timedelta(**{_DURATION_UNITS[suffix]: float(amount)})
        return sign * total

    def dump(value):
        amount = value / timedelta(**{unit: 1})
        if amount == int(amount):
            return int(amount)
        return '{}s'.format(value.total_seconds())

    return FieldType(
        'duration ({})'.format(unit), parse, dump, timedelta(), ['number', 'string']
    )


STRING = FieldType(
    'string', parse_string, lambda value: value, '', ['string', 'number']
)
INTEGER = FieldType(
    'integer', parse_integer, lambda value: value, 0, ['integer', 'string']
)
BOOLEAN = FieldType(
    'boolean', parse_boolean, lambda value: value, False, ['boolean', 'string']
)
LIST = FieldType('list of strings', parse_list, list, (), ['array', 'string'])


class Field(collections.namedtuple(
        'Field',
        'section name env yaml_path type default required description')):
    """A single configuration value and how to find it.

    :param section: The name of the section holding this field, or ``None``
        for top-level fields.
    :param name: The attribute name of this field within its section.
    :param env: The environment variable this field may be read from.
    :param yaml_path: A dotted path to this field within a YAML document.
    :param type: A :class:`FieldType`.
    :param default: The built-in default, already of the right type. ``None``
        means "no default."
    :param required: Whether resolution fails when no value is found.
    :param description: A one-line, human readable description.
    """

    __slots__ = ()

    @property
    def qualified_name(self):
        """Return the dotted name of this field, such as ``ocm.token``."""
        if self.section is None:
            return self.name
        return '{}.{}'.format(self.section, self.name)


def _field(section, name, env, yaml_path, type_, description, default=None,
           required=False):
    return Field(
        section, name, env, yaml_path, type_, default, required, description
    )


FIELDS = (
    _field(
        None, 'provider', 'PROVIDER', 'provider', STRING,
        'The provider used to create and delete clusters.',
        default='ocm',
    ),
    _field(
        None, 'job_name', 'JOB_NAME', 'jobName', STRING,
        'The name of the current e2e job run.',
    ),
    _field(
        None, 'job_id', 'BUILD_NUMBER', 'jobID', INTEGER,
        'The ID designated by the CI system for this run.',
    ),
    _field(
        None, 'base_job_url', 'BASE_JOB_URL', 'baseJobURL', STRING,
        'The root location for all job artifacts.',
        default=constants.DEFAULT_BASE_JOB_URL,
    ),
    _field(
        None, 'report_dir', 'REPORT_DIR', 'reportDir', STRING,
        'The directory JUnit XML results are written to.',
        default=constants.TMP_DIR_PLACEHOLDER,
    ),
    _field(
        None, 'suffix', 'SUFFIX', 'suffix', STRING,
        'Appended to test names to identify them.',
        default=constants.RANDOM_SUFFIX_PLACEHOLDER,
    ),
    _field(
        None, 'dry_run', 'DRY_RUN', 'dryRun', BOOLEAN,
        'Run everything up to the e2e tests, then skip them.',
    ),
    _field(
        'upgrade', 'upgrade_to_cis_if_possible', 'UPGRADE_TO_CIS_IF_POSSIBLE',
        'upgrade.upgradeToCISIfPossible', BOOLEAN,
        'Upgrade to the most recent cluster image set if it is newer than the '
        'install version.',
        default=False,
    ),
    _field(
        'upgrade', 'only_upgrade_to_z_releases', 'ONLY_UPGRADE_TO_Z_RELEASES',
        'upgrade.onlyUpgradeToZReleases', BOOLEAN,
        'Restrict upgrades to Z releases on stage and prod.',
        default=False,
    ),
    _field(
        'upgrade', 'next_release_after_prod_default_for_upgrade',
        'NEXT_RELEASE_AFTER_PROD_DEFAULT_FOR_UPGRADE',
        'upgrade.nextReleaseAfterProdDefaultForUpgrade', INTEGER,
        'Upgrade to the cluster image set this many releases away from the '
        'production default.',
        default=-1,
    ),
    _field(
        'upgrade', 'release_stream', 'UPGRADE_RELEASE_STREAM',
        'upgrade.releaseStream', STRING,
        'The release stream used to retrieve the latest upgrade images.',
    ),
    _field(
        'kubeconfig', 'path', 'TEST_KUBECONFIG', 'kubeconfig.path', STRING,
        'The path of an existing kubeconfig.',
    ),
    _field(
        'tests', 'polling_timeout', 'POLLING_TIMEOUT', 'tests.pollingTimeout',
        duration('minutes'),
        'How long to wait for an object to be created before failing the '
        'test.',
        default=timedelta(minutes=30),
    ),
    _field(
        'tests', 'ginkgo_skip', 'GINKGO_SKIP', 'tests.ginkgoSkip', STRING,
        'A regex; test suites matching it are skipped.',
    ),
    _field(
        'tests', 'ginkgo_focus', 'GINKGO_FOCUS', 'tests.focus', STRING,
        'A regex; only test suites matching it are run.',
    ),
    _field(
        'tests', 'tests_to_run', 'TESTS_TO_RUN', 'tests.testsToRun', LIST,
        'The files executed as part of a test suite.',
    ),
    _field(
        'tests', 'suppress_skip_notifications', 'SUPPRESS_SKIP_NOTIFICATIONS',
        'tests.suppressSkipNotifications', BOOLEAN,
        'Suppress the notifications of skipped tests.',
        default=True,
    ),
    _field(
        'tests', 'clean_runs', 'CLEAN_RUNS', 'tests.cleanRuns', INTEGER,
        'How many times the test version is run before skipping.',
    ),
    _field(
        'tests', 'operator_skip', 'OPERATOR_SKIP', 'tests.operatorSkip',
        STRING,
        'A comma separated list of operators to ignore health checks from.',
        default='insights',
    ),
    _field(
        'tests', 'skip_cluster_health_checks', 'SKIP_CLUSTER_HEALTH_CHECKS',
        'tests.skipClusterHealthChecks', BOOLEAN,
        'Skip the cluster health checks.',
        default=False,
    ),
    _field(
        'tests', 'upload_metrics', 'UPLOAD_METRICS', 'tests.uploadMetrics',
        BOOLEAN,
        'Upload results to the metrics bucket.',
        default=False,
    ),
    _field(
        'tests', 'metrics_bucket', 'METRICS_BUCKET', 'tests.metricsBucket',
        STRING,
        'The bucket that metrics data is uploaded to.',
        default='osde2e-metrics',
    ),
    _field(
        'tests', 'service_account', 'SERVICE_ACCOUNT', 'tests.serviceAccount',
        STRING,
        'The user tests run as. Empty means system:admin.',
    ),
    _field(
        'cluster', 'multi_az', 'MULTI_AZ', 'cluster.multiAZ', BOOLEAN,
        'Deploy the cluster across multiple availability zones.',
        default=False,
    ),
    _field(
        'cluster', 'destroy_after_test', 'DESTROY_CLUSTER',
        'cluster.destroyAfterTest', BOOLEAN,
        'Delete the cluster after the tests ran.',
        default=False,
    ),
    _field(
        'cluster', 'expiry_in_minutes', 'CLUSTER_EXPIRY_IN_MINUTES',
        'cluster.expiryInMinutes', INTEGER,
        'How long before a cluster expires and is deleted.',
        default=210,
    ),
    _field(
        'cluster', 'after_test_wait', 'AFTER_TEST_CLUSTER_WAIT',
        'cluster.afterTestWait', INTEGER,
        'How long to keep a cluster around after tests have run.',
        default=60,
    ),
    _field(
        'cluster', 'install_timeout', 'CLUSTER_UP_TIMEOUT',
        'cluster.installTimeout', INTEGER,
        'How long to wait before failing a cluster launch.',
        default=135,
    ),
    _field(
        'cluster', 'use_latest_version_for_install',
        'USE_LATEST_VERSION_FOR_INSTALL',
        'cluster.useLatestVersionForInstall', BOOLEAN,
        'Install the latest available cluster image set.',
        default=False,
    ),
    _field(
        'cluster', 'use_middle_cluster_image_set_for_install',
        'USE_MIDDLE_CLUSTER_IMAGE_SET_FOR_INSTALL',
        'cluster.useMiddleClusterVersionForInstall', BOOLEAN,
        'Install the cluster image set in the middle of the known versions.',
        default=False,
    ),
    _field(
        'cluster', 'use_oldest_cluster_image_set_for_install',
        'USE_OLDEST_CLUSTER_IMAGE_SET_FOR_INSTALL',
        'cluster.useOldestClusterVersionForInstall', BOOLEAN,
        'Install the oldest known cluster image set.',
        default=False,
    ),
    _field(
        'cluster', 'next_release_after_prod_default',
        'NEXT_RELEASE_AFTER_PROD_DEFAULT',
        'cluster.nextReleaseAfterProdDefault', INTEGER,
        'Install the cluster image set this many releases away from the '
        'production default.',
        default=-1,
    ),
    _field(
        'cluster', 'major_target', 'MAJOR_TARGET', 'cluster.majorTarget',
        INTEGER,
        'The major version to target during version selection.',
    ),
    _field(
        'cluster', 'minor_target', 'MINOR_TARGET', 'cluster.minorTarget',
        INTEGER,
        'The minor version to target during version selection.',
    ),
    _field(
        'cluster', 'clean_check_runs', 'CLEAN_CHECK_RUNS',
        'cluster.cleanCheckRuns', INTEGER,
        'How many health checks must pass before a cluster is healthy.',
        default=20,
    ),
    _field(
        'ocm', 'token', 'OCM_TOKEN', 'ocm.token', STRING,
        'The token used to authenticate with OCM.',
        required=True,
    ),
    _field(
        'ocm', 'env', 'OSD_ENV', 'ocm.env', STRING,
        'The environment used to provision clusters.',
        default='prod',
    ),
    _field(
        'ocm', 'debug', 'DEBUG_OSD', 'ocm.debug', BOOLEAN,
        'Show debug level messages of the OCM client.',
        default=False,
    ),
    _field(
        'ocm', 'num_retries', 'NUM_RETRIES', 'ocm.numRetries', INTEGER,
        'How many times each OCM call is retried.',
        default=3,
    ),
    _field(
        'addons', 'ids', 'ADDON_IDS', 'addons.ids', LIST,
        'The IDs of the addons to install.',
    ),
    _field(
        'addons', 'test_harnesses', 'ADDON_TEST_HARNESSES',
        'addons.testHarnesses', LIST,
        'The container images that test the addons.',
    ),
    _field(
        'scale', 'workloads_repository', 'WORKLOADS_REPO',
        'scale.workloadsRepository', STRING,
        'The git repository holding scale workloads.',
        default='https://github.com/openshift-scale/workloads',
    ),
    _field(
        'scale', 'workloads_repository_branch', 'WORKLOADS_REPO_BRANCH',
        'scale.workloadsRepositoryBranch', STRING,
        'The branch of the workloads repository.',
        default='master',
    ),
    _field(
        'scale', 'pbench_server', 'PBENCH_SERVER', 'scale.pbenchServer',
        STRING,
        'The pbench server results are sent to.',
        default='pbench.dev.openshift.com',
    ),
    _field(
        'scale', 'pbench_ssh_private_key', 'PBENCH_SSH_PRIVATE_KEY',
        'scale.pbenchSSHPrivateKey', STRING,
        'The private SSH key used to reach the pbench server.',
    ),
    _field(
        'scale', 'pbench_ssh_public_key', 'PBENCH_SSH_PUBLIC_KEY',
        'scale.pbenchSSHPublicKey', STRING,
        'The public SSH key used to reach the pbench server.',
    ),
    _field(
        'weather', 'prometheus_address', 'PROMETHEUS_ADDRESS',
        'weather.address', STRING,
        'The address of the Prometheus instance to connect to.',
    ),
    _field(
        'weather', 'prometheus_bearer_token', 'PROMETHEUS_BEARER_TOKEN',
        'weather.bearerToken', STRING,
        'The token needed for communicating with Prometheus.',
    ),
    _field(
        'weather', 'start_of_time_window', 'START_OF_TIME_WINDOW_IN_HOURS',
        'weather.startOfTimeWindowInHours', duration('hours'),
        'How far to look back through results.',
        default=timedelta(hours=24),
    ),
    _field(
        'weather', 'number_of_samples_necessary',
        'NUMBER_OF_SAMPLES_NECESSARY', 'weather.numberOfSamplesNecessary',
        INTEGER,
        'How many samples are necessary for generating a report.',
        default=3,
    ),
    _field(
        'weather', 'slack_webhook', 'SLACK_WEBHOOK', 'weather.slackWebhook',
        STRING,
        'The webhook used to post the weather report to Slack.',
    ),
    _field(
        'weather', 'job_whitelist', 'JOB_WHITELIST', 'weather.jobWhitelist',
        LIST,
        'Regexes of the jobs considered in the weather report.',
        default=('osde2e-.*-aws-e2e-.*',),
    ),
)
"""Every configuration field, in the order they are resolved."""

LOG_METRICS_YAML_PATH = 'logMetrics'

SECTIONS = (
    'upgrade',
    'kubeconfig',
    'tests',
    'cluster',
    'ocm',
    'addons',
    'scale',
    'weather',
)
"""The names of the configuration sections, in documentation order."""

SECTION_TYPES = collections.OrderedDict(
    (
        section,
        collections.namedtuple(
            section.capitalize() + 'Config',
            [field.name for field in FIELDS if field.section == section],
        ),
    )
    for section in SECTIONS
)
"""An immutable type per configuration section."""

_TOP_LEVEL_NAMES = tuple(
    field.name for field in FIELDS if field.section is None
)

PLACEHOLDER_FACTORIES = {
    constants.TMP_DIR_PLACEHOLDER: lambda: tempfile.mkdtemp(prefix='osde2e-'),
    constants.RANDOM_SUFFIX_PLACEHOLDER: lambda: ''.join(
        random.choice(string.ascii_lowercase + string.digits)
        for _ in range(3)
    ),
}
"""How :func:`load` produces values for dynamic defaults."""


class Config(collections.namedtuple(
        'Config', _TOP_LEVEL_NAMES + SECTIONS + ('log_metrics',))):
    """A fully resolved, read-only configuration snapshot.

    Top-level fields are attributes of this object. Sectioned fields are
    attributes of a per-section named tuple:

    >>> cfg = resolve({'OCM_TOKEN': 'hackme', 'POLLING_TIMEOUT': '45'})
    >>> cfg.provider
    'ocm'
    >>> cfg.tests.polling_timeout
    datetime.timedelta(seconds=2700)

    Create instances with :func:`resolve` or :func:`load`, once per process,
    and hand the same instance to every consumer.
    """

    __slots__ = ()

    def get_field(self, qualified_name):
        """Return the value of a field given its dotted name."""
        obj = self
        for part in qualified_name.split('.'):
            obj = getattr(obj, part)
        return obj

    def to_document(self):
        """Project this configuration back into a YAML-friendly document.

        Resolving the returned document, with no environment variables set,
        yields a configuration equal to this one.
        """
        document = {}
        for field in FIELDS:
            value = field.type.dump(self.get_field(field.qualified_name))
            _set_path(document, field.yaml_path, value)
        document[LOG_METRICS_YAML_PATH] = self.log_metrics.to_document()
        return document


def _get_path(document, path):
    """Return the value at dotted ``path`` in ``document``, or ``_SENTINEL``."""
    obj = document
    walked = []
    for part in path.split('.'):
        if not isinstance(obj, dict):
            raise exceptions.InvalidFieldTypeError(
                '.'.join(walked) or '<document>', obj, 'a mapping'
            )
        walked.append(part)
        if obj.get(part) is None:
            return _SENTINEL
        obj = obj[part]
    return obj


def _set_path(document, path, value):
    *parents, leaf = path.split('.')
    for part in parents:
        document = document.setdefault(part, {})
    document[leaf] = value


def _parse(field, raw):
    try:
        return field.type.parse(raw)
    except (OverflowError, TypeError, ValueError) as err:
        raise exceptions.InvalidFieldTypeError(
            field.qualified_name, raw, field.type.name
        ) from err


def _expand_placeholder(value, placeholders):
    if isinstance(value, str) and value in placeholders:
        value = placeholders[value]
        if callable(value):
            value = value()
    return value


def _resolve_field(field, environ, document, placeholders):
    """Return a ``(value, source)`` tuple for ``field``."""
    raw = _get_path(document, field.yaml_path)
    if raw is not _SENTINEL:
        return _parse(field, raw), 'yaml'
    raw = environ.get(field.env, '')
    if raw != '':
        return _parse(field, raw), 'env'
    if field.default is not None:
        return _expand_placeholder(field.default, placeholders), 'default'
    return field.type.zero, 'zero'


def resolve(environ=None, document=None, placeholders=None):
    """Merge a YAML document, environment variables and defaults.

    This function has no side effects. Given identical arguments, it returns
    identical configurations.

    :param environ: A mapping of environment variables. Defaults to
        ``os.environ``.
    :param document: An optional dict, as returned by ``yaml.safe_load``.
    :param placeholders: An optional mapping from placeholder defaults, such
        as :data:`osde2e.constants.TMP_DIR_PLACEHOLDER`, to the values that
        replace them. A value may be a callable, which is called only if the
        placeholder default is used. Placeholders without a replacement are
        left as-is.
    :returns: A new :class:`Config`.
    :raises osde2e.exceptions.InvalidFieldTypeError: If a value cannot be
        parsed as its field's type.
    :raises osde2e.exceptions.MissingRequiredFieldError: If any required
        field has no value. All such fields are named.
    """
    if environ is None:
        environ = os.environ
    if document is None:
        document = {}
    if placeholders is None:
        placeholders = {}

    values = collections.defaultdict(dict)
    missing = []
    for field in FIELDS:
        value, source = _resolve_field(field, environ, document, placeholders)
        logger.debug('Resolved %s from %s.', field.qualified_name, source)
        if field.required and value == field.type.zero:
            missing.append(field.qualified_name)
        values[field.section][field.name] = value
    if missing:
        raise exceptions.MissingRequiredFieldError(missing)

    raw_metrics = _get_path(document, LOG_METRICS_YAML_PATH)
    if raw_metrics is _SENTINEL:
        log_metrics = LogMetrics()
    else:
        log_metrics = LogMetrics.from_document(raw_metrics)

    sections = {
        section: section_type(**values[section])
        for section, section_type in SECTION_TYPES.items()
    }
    return Config(log_metrics=log_metrics, **values[None], **sections)


def _build_json_schema():
    """Build a JSON schema for YAML documents from :data:`FIELDS`."""
    schema = {
        'additionalProperties': False,
        'type': 'object',
        'properties': {
            LOG_METRICS_YAML_PATH: {
                'type': ['array', 'null'],
                'items': {'$ref': '#/definitions/logMetric'},
            },
        },
        'definitions': {
            'logMetric': {
                'additionalProperties': False,
                'required': ['name', 'regex'],
                'type': 'object',
                'properties': {
                    'name': {'type': 'string'},
                    'regex': {'type': 'string'},
                    'highThreshold': {'type': 'integer'},
                    'lowThreshold': {'type': 'integer'},
                },
            },
        },
    }
    for field in FIELDS:
        properties = schema['properties']
        *parents, leaf = field.yaml_path.split('.')
        for part in parents:
            section = properties.setdefault(part, {
                'additionalProperties': False,
                'type': ['object', 'null'],
                'properties': {},
            })
            properties = section['properties']
        leaf_schema = {'type': field.type.json_type + ['null']}
        if field.type is LIST:
            leaf_schema['items'] = {'type': 'string'}
        properties[leaf] = leaf_schema
    return schema


CONFIG_JSON_SCHEMA = _build_json_schema()
"""The schema for osde2e's YAML configuration documents."""


def validate_document(document):
    """Validate an in-memory YAML configuration document.

    :param document: A dict returned by ``yaml.safe_load``, or ``None``.
    :raises osde2e.exceptions.ConfigValidationError: If any validation error
        is found. Every error is listed, not just the first one.
    """
    if document is None:
        return
    validator_cls = jsonschema.validators.validator_for(CONFIG_JSON_SCHEMA)
    validator = validator_cls(schema=CONFIG_JSON_SCHEMA)
    validator.check_schema(CONFIG_JSON_SCHEMA)
    messages = []
    for error in validator.iter_errors(document):
        # jsonschema returns messages where the first letter is uppercase,
        # make sure to lower the first letter case to fit better on our
        # message.
        error_message = error.message[:1].lower() + error.message[1:]
        if error.relative_path:
            config_path = '[{}]'.format(
                ']['.join([repr(i) for i in error.relative_path])
            )
        else:
            config_path = ''
        messages.append(
            'Failed to validate config{} because {}.'.format(
                config_path,
                error_message,
            )
        )
    if messages:
        raise exceptions.ConfigValidationError(messages)


def read_document(path):
    """Read a YAML configuration document from ``path``.

    :returns: A dict. An empty file yields an empty dict.
    :raises osde2e.exceptions.ConfigValidationError: If the file is not valid
        YAML.
    """
    with open(path) as handle:
        try:
            document = yaml.safe_load(handle)
        except yaml.YAMLError as err:
            raise exceptions.ConfigValidationError(
                ['Failed to parse {} because {}'.format(path, err)]
            ) from err
    return document or {}


def load(path=None, environ=None):
    """Locate, read, validate and resolve the configuration.

    Collaborators such as the command line interface call this once, at
    process start.

    :param path: A path to a YAML document. If ``None``, the XDG config paths
        are searched with :func:`get_load_path`. If no document is found there,
        only environment variables and defaults are used.
    :param environ: Passed to :func:`resolve`.
    :returns: A new :class:`Config`.
    :raises osde2e.exceptions.ConfigFileNotFoundError: If ``path`` is given
        but does not exist.
    """
    if environ is None:
        environ = os.environ
    if path is None:
        try:
            path = get_load_path(environ)
        except exceptions.ConfigFileNotFoundError:
            logger.debug('No configuration file found, using only env vars.')
    elif not os.path.isfile(path):
        raise exceptions.ConfigFileNotFoundError(
            'The configuration file {} does not exist.'.format(path)
        )
    document = None
    if path is not None:
        logger.debug('Loading configuration from %s.', path)
        document = read_document(path)
        validate_document(document)
    return resolve(environ, document, PLACEHOLDER_FACTORIES)


def _get_config_file(environ=None):
    """Return the name (not path!) of the osde2e configuration file.

    Defaults to ``config.yaml``, but may be overridden by an environment
    variable named ``OSDE2E_CONFIG_FILE``.
    """
    if environ is None:
        environ = os.environ
    return environ.get('OSDE2E_CONFIG_FILE', constants.CONFIG_FILE_DEFAULT)


def get_load_path(environ=None):
    """Return the path to where a configuration file may be loaded from.

    Search each of the ``$XDG_CONFIG_DIRS`` for a file named
    ``osde2e/$OSDE2E_CONFIG_FILE``.

    :returns: A string. The path to a configuration file, if one is found.
    :raises osde2e.exceptions.ConfigFileNotFoundError: If no configuration
        file is found.
    """
    config_file = _get_config_file(environ)
    for dir_ in BaseDirectory.load_config_paths(constants.XDG_SUBDIR):
        path = os.path.join(dir_, config_file)
        if os.path.exists(path):
            return path

    raise exceptions.ConfigFileNotFoundError(
        'osde2e is unable to find a configuration file. The following (XDG '
        'compliant) paths have been searched: ' + ', '.join(
            os.path.join(xdg_config_dir, constants.XDG_SUBDIR, config_file)
            for xdg_config_dir in BaseDirectory.xdg_config_dirs
        )
    )


def get_save_path(environ=None):
    """Return a path to where a configuration file may be saved.

    Create parent directories if they don't exist.
    """
    return os.path.join(
        BaseDirectory.save_config_path(constants.XDG_SUBDIR),
        _get_config_file(environ),
    )
