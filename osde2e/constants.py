"""Values usable by multiple osde2e modules."""
from datetime import timedelta


DEFAULT_BASE_JOB_URL = 'https://storage.googleapis.com/origin-ci-test/logs'
"""The root location for all job artifacts.

A build log such as
``https://storage.googleapis.com/origin-ci-test/logs/osde2e-prod-gcp-e2e-next/61/build-log.txt``
lives below this URL.
"""

DEFAULT_POLL_INTERVAL = timedelta(seconds=30)
"""How long checks wait between two polls of a cluster object."""

DEFAULT_POLL_TIMEOUT = timedelta(minutes=15)
"""How long checks wait for a cluster object before giving up."""

LOW_THRESHOLD_DEFAULT = -1
"""A log metric low threshold that any count passes."""

HIGH_THRESHOLD_DEFAULT = 9999
"""A log metric high threshold that any realistic count passes."""

TMP_DIR_PLACEHOLDER = '__TMP_DIR__'
"""A default that is replaced by a freshly created temporary directory."""

RANDOM_SUFFIX_PLACEHOLDER = '__RND_3__'
"""A default that is replaced by three random lowercase alphanumerics."""

XDG_SUBDIR = 'osde2e'
"""The name (not path!) of this application's XDG subdirectory."""

CONFIG_FILE_DEFAULT = 'config.yaml'
"""The name of the configuration file searched for in the XDG paths."""
