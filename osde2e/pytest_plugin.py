"""A pytest plugin exposing the osde2e configuration to functional tests.

The configuration is loaded once per session and shared, read-only, by every
test that asks for the ``osde2e_config`` fixture.
"""
import pytest

from osde2e.config import load


def pytest_addoption(parser):
    parser.addoption(
        "--osde2e-config",
        action="store",
        default=None,
        help="Path to a YAML osde2e configuration file.",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "operators: marks tests that check the health of cluster operators",
    )
    config.addinivalue_line(
        "markers",
        "addons: marks tests that check installed addons",
    )


@pytest.fixture(scope="session")
def osde2e_config(request):
    """Return the resolved configuration of this run."""
    return load(request.config.getoption("--osde2e-config"))
