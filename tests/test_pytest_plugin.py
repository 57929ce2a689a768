# coding=utf-8
"""Tests for :mod:`osde2e.pytest_plugin`.

The plugin is found through its ``pytest11`` entry point, so these tests run
an inner pytest session and need osde2e to be installed.
"""
pytest_plugins = ["pytester"]

OSDE2E_CONFIG = """\
reportDir: /tmp/osde2e-report
suffix: abc
ocm:
  token: hackme
  env: int
"""


def test_config_fixture(pytester):
    """The file named by ``--osde2e-config`` is loaded once per session."""
    pytester.makefile(".yaml", osde2e=OSDE2E_CONFIG)
    pytester.makepyfile(
        """
        SEEN = []

        def test_first(osde2e_config):
            assert osde2e_config.ocm.token == "hackme"
            assert osde2e_config.ocm.env == "int"
            SEEN.append(osde2e_config)

        def test_second(osde2e_config):
            assert osde2e_config is SEEN[0]
        """
    )
    result = pytester.runpytest(
        "--osde2e-config", str(pytester.path / "osde2e.yaml")
    )
    result.assert_outcomes(passed=2)


def test_invalid_config(pytester):
    """A configuration error is reported by the tests using the fixture."""
    pytester.makefile(".yaml", osde2e="ocm:\n  numRetries: [1]\n")
    pytester.makepyfile(
        """
        def test_config(osde2e_config):
            pass

        def test_without_config():
            pass
        """
    )
    result = pytester.runpytest(
        "--osde2e-config", str(pytester.path / "osde2e.yaml")
    )
    result.assert_outcomes(passed=1, errors=1)
    result.stdout.fnmatch_lines(["*ConfigValidationError*"])


def test_option_and_markers(pytester):
    """The command line option and the markers are registered."""
    result = pytester.runpytest("--help")
    result.stdout.fnmatch_lines(["*--osde2e-config*"])
    result = pytester.runpytest("--markers")
    result.stdout.fnmatch_lines(
        ["@pytest.mark.operators:*", "@pytest.mark.addons:*"]
    )
