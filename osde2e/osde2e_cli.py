# coding=utf-8
"""The entry point for osde2e's command line interface."""
import sys

import click
import yaml

from osde2e import config, docs, exceptions


def _raise_config_error(err):
    """Raise `click.ClickException` for a configuration error."""
    result = click.ClickException(str(err))
    result.exit_code = 2
    raise result from err


def _load_config(path):
    """Load the configuration or abort the command."""
    try:
        return config.load(path)
    except exceptions.ConfigError as err:
        _raise_config_error(err)


_config_option = click.option(
    "--config",
    "config_path",
    default=None,
    help="Optional path to a YAML configuration file",
    type=click.Path(exists=True, dir_okay=False),
)


@click.group()
def osde2e():
    """osde2e runs end to end tests against managed Kubernetes clusters."""


@osde2e.group("config")
def config_group():
    """Inspect and validate the configuration."""


@config_group.command("load-path")
def config_load_path():
    """Print the path from which the configuration file is loaded.

    Search several paths for a configuration file, in order of preference. If
    a file is found, print its path. Otherwise, return a non-zero exit code.
    """
    try:
        path = config.get_load_path()
    except exceptions.ConfigFileNotFoundError as err:
        result = click.ClickException(str(err))
        result.exit_code = -1
        raise result from err
    click.echo(path)


@config_group.command("save-path")
def config_save_path():
    """Print the path to which a configuration file should be saved.

    As a side-effect, create all directories in the path that don't yet exist.
    """
    click.echo(config.get_save_path())


@config_group.command("show")
@_config_option
def config_show(config_path):
    """Print the resolved configuration as YAML."""
    cfg = _load_config(config_path)
    click.echo(
        yaml.safe_dump(cfg.to_document(), default_flow_style=False), nl=False
    )


@config_group.command("validate")
@_config_option
def config_validate(config_path):
    """Validate the configuration file and resolve the configuration."""
    _load_config(config_path)
    click.echo("The configuration is valid.")


@config_group.command("docs")
def config_docs():
    """Print documentation of every configuration field."""
    click.echo(docs.render_config_docs())


@osde2e.group()
def metrics():
    """Analyze logs with the configured log metrics."""


@metrics.command("check")
@_config_option
@click.argument(
    "log_file", type=click.File("r", encoding="utf-8", errors="replace")
)
def metrics_check(config_path, log_file):
    """Evaluate the log metrics against LOG_FILE.

    Print one line per metric. Exit with a non-zero code if any metric fails.
    """
    cfg = _load_config(config_path)
    results = cfg.log_metrics.evaluate(log_file.read())
    for result in results:
        click.echo(
            "{}: {} ({})".format(
                result.name, result.count, "pass" if result.passing else "fail"
            )
        )
    if not all(result.passing for result in results):
        sys.exit(1)


if __name__ == "__main__":
    osde2e()  # pragma: no cover
