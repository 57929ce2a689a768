# coding=utf-8
"""Render the configuration schema as human readable documentation.

This is a read-only projection of :data:`osde2e.config.FIELDS`. The output is
reStructuredText, suitable for inclusion in the Sphinx documentation or for
reading in a terminal.
"""
from osde2e import config

PREAMBLE = """\
Configuration
=============

Every field may be set in the YAML configuration file or through its
environment variable. A value in the YAML file wins over the environment
variable, which wins over the default. The YAML file is searched for in the
XDG config directories as ``osde2e/$OSDE2E_CONFIG_FILE`` (default
``config.yaml``).
"""

SECTION_TEMPLATE = """\
{title}
{underline}

.. list-table::
   :header-rows: 1

   * - Field
     - Type
     - Environment variable
     - YAML path
     - Default
     - Description
{rows}
"""

ROW_TEMPLATE = """\
   * - ``{name}``
     - {type}
     - ``{env}``
     - ``{yaml_path}``
     - {default}
     - {description}"""

LOG_METRICS_SECTION = """\
Log metrics
-----------

The ``logMetrics`` list holds one mapping per metric, with the keys ``name``,
``regex``, ``highThreshold`` (default 9999) and ``lowThreshold`` (default -1).
A run passes a metric only if the number of matches in the build log lies
strictly between the thresholds. Log metrics have no environment variable.
"""


def _format_default(field):
    if field.required:
        return '**required**'
    if field.default is None:
        return ''
    value = field.type.dump(field.default)
    if isinstance(value, bool):
        value = str(value).lower()
    elif isinstance(value, list):
        value = ','.join(value)
    return '``{}``'.format(value)


def render_section(title, fields):
    """Render one table of fields under a section title."""
    rows = '\n'.join(
        ROW_TEMPLATE.format(
            name=field.qualified_name,
            type=field.type.name,
            env=field.env,
            yaml_path=field.yaml_path,
            default=_format_default(field),
            description=field.description,
        )
        for field in fields
    )
    return SECTION_TEMPLATE.format(
        title=title, underline='-' * len(title), rows=rows
    )


def render_config_docs(fields=config.FIELDS):
    """Return reStructuredText documenting every field in ``fields``."""
    sections = [None] + [
        section for section in config.SECTIONS
        if any(field.section == section for field in fields)
    ]
    parts = [PREAMBLE]
    for section in sections:
        section_fields = [field for field in fields if field.section == section]
        if section_fields:
            parts.append(render_section(section or 'general', section_fields))
    parts.append(LOG_METRICS_SECTION)
    return '\n'.join(parts)
