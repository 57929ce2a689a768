# coding=utf-8
"""Sphinx documentation generator configuration file.

The full set of configuration options is listed on the Sphinx website:
http://sphinx-doc.org/config.html
"""
import os
import sys


# Add the osde2e root directory to the system path. This allows references
# such as :mod:`osde2e.whatever` to be processed correctly.
ROOT_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), os.path.pardir)
)
sys.path.insert(0, ROOT_DIR)

from osde2e import docs  # noqa:E402 pylint:disable=wrong-import-position

with open(os.path.join(ROOT_DIR, "VERSION")) as handle:
    VERSION = handle.read().strip()

# The configuration reference is generated from the field table, so that it
# cannot drift from the code.
with open(os.path.join(ROOT_DIR, "docs", "configuration.rst"), "w") as handle:
    handle.write(docs.render_config_docs())


# Project Information ---------------------------------------------------------
# pylint:disable=invalid-name
author = "osde2e developers"
copyright = "2019, osde2e developers"  # pylint:disable=redefined-builtin
project = "osde2e"
version = release = VERSION


# General Configuration -------------------------------------------------------
extensions = ["sphinx.ext.autodoc"]
source_suffix = ".rst"
master_doc = "index"
exclude_patterns = ["_build"]
nitpicky = True
nitpick_ignore = [("py:class", "type")]
autodoc_default_flags = ["members", "show-inheritance", "undoc-members"]
# Format-Specific Options -----------------------------------------------------
htmlhelp_basename = "osde2edoc"
man_pages = [
    (
        master_doc,
        "osde2e",
        project + " Documentation",
        [author],
        1,  # man pages section
    )
]
