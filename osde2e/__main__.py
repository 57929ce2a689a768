# coding=utf-8
"""The entry point for ``python -m osde2e``."""
from osde2e.osde2e_cli import osde2e


if __name__ == '__main__':
    osde2e(prog_name='osde2e')  # pragma: no cover
