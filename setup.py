#!/usr/bin/env python3
# coding=utf-8
"""A setuptools-based script for installing osde2e.

For more information, see:

* https://packaging.python.org/en/latest/index.html
* https://docs.python.org/distutils/sourcedist.html
"""
from setuptools import find_packages, setup  # prefer setuptools over distutils


with open("README.rst") as handle:
    LONG_DESCRIPTION = handle.read()


with open("VERSION") as handle:
    VERSION = handle.read().strip()


setup(
    name="osde2e",
    version=VERSION,
    description="End to end testing of managed Kubernetes clusters",
    long_description=LONG_DESCRIPTION,
    url="https://github.com/openshift/osde2e",
    author="osde2e developers",
    license="Apache-2.0",
    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Framework :: Pytest",
    ],
    packages=find_packages(include=["osde2e", "osde2e.*"]),
    install_requires=[
        "click",
        "jsonschema",
        "pytest",
        "pyxdg",
        "PyYAML",
    ],
    extras_require={"test": ["pytest>=6.2"]},
    entry_points={
        "console_scripts": ["osde2e=osde2e.osde2e_cli:osde2e"],
        "pytest11": ["osde2e = osde2e.pytest_plugin"],
    },
    test_suite="tests",
)
