# coding=utf-8
"""End to end testing of managed Kubernetes clusters.

The reusable core of osde2e is small:

* :mod:`osde2e.config` resolves the configuration of a test run.
* :mod:`osde2e.metrics` analyzes build logs with regular expressions.
* :mod:`osde2e.wait` polls asynchronous cluster state until it settles.
"""
