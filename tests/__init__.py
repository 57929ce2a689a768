# coding=utf-8
"""Unit tests for osde2e.

This package contains tests for osde2e's reusable core. These tests verify
that osde2e's internal functions and libraries function correctly, without
talking to any cluster.
"""
