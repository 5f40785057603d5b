# tests/conftest.py
"""Shared fixtures."""

import pytest

from tests.fakes import FakeFiles, FakeHtml


@pytest.fixture
def html():
    return FakeHtml()


@pytest.fixture
def files():
    return FakeFiles()
