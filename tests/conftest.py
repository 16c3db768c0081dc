"""Shared fixtures for the crypter test suite."""

import os

import pytest

from crypter import CrypterConfig


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate tests from CRYPTER_* variables and the cached config."""
    for name in list(os.environ):
        if name.startswith("CRYPTER_"):
            monkeypatch.delenv(name)
    CrypterConfig.reset_instance()
    yield
    CrypterConfig.reset_instance()
