"""
Pytest configuration and shared fixtures.

Tests never touch the network: REST calls go through a scripted transport and
WebSocket connections read from an in-memory frame queue (see fakes.py).
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from binance_api.client import Client
from fakes import FakeRestClient


@pytest.fixture
def rest_client():
    return FakeRestClient()


@pytest.fixture
def client(rest_client):
    return Client(rest_client=rest_client)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate configuration lookups from the developer's environment."""
    for name in ("BINANCE_API_CONFIG", "BINANCE_API_KEY", "BINANCE_API_SECRET"):
        # setenv first so that teardown removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
