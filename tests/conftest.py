"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest


@pytest.fixture()
def blum_env(monkeypatch, tmp_path):
    """Isolated environment with credentials set and no stray .env file."""
    for name in list(os.environ):
        if name.startswith("BLUM_"):
            monkeypatch.delenv(name)
    monkeypatch.delenv("QUERY_ID", raising=False)
    monkeypatch.setenv("BLUM_QUERY_ID", "query_id=test-user")
    monkeypatch.setenv("BLUM_GAME_DURATION_SECONDS", "0")
    monkeypatch.chdir(tmp_path)
