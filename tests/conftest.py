"""
Pytest configuration for ringroute tests.

Async tests are marked explicitly with ``@pytest.mark.asyncio``.
"""

import pytest

from ringroute.env import Env


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep process environment variables and stray .env files out of tests."""
    for envar_name in Env.types_map():
        monkeypatch.delenv(envar_name, raising=False)

    monkeypatch.chdir(tmp_path)
