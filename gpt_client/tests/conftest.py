"""Pytest configuration for the gpt_client test suite.

Isolates every test from the developer's real environment: endpoint and
credential variables are cleared and no ``.env`` file is read.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from gpt_client import config as client_config
from gpt_client.config.env import ENV_ALIASES, GENERATION_ENV_MAP


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    for names in ENV_ALIASES.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    for name in GENERATION_ENV_MAP.values():
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("GPT_CLIENT_USE_MOCKS", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    client_config._reset_dotenv_state()
    yield
    client_config._reset_dotenv_state()
