"""Shared fixtures for argtype tests."""

from __future__ import annotations

import pytest

from argtype import CONFIG_ENV_VAR, configure


@pytest.fixture(autouse=True)
def _default_config(monkeypatch: pytest.MonkeyPatch):  # noqa: ANN202
    """Every test starts from the default process-wide config."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    configure(None)
    yield
    configure(None)
