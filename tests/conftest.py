"""Pytest configuration for test isolation.

The CLI and the importer read ``LEDGER_*`` settings and ``DATABASE_URL`` from
the environment, the database client caches one engine per URL, and the CLI
root callback attaches a stderr handler to the package logger. Any of these
can leak between tests, so an autouse fixture clears them around each test.
"""

from __future__ import annotations

import pytest

from chapter_ledger.logging_setup import reset_logging
from ledger_db.client import dispose_engines

_ENV_VARS = (
    "DATABASE_URL",
    "LEDGER_LOG_LEVEL",
    "LEDGER_LOG_FORMAT",
    "LEDGER_BANK_PROFILE",
    "LEDGER_USER_EMAIL",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Hermetic env, engine cache, and package logging per test.

    The working directory moves to ``tmp_path`` so the CLI never picks up a
    developer's ``.env``.
    """

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_logging()

    yield

    dispose_engines()
    reset_logging()
