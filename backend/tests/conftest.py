import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Honour any externally provided DATABASE_URL but fall back to an in-memory
# SQLite database so local runs remain isolated.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture(autouse=True)
def no_sentry(monkeypatch):
    """Keep tests from reporting to a real Sentry project."""
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    yield
