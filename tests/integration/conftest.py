from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from dgo.infrastructure.db import session as db_session
from dgo.infrastructure.db.models import group_order  # noqa: F401
from dgo.infrastructure.db.models.catalog import Base


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Point the app's own engine factory at a fresh SQLite file."""
    url = f"sqlite:///{tmp_path / 'dgo.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.delenv("REDIS_URL", raising=False)
    db_session._build_engine.cache_clear()

    Base.metadata.create_all(db_session.get_engine())
    yield url

    db_session.get_engine().dispose()
    db_session._build_engine.cache_clear()
