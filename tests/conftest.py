from __future__ import annotations

import os
from datetime import datetime

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskapi.infra import models  # noqa: F401
from taskapi.infra.db import Base
from taskapi.infra.repository import TaskRepository

NOW = datetime(2024, 3, 20, 15, 30, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def repo(session_factory) -> TaskRepository:
    return TaskRepository(session_factory=session_factory)
