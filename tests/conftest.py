from __future__ import annotations

import os
from typing import Any

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["DB_URL"] = "sqlite:///./test_prep_cms.db"
    os.environ["ENVIRONMENT"] = "test"
    os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture()
def client() -> Any:
    from prep_cms.database import Base, engine
    from prep_cms.main import create_app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db(client) -> Any:
    from prep_cms.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def sql_log(client) -> Any:
    """Statements executed on the engine while the test runs."""
    from sqlalchemy import event

    from prep_cms.database import engine

    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany) -> None:
        statements.append(" ".join(statement.lower().split()))

    event.listen(engine, "before_cursor_execute", _record)
    try:
        yield statements
    finally:
        event.remove(engine, "before_cursor_execute", _record)


@pytest.fixture()
def make_subject(client) -> Any:
    def _make(name: str = "Data Structures", **fields) -> dict:
        r = client.post("/api/subjects", json={"name": name, **fields})
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture()
def make_topic(client) -> Any:
    def _make(subject_id: str, name: str = "Trees", **fields) -> dict:
        r = client.post("/api/topics", json={"name": name, "subject_id": subject_id, **fields})
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture()
def make_subtopic(client) -> Any:
    def _make(topic_id: str, name: str = "Traversal", **fields) -> dict:
        r = client.post("/api/subtopics", json={"name": name, "topic_id": topic_id, **fields})
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make
