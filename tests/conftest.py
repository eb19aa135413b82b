"""Pytest configuration.

Each test gets its own app over a private in-memory SQLite database, so no
state leaks between tests and nothing touches the working directory.
"""

from datetime import datetime, timedelta, timezone

import httpx
import pytest
from sqlalchemy import update
from fastapi.testclient import TestClient

from topicmarks.config import Settings
from topicmarks.link_check import LinkChecker
from topicmarks.main import create_app
from topicmarks.models import Topic, Bookmark


def _link_handler(request: httpx.Request) -> httpx.Response:
    host = request.url.host
    if host == "down.example":
        raise httpx.ConnectError("connection refused", request=request)
    if host == "nohead.example" and request.method == "HEAD":
        return httpx.Response(405)
    if host == "missing.example":
        return httpx.Response(404)
    return httpx.Response(200)


@pytest.fixture
def app():
    checker = LinkChecker(timeout=1.0, transport=httpx.MockTransport(_link_handler))
    return create_app(Settings(database_url="sqlite://"), link_checker=checker)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_topic(client):
    def _make(title="Reading list", **extra):
        r = client.post("/api/topics", json={"title": title, **extra})
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_bookmark(client):
    def _make(topic_id, url="https://example.com", **extra):
        r = client.post("/api/bookmarks", json={"url": url, "topicId": topic_id, **extra})
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def backdate(app):
    """Move a row's updated_at an hour into the past so a later write is always newer."""
    def _backdate(model, row_id):
        stamp = datetime.now(timezone.utc) - timedelta(hours=1)
        with app.state.database.SessionLocal() as session:
            session.execute(update(model).where(model.id == row_id).values(updated_at=stamp))
            session.commit()
        return stamp
    return _backdate

