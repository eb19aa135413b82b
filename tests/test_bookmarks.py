"""Bookmark API tests"""
from datetime import datetime

import pytest
from pydantic import TypeAdapter

from topicmarks.models import Bookmark


def test_create_bookmark(client, make_topic):
    topic = make_topic()
    r = client.post(
        "/api/bookmarks",
        json={"url": "https://docs.python.org/3/", "description": "Docs", "topicId": topic["id"]},
    )
    assert r.status_code == 201
    data = r.json()
    assert data["url"] == "https://docs.python.org/3/"
    assert data["description"] == "Docs"
    assert data["topicId"] == topic["id"]
    assert data["id"] and data["createdAt"] and data["updatedAt"]


def test_create_bookmark_stores_url_as_given(make_topic, make_bookmark):
    topic = make_topic()
    bookmark = make_bookmark(topic["id"], "HTTPS://Example.COM")
    assert bookmark["url"] == "HTTPS://Example.COM"


def test_create_bookmark_empty_description_is_null(make_topic, make_bookmark):
    topic = make_topic()
    assert make_bookmark(topic["id"], description="")["description"] is None


@pytest.mark.parametrize("body", [
    {},
    {"url": "https://example.com"},
    {"topicId": "x"},
    {"url": "", "topicId": "x"},
])
def test_create_bookmark_requires_fields(client, body):
    r = client.post("/api/bookmarks", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "URL and topicId are required"}


@pytest.mark.parametrize("url", [
    "ftp://x",
    "mailto:someone@example.com",
    "http://localhost:8080/a?b=c#d",
    "https://www.google.com/search?q=hello world",
    "https://example.com/a b",
    "http:example.com",
])
def test_create_bookmark_accepts_any_absolute_url(client, make_topic, url):
    topic = make_topic()
    r = client.post("/api/bookmarks", json={"url": url, "topicId": topic["id"]})
    assert r.status_code == 201
    assert r.json()["url"] == url


@pytest.mark.parametrize("url", ["abc", "example.com", "not a url", "http://"])
def test_create_bookmark_rejects_malformed_url(client, make_topic, url):
    topic = make_topic()
    r = client.post("/api/bookmarks", json={"url": url, "topicId": topic["id"]})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid URL format"}
    assert client.get("/api/bookmarks", params={"topicId": topic["id"]}).json() == []


def test_create_bookmark_unknown_topic_is_a_store_error(client):
    r = client.post("/api/bookmarks", json={"url": "https://example.com", "topicId": "missing"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create bookmark"}


def test_list_bookmarks_requires_topic_id(client):
    for params in ({}, {"topicId": ""}):
        r = client.get("/api/bookmarks", params=params)
        assert r.status_code == 400
        assert r.json() == {"error": "topicId is required"}


def test_list_bookmarks_unknown_topic_is_empty(client):
    r = client.get("/api/bookmarks", params={"topicId": "nobody"})
    assert r.status_code == 200
    assert r.json() == []


def test_list_bookmarks_newest_first_and_scoped(client, make_topic, make_bookmark):
    topic = make_topic()
    other = make_topic("Other")
    first = make_bookmark(topic["id"], "https://one.example")
    second = make_bookmark(topic["id"], "https://two.example")
    make_bookmark(other["id"], "https://elsewhere.example")

    r = client.get("/api/bookmarks", params={"topicId": topic["id"]})
    assert r.status_code == 200
    assert [b["id"] for b in r.json()] == [second["id"], first["id"]]


def test_get_bookmark(client, make_topic, make_bookmark):
    topic = make_topic()
    bookmark = make_bookmark(topic["id"])
    r = client.get(f"/api/bookmarks/{bookmark['id']}")
    assert r.status_code == 200
    assert r.json() == bookmark


def test_get_bookmark_not_found(client):
    r = client.get("/api/bookmarks/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Bookmark not found"}


def test_update_bookmark_full_replace_and_move(client, make_topic, make_bookmark, backdate):
    topic = make_topic("From")
    target = make_topic("To")
    bookmark = make_bookmark(topic["id"], description="old")
    before = backdate(Bookmark, bookmark["id"])

    r = client.put(
        f"/api/bookmarks/{bookmark['id']}",
        json={"url": "https://new.example", "topicId": target["id"]},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["url"] == "https://new.example"
    assert data["description"] is None
    assert data["topicId"] == target["id"]
    assert data["createdAt"] == bookmark["createdAt"]
    assert TypeAdapter(datetime).validate_python(data["updatedAt"]) > before

    assert client.get(f"/api/topics/{topic['id']}").json()["bookmarkCount"] == 0
    assert client.get(f"/api/topics/{target['id']}").json()["bookmarkCount"] == 1


def test_update_bookmark_validation(client, make_topic, make_bookmark):
    topic = make_topic()
    bookmark = make_bookmark(topic["id"])
    path = f"/api/bookmarks/{bookmark['id']}"

    r = client.put(path, json={"url": "https://x.example"})
    assert r.status_code == 400
    assert r.json() == {"error": "URL and topicId are required"}

    r = client.put(path, json={"url": "abc", "topicId": topic["id"]})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid URL format"}

    assert client.get(path).json() == bookmark


def test_update_missing_bookmark_leaves_store_unchanged(client, make_topic, make_bookmark):
    topic = make_topic()
    bookmark = make_bookmark(topic["id"])

    r = client.put("/api/bookmarks/nope", json={"url": "https://x.example", "topicId": topic["id"]})
    assert r.status_code == 404
    assert r.json() == {"error": "Bookmark not found"}
    assert client.get("/api/bookmarks", params={"topicId": topic["id"]}).json() == [bookmark]


def test_delete_bookmark(client, make_topic, make_bookmark):
    topic = make_topic()
    bookmark = make_bookmark(topic["id"])

    r = client.delete(f"/api/bookmarks/{bookmark['id']}")
    assert r.status_code == 200
    assert r.json() == {"message": "Bookmark deleted successfully"}
    assert client.get(f"/api/bookmarks/{bookmark['id']}").status_code == 404

    r = client.delete(f"/api/bookmarks/{bookmark['id']}")
    assert r.status_code == 404
    assert r.json() == {"error": "Bookmark not found"}


def test_bookmark_count_tracks_creates_and_deletes(client, make_topic, make_bookmark):
    topic = make_topic()
    created = [make_bookmark(topic["id"], f"https://example.com/{i}") for i in range(5)]
    for b in created[:2]:
        client.delete(f"/api/bookmarks/{b['id']}")
    make_bookmark(topic["id"], "https://example.com/late")

    listed = client.get("/api/bookmarks", params={"topicId": topic["id"]}).json()
    assert client.get(f"/api/topics/{topic['id']}").json()["bookmarkCount"] == len(listed) == 4


@pytest.mark.parametrize("url,ok,status", [
    ("https://up.example/page", True, 200),
    ("https://nohead.example/", True, 200),
    ("https://missing.example/", False, 404),
    ("https://down.example/", False, None),
])
def test_check_bookmark(client, make_topic, make_bookmark, url, ok, status):
    topic = make_topic()
    bookmark = make_bookmark(topic["id"], url)
    r = client.get(f"/api/bookmarks/{bookmark['id']}/check")
    assert r.status_code == 200
    assert r.json() == {"ok": ok, "status": status}


def test_check_missing_bookmark(client):
    r = client.get("/api/bookmarks/nope/check")
    assert r.status_code == 404
