import app as service
from dictionary import Dictionary

import pytest


@pytest.fixture()
def client(monkeypatch):
    fresh = Dictionary()
    fresh.add("cat", "feline")
    fresh.add("car", "vehicle")
    fresh.add("care", "attention")
    monkeypatch.setattr(service, "dictionary", fresh)
    return service.app.test_client()


def test_seeded_dictionary():
    assert len(service.dictionary) == len(service._SEED_ENTRIES)
    for word, definition in service._SEED_ENTRIES.items():
        assert service.dictionary.lookup(word) == definition


def test_index(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "POST /compress" in resp.get_json()["endpoints"]


def test_health(client):
    resp = client.get("/health")
    body = resp.get_json()
    assert body["status"] == "healthy"
    assert body["words"] == 3


def test_lookup(client):
    body = client.get("/lookup?q=car").get_json()
    assert body == {"word": "car", "found": True, "definition": "vehicle"}
    body = client.get("/lookup?q=ca").get_json()
    assert body["found"] is False
    assert body["definition"] is None


def test_lookup_missing_query(client):
    resp = client.get("/lookup")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_add(client):
    resp = client.post("/add", json={"word": "dog", "definition": "canine"})
    assert resp.status_code == 201
    assert resp.get_json()["words"] == 4
    assert client.get("/lookup?q=dog").get_json()["definition"] == "canine"


def test_add_overwrites(client):
    client.post("/add", json={"word": "car", "definition": "automobile"})
    assert client.get("/lookup?q=car").get_json()["definition"] == "automobile"
    assert client.get("/lookup?q=care").get_json()["definition"] == "attention"


@pytest.mark.parametrize("body", [
    {},
    {"definition": "no word"},
    {"word": "   "},
    {"word": 12, "definition": "number"},
    {"word": "x" * 257, "definition": "too long"},
    {"word": "dog", "definition": ["not", "a", "string"]},
])
def test_add_invalid(client, body):
    resp = client.post("/add", json=body)
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_add_non_object_body(client):
    resp = client.post("/add", json=["dog", "canine"])
    assert resp.status_code == 400


def test_remove(client):
    resp = client.delete("/remove?q=car")
    assert resp.status_code == 200
    assert resp.get_json() == {"word": "car", "removed": True, "words": 2}
    assert client.get("/lookup?q=care").get_json()["found"] is True


def test_remove_absent(client):
    resp = client.delete("/remove?q=dog")
    assert resp.status_code == 404
    assert resp.get_json()["removed"] is False


def test_count(client):
    assert client.get("/count?q=car").get_json() == {"prefix": "car", "count": 2}
    assert client.get("/count?q=x").get_json()["count"] == 0
    assert client.get("/count").get_json()["count"] == 3


def test_sequence_before_compress(client):
    resp = client.get("/sequence?q=cat")
    assert resp.status_code == 409


def test_compress(client):
    client.delete("/remove?q=car")
    resp = client.post("/compress")
    assert resp.status_code == 200
    assert resp.get_json() == {"compressed": True, "nodes_before": 4, "nodes_after": 3}
    body = client.get("/sequence?q=care").get_json()
    assert body == {"word": "care", "found": True, "sequence": "ca-re"}
    assert client.get("/sequence?q=car").get_json()["found"] is False
    assert client.get("/count?q=ca").get_json()["count"] == 2
    stats = client.get("/stats").get_json()
    assert stats["compressed"] is True
    assert stats["nodes"] == 3


def test_compress_twice(client):
    client.post("/compress")
    body = client.post("/compress").get_json()
    assert body["nodes_before"] == body["nodes_after"]


def test_mutation_after_compress(client):
    client.post("/compress")
    resp = client.post("/add", json={"word": "dog", "definition": "canine"})
    assert resp.status_code == 409
    resp = client.delete("/remove?q=cat")
    assert resp.status_code == 409
    assert client.get("/lookup?q=cat").get_json()["definition"] == "feline"
