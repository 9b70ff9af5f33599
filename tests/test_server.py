"""
Tests for the Flask service wrapper.
"""


class TestServerRoutes:
    """Test JSON endpoints."""

    def test_ping(self, client):
        assert client.post("/ping").get_json() == {"ok": True}

    def test_add_and_snapshot(self, client):
        r = client.post("/add_node", json={"id": 1})
        assert r.status_code == 200
        assert r.get_json()["id"] == 1
        client.post("/add_node", json={"id": 4})

        snap = client.get("/snapshot").get_json()
        assert snap["members"] == [1, 4]
        assert snap["key_sets"]["4"] == [2, 3, 4]
        assert snap["finger_tables"]["1"][2] == {"start": 5, "successor": 1}

    def test_add_random(self, client):
        r = client.post("/add_node", json={})
        node_id = r.get_json()["id"]
        assert 0 <= node_id < 8
        assert r.get_json()["snapshot"]["members"] == [node_id]

    def test_remove(self, client):
        client.post("/add_node", json={"id": 1})
        client.post("/add_node", json={"id": 4})
        r = client.post("/remove_node", json={"id": 4})
        assert r.get_json()["snapshot"]["key_sets"]["1"] == list(range(8))

    def test_remove_random(self, client):
        client.post("/add_node", json={"id": 1})
        r = client.post("/remove_node", json={})
        assert r.get_json()["id"] == 1
        assert r.get_json()["snapshot"]["members"] == []

    def test_lookup(self, client):
        client.post("/add_node", json={"id": 0})
        client.post("/add_node", json={"id": 4})
        r = client.post("/lookup", json={"target": 3, "start": 0})
        assert r.get_json()["hops"] == [0, 4]
        assert client.get("/snapshot").get_json()["last_route"]["target"] == 3

    def test_lookup_by_key(self, client):
        client.post("/add_node", json={"id": 5})
        r = client.post("/lookup", json={"key": "notes.txt", "start": 5})
        assert r.get_json()["hops"] == [5]
        assert r.get_json()["resolved"]

    def test_set_bits(self, client):
        client.post("/add_node", json={"id": 1})
        snap = client.post("/set_bits", json={"bits": 4}).get_json()
        assert snap["size"] == 16
        assert snap["members"] == []

    def test_metrics(self, client):
        client.post("/add_node", json={"id": 1})
        client.post("/lookup", json={"target": 3, "start": 1})
        m = client.get("/metrics").get_json()
        assert m["lookup"]["total_lookups"] == 1
        assert m["ring"]["total_adds"] == 1


class TestServerErrors:
    """Chord errors map to JSON error bodies."""

    def test_duplicate(self, client):
        client.post("/add_node", json={"id": 1})
        r = client.post("/add_node", json={"id": 1})
        assert r.status_code == 409
        assert r.get_json()["error"] == "DuplicateId"

    def test_ring_full(self, client):
        client.post("/set_bits", json={"bits": 2})
        for i in range(4):
            client.post("/add_node", json={"id": i})
        r = client.post("/add_node", json={})
        assert r.status_code == 409
        assert r.get_json()["error"] == "RingFull"

    def test_not_found(self, client):
        client.post("/add_node", json={"id": 1})
        r = client.post("/remove_node", json={"id": 2})
        assert r.status_code == 404
        assert r.get_json()["error"] == "NotFound"

    def test_empty_ring(self, client):
        r = client.post("/lookup", json={"target": 3, "start": 0})
        assert r.status_code == 400
        assert r.get_json()["error"] == "EmptyRing"

    def test_invalid_fields(self, client):
        assert client.post("/set_bits", json={}).status_code == 400
        assert client.post("/set_bits", json={"bits": "four"}).status_code == 400
        assert client.post("/set_bits", json={"bits": 20}).status_code == 400
        r = client.post("/add_node", json={"id": 99})
        assert r.get_json()["error"] == "InvalidParameter"

    def test_state_survives_errors(self, client):
        client.post("/add_node", json={"id": 1})
        client.post("/add_node", json={"id": 1})
        client.post("/remove_node", json={"id": 6})
        assert client.get("/snapshot").get_json()["members"] == [1]

    def test_malformed_json_rejected(self, client):
        client.post("/add_node", json={"id": 1})
        client.post("/add_node", json={"id": 4})
        r = client.post("/remove_node", data="{id: 4", content_type="application/json")
        assert r.status_code == 400
        assert r.get_json()["error"] == "InvalidParameter"
        r = client.post("/add_node", data="{id: 4", content_type="application/json")
        assert r.status_code == 400
        assert client.get("/snapshot").get_json()["members"] == [1, 4]

    def test_empty_body_means_random(self, client):
        client.post("/add_node", json={"id": 1})
        r = client.post("/remove_node")
        assert r.status_code == 200
        assert r.get_json()["id"] == 1
