import pytest

from byow.routes import world_api
from byow.world import WorldConfig, encode_snapshot, find_shortest_path, generate


def _generate(client, **params):
    return client.post("/api/generate", json=params)


def test_world_before_generate_is_404(client):
    for url in ("/api/world", "/api/getWorld", "/api/rooms", "/api/corridors", "/api/map", "/api/connectivity"):
        r = client.get(url)
        assert r.status_code == 404, url
        assert r.get_json()["kind"] == "no_world"
    r = client.get("/api/path?start=0&end=0")
    assert r.status_code == 404


def test_generate_returns_snapshot(client):
    r = _generate(client, seed=42, width=40, height=30)
    assert r.status_code == 200
    assert r.mimetype == "application/json"
    data = r.get_json()
    assert data["seed"] == 42
    assert (data["width"], data["height"]) == (40, 30)
    assert data["roomCount"] == len(data["rooms"])
    assert len(data["map"]) == 30


def test_generate_deterministic_and_stored(client):
    first = _generate(client, seed=7, width=30, height=20).get_json()
    again = _generate(client, seed=7, width=30, height=20).get_json()
    assert first == again
    current = client.get("/api/world").get_json()
    assert current == first
    assert client.get("/api/getWorld").get_json() == first


def test_generate_via_query_string_alias(client):
    r = client.get("/api/generateWorld?seed=5&width=25&height=15")
    assert r.status_code == 200
    data = r.get_json()
    assert (data["seed"], data["width"], data["height"]) == (5, 25, 15)


def test_generate_defaults(client, test_app):
    data = _generate(client, seed=1).get_json()
    assert data["width"] == test_app.config["BYOW_DEFAULT_WIDTH"]
    assert data["height"] == test_app.config["BYOW_DEFAULT_HEIGHT"]


def test_string_seed_is_stable(client):
    a = _generate(client, seed="mossy caves", width=20, height=20).get_json()
    b = _generate(client, seed="mossy caves", width=20, height=20).get_json()
    assert a["seed"] == b["seed"]
    assert a["map"] == b["map"]


def test_invalid_dimension(client):
    r = _generate(client, seed=1, width=3, height=30)
    assert r.status_code == 400
    assert r.get_json()["kind"] == "invalid_dimension"


def test_non_integer_dimension(client):
    r = _generate(client, seed=1, width="wide")
    assert r.status_code == 400
    assert "width" in r.get_json()["error"]


def test_oversized_dimension_clamped(client):
    data = _generate(client, seed=1, width=400, height=400).get_json()
    assert (data["width"], data["height"]) == (100, 100)


def test_overflow_keeps_previous_world(client, test_app, monkeypatch):
    _generate(client, seed=3, width=20, height=20)
    before = client.get("/api/world").get_json()
    monkeypatch.setitem(test_app.config, "BYOW_WORLD_CONFIG", WorldConfig(snapshot_capacity=100))
    r = _generate(client, seed=4, width=20, height=20)
    assert r.status_code == 500
    assert r.get_json()["kind"] == "encoding_overflow"
    monkeypatch.undo()
    assert client.get("/api/world").get_json() == before


def test_parts_endpoints(client):
    snap = _generate(client, seed=42, width=40, height=30).get_json()
    assert client.get("/api/rooms").get_json() == snap["rooms"]
    assert client.get("/api/corridors").get_json() == snap["corridors"]
    assert client.get("/api/map").get_json() == snap["map"]


def test_connectivity_endpoint(client):
    snap = _generate(client, seed=42, width=40, height=30).get_json()
    data = client.get("/api/connectivity").get_json()
    assert data == {"connected": True, "roomCount": snap["roomCount"], "corridorCount": snap["corridorCount"]}


def test_path_same_room(client):
    _generate(client, seed=42, width=40, height=30)
    r = client.get("/api/path?start=0&end=0")
    assert r.status_code == 200
    assert r.get_json() == {"path": [0], "length": 1}


def test_path_between_rooms(client):
    snap = _generate(client, seed=42, width=40, height=30).get_json()
    last = snap["roomCount"] - 1
    data = client.get(f"/api/findPath?start=0&end={last}").get_json()
    assert data["path"][0] == 0
    assert data["path"][-1] == last
    assert data["length"] == len(data["path"])


@pytest.mark.parametrize("query", ["", "?start=0", "?start=a&end=0", "?start=0&end=999", "?start=-1&end=0"])
def test_path_bad_room_ids(client, query):
    _generate(client, seed=42, width=40, height=30)
    r = client.get("/api/path" + query)
    assert r.status_code == 400
    assert r.get_json()["kind"] == "invalid_room_id"


def test_cors_headers(client):
    r = _generate(client, seed=1, width=10, height=10)
    assert r.headers["Access-Control-Allow-Origin"] == "*"


def test_held_world_survives_regenerate(client):
    _generate(client, seed=42, width=40, height=30)
    held = world_api.get_current_world()
    before = encode_snapshot(held)
    world_api.set_current_world(generate(43, 40, 30))
    assert world_api.get_current_world() is not held
    assert held.released is False
    after = encode_snapshot(held)
    assert after == before
    assert (after["width"], after["height"]) == (40, 30)
    assert len(after["map"]) == 30
    assert find_shortest_path(held, 0, held.room_count - 1, 256)[0] == 0


def test_held_world_survives_regenerate_over_http(client):
    first = _generate(client, seed=42, width=40, height=30).get_json()
    held = world_api.get_current_world()
    _generate(client, seed=43, width=40, height=30)
    assert encode_snapshot(held) == first


@pytest.mark.parametrize(
    "raw,expected",
    [
        (42, 42),
        ("123", 123),
        ("  77 ", 77),
        (True, 1),
        (world_api.SEED_MAX + 5, 5),
        (3.9, 3),
        (-2.5, world_api.SEED_MAX - 2),
    ],
)
def test_coerce_seed(raw, expected):
    assert world_api.coerce_seed(raw) == expected


def test_coerce_seed_hashes_text():
    a = world_api.coerce_seed("dungeon")
    assert a == world_api.coerce_seed("dungeon")
    assert 0 <= a < world_api.SEED_MAX
    assert a != world_api.coerce_seed("dungeon2")


def test_coerce_seed_random_when_missing():
    for raw in (None, "", "   ", float("nan"), float("inf"), [1]):
        s = world_api.coerce_seed(raw)
        assert 1 <= s <= 1_000_000


def test_path_too_long_is_404(client, test_app, monkeypatch):
    monkeypatch.setitem(test_app.config, "BYOW_WORLD_CONFIG", WorldConfig(max_path_length=1))
    snap = _generate(client, seed=42, width=40, height=30).get_json()
    if snap["roomCount"] < 2:
        pytest.skip("need at least two rooms")
    r = client.get("/api/path?start=0&end=1")
    assert r.status_code == 404
    assert r.get_json()["kind"] == "no_path"


def test_float_seed_is_deterministic(client):
    a = _generate(client, seed=3.5, width=20, height=20).get_json()
    b = _generate(client, seed=3.5, width=20, height=20).get_json()
    assert a["seed"] == 3
    assert a == b
