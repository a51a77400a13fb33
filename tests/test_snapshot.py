import json

import pytest

from byow.world import EncodingOverflow, create_world, dumps_snapshot, encode_snapshot, render_ascii
from byow.world.snapshot import dumps_bounded, encode_map, encode_rooms
from tests.world_test_utils import add_room

SNAPSHOT_KEYS = {"seed", "width", "height", "roomCount", "corridorCount", "rooms", "corridors", "map"}


def test_snapshot_shape(world_42):
    doc = json.loads(dumps_snapshot(world_42))
    assert set(doc) == SNAPSHOT_KEYS
    assert doc["seed"] == 42
    assert (doc["width"], doc["height"]) == (40, 30)
    assert doc["roomCount"] == len(doc["rooms"]) == world_42.room_count
    assert doc["corridorCount"] == len(doc["corridors"]) == world_42.corridor_count
    assert len(doc["map"]) == 30
    assert all(len(row) == 40 for row in doc["map"])
    assert {t for row in doc["map"] for t in row} <= {0, 1, 2, 3}


def test_map_is_row_major():
    w = create_world(0, 8, 5)
    w.set_tile(6, 1, 2)
    grid = encode_map(w)
    assert grid[1][6] == 2


def test_room_entries():
    w = create_world(0, 20, 10)
    add_room(w, 2, 3, 4, 3)
    assert encode_rooms(w) == [{"id": 0, "x": 2, "y": 3, "width": 4, "height": 3}]


def test_tombstoned_rooms_not_listed():
    w = create_world(0, 20, 10)
    add_room(w, 2, 2)
    add_room(w, 10, 2)
    w.remove_room(0)
    assert [r["id"] for r in encode_rooms(w)] == [1]


def test_encoding_is_compact(world_42):
    text = dumps_snapshot(world_42)
    assert ", " not in text
    assert ": " not in text
    assert json.loads(text) == encode_snapshot(world_42)


def test_overflow_raises_instead_of_truncating(world_42):
    with pytest.raises(EncodingOverflow):
        dumps_snapshot(world_42, capacity=64)


def test_capacity_is_inclusive():
    payload = {"a": 1}
    text = dumps_bounded(payload, 7)
    assert text == '{"a":1}'
    with pytest.raises(EncodingOverflow):
        dumps_bounded(payload, 6)
    assert dumps_bounded(payload, None) == text


def test_render_ascii():
    w = create_world(0, 6, 5)
    add_room(w, 1, 1, 3, 3)
    w.set_tile(4, 2, 3)
    w.set_tile(5, 4, 0)
    lines = render_ascii(w).split("\n")
    assert lines == [
        "######",
        "#...##",
        "#...+#",
        "#...##",
        "##### ",
    ]
