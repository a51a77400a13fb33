"""
project: BYOW World Server
module: world_api.py
License: MIT

World generation, snapshot and path query API routes.

The process holds a single current world. `/api/generate` replaces it; every
other route reads it. Replacement happens under a lock so a reader never sees
a half-built world (generation runs before the swap). Worlds are never mutated
after they are published, so readers need no lock beyond the fetch.
"""

import hashlib
import math
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from byow.logging_utils import get_logger
from byow.world import (
    World,
    WorldError,
    dumps_snapshot,
    find_shortest_path,
    generate,
    is_world_connected,
)
from byow.world.snapshot import encode_corridors, encode_map, encode_rooms

bp_world = Blueprint("world_api", __name__)
log = get_logger("byow.api")

SEED_MAX = 9223372036854775807

# Status code per error kind; anything unlisted is a client error.
STATUS_BY_KIND = {
    "invalid_dimension": 400,
    "invalid_room_id": 400,
    "no_path": 404,
    "encoding_overflow": 500,
    "allocation_failure": 503,
}

_current_world = None
_current_world_lock = threading.Lock()


def get_current_world():
    with _current_world_lock:
        return _current_world


def set_current_world(world):
    """Swap in a new current world.

    The previous world is left intact: request threads that fetched it before
    the swap keep reading a complete world, and it is freed once the last
    reference goes away.
    """
    global _current_world
    with _current_world_lock:
        _current_world = world


def coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative 64-bit int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        return int(payload_seed)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, float) and math.isfinite(payload_seed):
        return int(payload_seed) % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.lstrip("-").isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    return random.randint(1, 1_000_000)


def _params():
    """Merge query-string and JSON body parameters (body wins)."""
    params = dict(request.args.items())
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        params.update(body)
    return params


def _int_param(params, name, default):
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer")


def _error(message, status, kind="bad_request"):
    return jsonify({"error": message, "kind": kind}), status


def _no_world():
    return _error("No world generated yet", 404, "no_world")


def _snapshot_response(world: World):
    body = dumps_snapshot(world)
    return current_app.response_class(body, mimetype="application/json")


@bp_world.errorhandler(WorldError)
def _world_error(exc):
    status = STATUS_BY_KIND.get(exc.kind, 400)
    log.warn(event="world_error", kind=exc.kind, error=exc.message, path=request.path)
    return jsonify(exc.to_dict()), status


@bp_world.after_request
def _cors(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@bp_world.route("/api/generate", methods=["GET", "POST"])
@bp_world.route("/api/generateWorld", methods=["GET", "POST"])
def generate_world():
    """Generate a new current world and return its snapshot.

    Parameters (query string or JSON body, all optional):
      seed   int or string; strings that are not numeric are hashed
      width  grid width (default 80, clamped to the configured maximum)
      height grid height (default 50)
    """
    params = _params()
    try:
        width = _int_param(params, "width", current_app.config["BYOW_DEFAULT_WIDTH"])
        height = _int_param(params, "height", current_app.config["BYOW_DEFAULT_HEIGHT"])
    except ValueError as exc:
        return _error(str(exc), 400)
    seed = coerce_seed(params.get("seed"))
    world = generate(seed, width, height, current_app.config["BYOW_WORLD_CONFIG"])
    response = _snapshot_response(world)
    set_current_world(world)
    log.info(
        event="world_generated",
        seed=seed,
        width=world.width,
        height=world.height,
        rooms=world.room_count,
        corridors=world.corridor_count,
        runtime_ms=world.metrics.get("runtime_ms"),
    )
    return response


@bp_world.route("/api/world")
@bp_world.route("/api/getWorld")
def get_world():
    world = get_current_world()
    if world is None:
        return _no_world()
    return _snapshot_response(world)


@bp_world.route("/api/rooms")
def get_rooms():
    world = get_current_world()
    if world is None:
        return _no_world()
    return jsonify(encode_rooms(world))


@bp_world.route("/api/corridors")
def get_corridors():
    world = get_current_world()
    if world is None:
        return _no_world()
    return jsonify(encode_corridors(world))


@bp_world.route("/api/map")
def get_map():
    world = get_current_world()
    if world is None:
        return _no_world()
    return jsonify(encode_map(world))


@bp_world.route("/api/path")
@bp_world.route("/api/findPath")
def find_path_route():
    """Shortest room-to-room path.

    Query: ?start=<room id>&end=<room id>
    Response: { "path": [ids...], "length": n }
    """
    world = get_current_world()
    if world is None:
        return _no_world()
    try:
        start = _int_param(request.args, "start", None)
        end = _int_param(request.args, "end", None)
    except ValueError as exc:
        return _error(str(exc), 400, "invalid_room_id")
    if start is None or end is None:
        return _error("start and end are required", 400, "invalid_room_id")
    path = find_shortest_path(world, start, end, world.config.max_path_length)
    return jsonify({"path": path, "length": len(path)})


@bp_world.route("/api/connectivity")
def connectivity():
    world = get_current_world()
    if world is None:
        return _no_world()
    return jsonify(
        {
            "connected": is_world_connected(world),
            "roomCount": world.room_count,
            "corridorCount": world.corridor_count,
        }
    )
