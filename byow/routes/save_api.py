"""Save/load API routes.

Clients save whatever snapshot bytes they hold and load them back verbatim.
The body is stored as an opaque blob; no schema validation happens here.
"""
from flask import Blueprint, current_app, jsonify, request

from byow import db
from byow.logging_utils import get_logger
from byow.models import SavedWorld

bp_save = Blueprint("save_api", __name__)
log = get_logger("byow.save")


@bp_save.after_request
def _cors(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def _too_large(size, limit):
    log.warn(event="save_rejected", bytes=size, limit=limit)
    return jsonify({"error": f"Save payload exceeds {limit} bytes", "kind": "encoding_overflow"}), 413


@bp_save.route("/api/save", methods=["POST"])
def save_world():
    """Store the raw request body.

    Response: { "status": "saved", "id": <id>, "bytes": <n> }
    """
    limit = current_app.config["BYOW_SAVE_MAX_BYTES"]
    # Declared size is checked before the body is buffered
    if request.content_length is not None and request.content_length > limit:
        return _too_large(request.content_length, limit)
    payload = request.get_data(cache=False)
    if not payload:
        return jsonify({"error": "Empty save payload", "kind": "bad_request"}), 400
    if len(payload) > limit:
        return _too_large(len(payload), limit)
    record = SavedWorld(payload=payload, content_type=request.mimetype or "application/octet-stream")
    db.session.add(record)
    db.session.commit()
    log.info(event="world_saved", id=record.id, bytes=len(payload))
    return jsonify({"status": "saved", "id": record.id, "bytes": len(payload)})


@bp_save.route("/api/load")
def load_world():
    record = SavedWorld.latest()
    if record is None:
        return jsonify({"error": "No save file found", "kind": "not_found"}), 404
    return current_app.response_class(record.payload, mimetype=record.content_type)
