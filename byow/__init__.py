"""
project: BYOW World Server
module: __init__.py
License: MIT

Flask application factory and core extensions setup.

This module wires together the Flask app and SQLAlchemy. Configuration is
sourced from environment variables with reasonable defaults for development. A
local `instance/` directory is used for SQLite and other runtime data.
"""

import logging
import os
import uuid
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy

from byow.world import WorldConfig

# Load .env if present so `SECRET_KEY`, `DATABASE_URL`, `BYOW_*` etc. can be
# supplied without exporting shell variables during development.
load_dotenv()

# Create the Flask app with instance-relative config so we can use ./instance
# for local data (e.g., SQLite database at ./instance/byow.db)
app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # In some constrained environments this might fail; the DB URL can point elsewhere
    pass

secret_key = os.getenv("SECRET_KEY", "dev-secret-change-me")
database_url = os.getenv("DATABASE_URL")

if not database_url:
    is_pytest = bool(os.getenv("PYTEST_CURRENT_TEST"))
    db_filename = "byow_test.db" if is_pytest else "byow.db"
    db_path = Path(app.instance_path) / db_filename
    # Use POSIX path for SQLAlchemy URI compatibility across OS
    database_url = f"sqlite:///{db_path.as_posix()}"


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


app.config.update(
    SECRET_KEY=secret_key,
    SQLALCHEMY_DATABASE_URI=database_url,
    SQLALCHEMY_TRACK_MODIFICATIONS=False,
    # World generation limits and defaults
    BYOW_WORLD_CONFIG=WorldConfig.from_env(),
    BYOW_DEFAULT_WIDTH=_env_int("BYOW_DEFAULT_WIDTH", 80),
    BYOW_DEFAULT_HEIGHT=_env_int("BYOW_DEFAULT_HEIGHT", 50),
    BYOW_SAVE_MAX_BYTES=_env_int("BYOW_SAVE_MAX_BYTES", 65536),
)
# Werkzeug refuses request bodies past this size before they are buffered
app.config["MAX_CONTENT_LENGTH"] = app.config["BYOW_SAVE_MAX_BYTES"]

engine_opts = {}
if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
    # Provide a generous timeout to mitigate transient lock contention in tests
    engine_opts["connect_args"] = {
        "timeout": 10,
        "check_same_thread": False,
    }
db = SQLAlchemy(app, session_options={"expire_on_commit": False}, engine_options=engine_opts)

# Register HTTP blueprints (import after app/db created)
from byow.routes.save_api import bp_save  # noqa: E402
from byow.routes.world_api import bp_world  # noqa: E402

app.register_blueprint(bp_world)
app.register_blueprint(bp_save)


def create_app():
    """Return the Flask app instance, ensuring tables exist.

    The app is a module-level singleton; this helper exists so tests and the
    CLI share one bootstrap path.
    """
    from byow import models  # noqa: F401  (register tables)

    with app.app_context():
        db.create_all()
    return app


@app.errorhandler(413)
def request_too_large(e):
    limit = app.config.get("MAX_CONTENT_LENGTH")
    return jsonify({"error": f"Request body exceeds {limit} bytes", "kind": "encoding_overflow"}), 413


# Error handling: in non-debug mode return a JSON 500 and log details
@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "Internal server error", "error_id": error_id}), 500
