"""
archweb.responses
The JSON envelope every endpoint answers with:
{"success": bool, "data" | "error": ..., "meta": {...}}
"""

from datetime import datetime, timezone

from flask import jsonify

from archpass import GENERATOR_NAME, __version__


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def meta() -> dict:
    return {
        "timestamp": timestamp(),
        "generator": GENERATOR_NAME,
        "version": __version__,
    }


def success(data, status: int = 200, **extra):
    body = {"success": True, "data": data}
    body.update(extra)
    body["meta"] = meta()
    return jsonify(body), status


def failure(message: str, code: str, status: int = 400, **details):
    error = {"message": message, "code": code}
    error.update(details)
    return jsonify({"success": False, "error": error, "meta": meta()}), status
