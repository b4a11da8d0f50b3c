import logging
import re
import time
from typing import Any, Dict, Optional

import psutil
from flask import Flask, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException

from archpass import GENERATOR_NAME, __version__
from archpass.config import DEFAULTS, allowed_origins, load_config
from archpass.errors import InvalidCount, InvalidLength, PasswordGenerationError
from archpass.generator import check_batch_count, generate, generate_batch
from archpass.presets import DEFAULT_PRESET, PRESETS

from .responses import failure, success, timestamp

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "GET /": "API information",
    "GET /generate": "Generate password with default settings",
    "POST /generate": "Generate password(s) with custom parameters",
    "GET /health": "Health check endpoint",
}
AVAILABLE_ENDPOINTS = ["/", "/generate", "/health"]

# ASCII digits only; int() alone also takes "1_2" and non-Latin digits
_INT_RE = re.compile(r"[+-]?[0-9]+")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'self'",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def _parse_int(value: Any, error_cls, message: str) -> int:
    if isinstance(value, bool):
        raise error_cls(message)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        value = value.strip()
        if _INT_RE.fullmatch(value):
            return int(value)
    raise error_cls(message)


def _parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _error_code(e: HTTPException) -> str:
    return re.sub(r"[^A-Z0-9]+", "_", (e.name or "error").upper()).strip("_")


def _request_body() -> Dict[str, Any]:
    if request.is_json:
        # an empty JSON body falls back to the defaults
        data = request.get_json() if request.get_data() else {}
        data = {} if data is None else data
    else:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise PasswordGenerationError("Request body must be a JSON object")
    return data


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    cfg = DEFAULTS.copy()
    cfg.update(load_config() if config is None else config)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = cfg["max_content_length"]
    app.config["RATELIMIT_ENABLED"] = cfg["rate_limit_enabled"]
    app.config["ARCHPASS"] = cfg

    origins = allowed_origins(cfg)
    CORS(
        app,
        origins=origins,
        send_wildcard=origins == "*",
        methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )
    Limiter(
        get_remote_address,
        app=app,
        default_limits=[cfg["rate_limit"]],
        storage_uri="memory://",
        headers_enabled=True,
    )

    @app.after_request
    def add_security_headers(response):
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    # --- Routes ---

    @app.route("/", methods=["GET"])
    def info():
        return success({
            "name": GENERATOR_NAME,
            "version": __version__,
            "description": "A professional password generation API with multiple complexity levels",
            "endpoints": ENDPOINTS,
            "types": list(PRESETS),
        })

    @app.route("/generate", methods=["GET"])
    def generate_get():
        args = request.args
        length = _parse_int(args.get("length", 12), InvalidLength, "Length must be a valid number")
        preset_name = args.get("type", DEFAULT_PRESET)
        exclude_ambiguous = _parse_flag(args.get("exclude_ambiguous", "false"))

        result = generate(length, preset_name, exclude_ambiguous)
        return success(result.to_dict())

    @app.route("/generate", methods=["POST"])
    def generate_post():
        data = _request_body()
        count = _parse_int(data.get("count", 1), InvalidCount, "Count must be a whole number")
        check_batch_count(count)
        length = _parse_int(data.get("length", 12), InvalidLength, "Length must be a valid number")
        preset_name = data.get("type", DEFAULT_PRESET)
        exclude_ambiguous = _parse_flag(data.get("exclude_ambiguous", False))

        results = [r.to_dict() for r in generate_batch(count, length, preset_name, exclude_ambiguous)]
        return success(results[0] if count == 1 else results, count=len(results))

    @app.route("/health", methods=["GET"])
    def health():
        proc = psutil.Process()
        mem = proc.memory_info()
        return success({
            "status": "healthy",
            "uptime": round(time.time() - proc.create_time(), 3),
            "memory": {"rss": mem.rss, "vms": mem.vms},
            "timestamp": timestamp(),
        })

    # --- Errors ---

    @app.errorhandler(PasswordGenerationError)
    def handle_generation_error(e):
        logger.info("Rejected %s %s: %s", request.method, request.path, e.code)
        return failure(str(e), e.code, 400)

    @app.errorhandler(404)
    def handle_not_found(e):
        return failure("Endpoint not found", "NOT_FOUND", 404, availableEndpoints=AVAILABLE_ENDPOINTS)

    @app.errorhandler(429)
    def handle_rate_limited(e):
        logger.info("Rate limit exceeded for %s", get_remote_address())
        return failure("Rate limit exceeded. Please try again later.", "RATE_LIMITED", 429)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return failure(e.description or e.name, _error_code(e), e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("API Error")
        return failure("Internal server error", "INTERNAL_ERROR", 500)

    return app


app = create_app()

if __name__ == "__main__":
    cfg = app.config["ARCHPASS"]
    app.run(host=cfg["host"], port=cfg["port"], debug=cfg["environment"] == "development")
