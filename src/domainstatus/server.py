"""HTTP transport over a :class:`StatusStore` (aiohttp.web).

Routes:

* ``POST /update`` - JSON ``{"domain": ..., "status": ...}`` -> append
* ``GET /`` - YAML snapshot of every domain
* ``GET /{domain}`` - YAML history of one domain, 404 when unknown
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator

from aiohttp import web
from pydantic import ValidationError

from domainstatus._constants import YAML_CONTENT_TYPE
from domainstatus.config import ServerConfig
from domainstatus.exceptions import SerializationError
from domainstatus.models import UpdateRequest
from domainstatus.serialization import render_history, render_snapshot
from domainstatus.store import StatusStore
from domainstatus.sweeper import RetentionSweeper

_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", StatusStore)
SWEEPER_KEY = web.AppKey("sweeper", RetentionSweeper)


def _text(status: int, text: str) -> web.Response:
    return web.Response(status=status, text=text)


def _method_not_allowed(request: web.Request, allowed: str) -> web.Response:
    _logger.debug("Rejected %s %s", request.method, request.path)
    return web.Response(status=405, text="Method not allowed", headers={"Allow": allowed})


def _yaml(body: str) -> web.Response:
    return web.Response(status=200, text=body, content_type=YAML_CONTENT_TYPE)


def _update_error_message(exc: ValidationError) -> str:
    for error in exc.errors():
        loc = error.get("loc") or ()
        if not loc or loc[0] not in ("domain", "status"):
            continue
        field = str(loc[0])
        # Absent and empty both read as "required"; anything else is malformed.
        if error.get("type") == "missing" or error.get("input") == "":
            return f"{field.capitalize()} is required"
        return f"Invalid {field}"
    return "Invalid request"


async def handle_update(request: web.Request) -> web.Response:
    if request.method != "POST":
        return _method_not_allowed(request, "POST")

    try:
        raw = await request.read()
    except web.HTTPRequestEntityTooLarge:
        _logger.debug("Rejected oversized update body")
        return _text(400, "Invalid JSON")

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError):
        return _text(400, "Invalid JSON")
    if not isinstance(payload, dict):
        return _text(400, "Invalid JSON")

    try:
        update = UpdateRequest.model_validate(payload)
    except ValidationError as exc:
        _logger.debug("Rejected update: %s", exc.errors(include_url=False))
        return _text(400, _update_error_message(exc))

    request.app[STORE_KEY].append(update.domain, update.status)
    return web.json_response({"message": "Update stored"})


async def handle_snapshot(request: web.Request) -> web.Response:
    if request.method != "GET":
        return _method_not_allowed(request, "GET")

    snapshot = request.app[STORE_KEY].snapshot()
    try:
        body = render_snapshot(snapshot)
    except SerializationError:
        _logger.exception("Failed to render snapshot")
        return _text(500, "Internal Server Error")
    return _yaml(body)


async def handle_lookup(request: web.Request) -> web.Response:
    if request.method != "GET":
        return _method_not_allowed(request, "GET")

    domain = request.match_info.get("domain", "")
    if not domain:
        return _text(400, "Domain is required")

    history, found = request.app[STORE_KEY].lookup(domain)
    if not found:
        return _text(404, "Does Not Exist")
    try:
        body = render_history(history)
    except SerializationError:
        _logger.exception("Failed to render history for %s", domain)
        return _text(500, "Internal Server Error")
    return _yaml(body)


def create_app(store: StatusStore, config: ServerConfig | None = None) -> web.Application:
    """Build the application around an explicitly constructed *store*."""
    config = config or ServerConfig()
    app = web.Application(client_max_size=config.max_body_bytes)
    app[STORE_KEY] = store
    app[SWEEPER_KEY] = RetentionSweeper(store, interval=config.sweep_interval, max_age=config.max_age)

    # Registration order matters: "/update" must win over the catch-all.
    app.router.add_route("*", "/update", handle_update)
    app.router.add_route("*", "/", handle_snapshot)
    app.router.add_route("*", "/{domain:.*}", handle_lookup)

    async def _sweeper_ctx(app: web.Application) -> AsyncIterator[None]:
        sweeper = app[SWEEPER_KEY]
        sweeper.start()
        yield
        await sweeper.stop()

    app.cleanup_ctx.append(_sweeper_ctx)
    return app


def run(config: ServerConfig | None = None) -> None:
    """Serve until interrupted. Failing to bind the port is fatal."""
    config = config or ServerConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    store = StatusStore()
    _logger.info("Starting domainstatus on %s:%d", config.host, config.port)
    web.run_app(create_app(store, config), host=config.host, port=config.port, print=None)
