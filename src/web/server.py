"""aiohttp application serving the memo page and the ``/api/memos`` REST API.

Handlers only translate between HTTP and ``MemoService``. Failures raised
by the data layer are turned into ``{"error": ...}`` JSON responses by
``_error_middleware``; anything else is treated as a fault in the process.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from functools import partial
from typing import TYPE_CHECKING, Any

from aiohttp import web
from aiohttp.web_runner import GracefulExit

from src.config import settings
from src.memos.errors import MemoError, ValidationFailed
from src.memos.service import MemoService
from src.web.page import render_page

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from src.config import Settings

logger = logging.getLogger(__name__)

MEMO_SERVICE = web.AppKey("memo_service", MemoService)
FAIL_FAST = web.AppKey("fail_fast", bool)

_ID_RE = re.compile(r"[0-9]+")
_BAD_BODY = "リクエストの形式が正しくありません"

_json_response = partial(web.json_response, dumps=partial(json.dumps, ensure_ascii=False))


# -- Request helpers -----------------------------------------------------------


def _memo_id(request: web.Request) -> int:
    raw = request.match_info["id"]
    if not _ID_RE.fullmatch(raw):
        raise ValidationFailed("メモIDが正しくありません")
    return int(raw)


async def _memo_body(request: web.Request) -> tuple[Any, Any]:
    """Return ``(title, content)`` from a JSON object body."""
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationFailed(_BAD_BODY) from None
    if not isinstance(payload, dict):
        raise ValidationFailed(_BAD_BODY)
    return payload.get("title"), payload.get("content")


# -- Handlers ------------------------------------------------------------------


async def _index(request: web.Request) -> web.Response:
    """GET / — the memo page."""
    memos = await request.app[MEMO_SERVICE].list()
    return web.Response(text=render_page(memos), content_type="text/html", charset="utf-8")


async def _list_memos(request: web.Request) -> web.Response:
    memos = await request.app[MEMO_SERVICE].list()
    return _json_response([m.to_json() for m in memos])


async def _create_memo(request: web.Request) -> web.Response:
    title, content = await _memo_body(request)
    memo = await request.app[MEMO_SERVICE].create(title, content)
    return _json_response(memo.to_json(), status=201)


async def _update_memo(request: web.Request) -> web.Response:
    memo_id = _memo_id(request)
    title, content = await _memo_body(request)
    memo = await request.app[MEMO_SERVICE].update(memo_id, title, content)
    return _json_response(memo.to_json())


async def _delete_memo(request: web.Request) -> web.Response:
    memo_id = _memo_id(request)
    memo = await request.app[MEMO_SERVICE].delete(memo_id)
    return _json_response(memo.to_json())


async def _health(request: web.Request) -> web.Response:
    """GET /health — basic liveness check."""
    return web.json_response({"status": "ok"})


# -- Error translation ---------------------------------------------------------


def _raise_graceful_exit() -> None:
    raise GracefulExit


@web.middleware
async def _error_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except MemoError as exc:
        if exc.status >= 500:
            logger.exception("Memo store failure: %s %s", request.method, request.path)
            return _json_response({"error": "Internal Server Error"}, status=exc.status)
        logger.info(
            "Rejected %s %s (%d): %s", request.method, request.path, exc.status, exc.message
        )
        return _json_response({"error": exc.message}, status=exc.status)
    except Exception:
        logger.critical("Unhandled error: %s %s", request.method, request.path, exc_info=True)
        if request.app[FAIL_FAST]:
            logger.critical("Shutting down after unhandled error")
            asyncio.get_running_loop().call_soon(_raise_graceful_exit)
        return _json_response({"error": "Internal Server Error"}, status=500)


# -- Application -----------------------------------------------------------------


def create_app(service: MemoService, config: Settings | None = None) -> web.Application:
    """Build the aiohttp Application with routes."""
    config = config or settings
    app = web.Application(middlewares=[_error_middleware])
    app[MEMO_SERVICE] = service
    app[FAIL_FAST] = config.fail_fast

    app.router.add_get("/", _index)
    app.router.add_get("/health", _health)
    app.router.add_get("/api/memos", _list_memos)
    app.router.add_post("/api/memos", _create_memo)
    app.router.add_put("/api/memos/{id}", _update_memo)
    app.router.add_delete("/api/memos/{id}", _delete_memo)

    if config.static_dir.is_dir():
        app.router.add_static("/public/", config.static_dir)
        logger.info("Serving static files from %s at /public/", config.static_dir)

    return app
