"""Global Socket.IO server streaming Turbo fragments to browsers.

Client convention:
- Socket.IO path: /ws/streams/
- Auth: `query.token` (JWT access token), or `auth.token`
- Subscribe: emit `subscribe` with `{"channel": "<broadcast name>"}`
- Streams arrive as `turbo-stream` events: `{"channel": ..., "message": ...}`

With `SOCKETIO_MESSAGE_QUEUE` set, servers share rooms through Redis and every
process (Celery workers included) publishes emits to it with a write-only
manager, reaching browsers connected to any web process.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError

from .authorization import channel_authorizers

logger = logging.getLogger(__name__)

SOCKETIO_PATH = "ws/streams"


def _client_manager() -> socketio.AsyncManager | None:
    url = getattr(settings, "SOCKETIO_MESSAGE_QUEUE", "")
    if not url:
        return None
    return socketio.AsyncRedisManager(url)


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*",
    client_manager=_client_manager(),
    logger=False,
    engineio_logger=False,
)


@dataclass(frozen=True)
class UserRealtimeContext:
    user_id: int


@database_sync_to_async
def _get_user_context_from_access_token(token: str) -> UserRealtimeContext:
    jwt_auth = JWTAuthentication()
    validated = jwt_auth.get_validated_token(token)
    user = jwt_auth.get_user(validated)
    return UserRealtimeContext(user_id=int(user.pk))


@database_sync_to_async
def _authorize_subscription(user_id: int | None, broadcast_name: str) -> bool:
    user = None
    if user_id is not None:
        user = get_user_model()._default_manager.filter(pk=user_id).first()  # noqa: SLF001
    return channel_authorizers.authorize(user, broadcast_name)


def _query_string(environ: Any) -> str:
    # ASGI servers pass the scope (sometimes nested under `asgi.scope`) with a
    # bytes `query_string`; WSGI servers pass `QUERY_STRING` as str.
    if not isinstance(environ, dict):
        return ""
    scope = environ.get("asgi.scope", environ)
    if not isinstance(scope, dict):
        scope = environ
    raw = scope.get("query_string", scope.get("QUERY_STRING", ""))
    if isinstance(raw, (bytes, bytearray)):
        return raw.decode(errors="ignore")
    return str(raw)


def _extract_token(environ: Any, auth: Any | None) -> str | None:
    """Return the JWT from `?token=` or, failing that, `auth.token`."""
    candidates = parse_qs(_query_string(environ)).get("token", [])
    if isinstance(auth, dict):
        candidates.append(auth.get("token"))
    return next((c for c in candidates if isinstance(c, str) and c), None)


def _channel_from(data: Any) -> str | None:
    if isinstance(data, dict):
        data = data.get("channel")
    if isinstance(data, str) and data.strip():
        return data.strip()
    return None


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    if not token:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    try:
        ctx = await _get_user_context_from_access_token(token)
    except TokenError as exc:
        message = str(exc)
        if "expired" in message.lower():
            msg = "jwt_expired"
            raise ConnectionRefusedError(msg) from exc
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc
    except AuthenticationFailed as exc:  # user not found / inactive, etc.
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc
    except Exception as exc:
        logger.exception("Socket.IO connect error")
        msg = "server_error"
        raise ConnectionRefusedError(msg) from exc

    await sio.save_session(sid, {"user_id": ctx.user_id})


@sio.event
async def disconnect(sid: str):
    # Rooms/session are cleaned up automatically.
    _ = sid


@sio.event
async def subscribe(sid: str, data: Any) -> dict[str, Any]:
    channel = _channel_from(data)
    if channel is None:
        return {"ok": False, "channel": None, "error": "invalid_channel"}

    session = await sio.get_session(sid)
    user_id = session.get("user_id") if isinstance(session, dict) else None
    allowed = await _authorize_subscription(user_id, channel)
    if not allowed:
        logger.info("User %s denied subscription to %s", user_id, channel)
        return {"ok": False, "channel": channel, "error": "forbidden"}

    await sio.enter_room(sid, channel)
    return {"ok": True, "channel": channel}


@sio.event
async def unsubscribe(sid: str, data: Any) -> dict[str, Any]:
    channel = _channel_from(data)
    if channel is None:
        return {"ok": False, "channel": None, "error": "invalid_channel"}
    await sio.leave_room(sid, channel)
    return {"ok": True, "channel": channel}


@functools.cache
def _write_only_manager(url: str) -> socketio.RedisManager:
    return socketio.RedisManager(url, write_only=True)


def emit_event_to_room(room: str, event: str, payload: dict[str, Any]) -> None:
    """Emit an event to a room from sync Django code.

    With a message queue the event is published through a synchronous,
    write-only Redis manager, which works from Celery workers and web
    processes alike. Without one, emits reach only clients of this process.
    """

    url = getattr(settings, "SOCKETIO_MESSAGE_QUEUE", "")
    if url:
        _write_only_manager(url).emit(event, payload, room=room)
        return
    async_to_sync(sio.emit)(event, payload, room=room)
