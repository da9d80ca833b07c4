from __future__ import annotations

from typing import Any

import redis
from django.conf import settings
from django.db import connection
from django.db import transaction
from django.http import JsonResponse


def check_db() -> dict[str, Any]:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    else:
        return {"ok": True}


def check_redis(url: str | None) -> dict[str, Any]:
    if not url:
        return {"ok": False, "error": "not configured"}
    try:
        client = redis.Redis.from_url(
            url,
            socket_timeout=0.5,
            socket_connect_timeout=0.5,
        )
        client.ping()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    else:
        return {"ok": True}


# Probes must not open a transaction on the database they are checking.
@transaction.non_atomic_requests
def health(request):
    components = {
        "db": check_db(),
        # Celery broker: update broadcasts are queued here.
        "broker": check_redis(getattr(settings, "REDIS_URL", None)),
    }
    # Only checked when Socket.IO fans out through Redis.
    message_queue = getattr(settings, "SOCKETIO_MESSAGE_QUEUE", "")
    if message_queue:
        components["socketio"] = check_redis(message_queue)

    all_ok = all(v.get("ok", False) for v in components.values())
    some_ok = any(v.get("ok", False) for v in components.values())

    status = "ok" if all_ok else ("degraded" if some_ok else "down")
    http_status = 200 if all_ok else 503

    return JsonResponse(
        {"status": status, "components": components},
        status=http_status,
    )
