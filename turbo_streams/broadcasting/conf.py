from __future__ import annotations

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    "EVENT_NAME": "turbo-stream",
    "DEFAULT_BROADCASTER": None,
    # None leaves Celery's task defaults in charge.
    "UPDATE_MAX_RETRIES": None,
    "UPDATE_RETRY_BACKOFF": None,
}


def broadcast_settings() -> dict[str, Any]:
    """Return ``settings.TURBO_STREAMS`` merged over the defaults.

    Read on every call so ``override_settings`` works in tests.
    """
    return {**DEFAULTS, **getattr(settings, "TURBO_STREAMS", {})}
