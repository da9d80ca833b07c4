"""Immediate and deferred delivery of Turbo Stream payloads."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING
from typing import Any

from kombu.exceptions import OperationalError

from turbo_streams.realtime.socketio import emit_event_to_room

from .conf import broadcast_settings
from .exceptions import TransportError

if TYPE_CHECKING:
    from celery import Task
    from celery.result import AsyncResult

    from .channels import Channel

logger = logging.getLogger(__name__)


def send_now(channels: Iterable[Channel | str], payload: dict[str, Any]) -> None:
    """Emit ``payload`` to every channel's room before returning.

    Each room receives the payload plus the ``channel`` it was sent on so
    clients subscribed to several channels can tell streams apart.
    """
    names = [str(channel) for channel in channels]
    if not names:
        logger.debug("No channels to broadcast on; skipping send")
        return

    event = broadcast_settings()["EVENT_NAME"]
    for name in names:
        try:
            emit_event_to_room(name, event, {"channel": name, **payload})
        except Exception as exc:
            logger.warning("Broadcast on %s failed: %s", name, exc)
            msg = f"Cannot broadcast on {name}"
            raise TransportError(msg) from exc
        logger.debug("Sent %s to %s", event, name)


def enqueue(task: Task, *args: Any) -> AsyncResult:
    """Submit ``task`` to the queue; broker failures raise ``TransportError``."""
    try:
        return task.delay(*args)
    except OperationalError as exc:
        msg = f"Cannot queue {task.name}"
        raise TransportError(msg) from exc
