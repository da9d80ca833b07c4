"""Queued Turbo Stream broadcasts.

Tasks take a ``ModelReference`` as plain arguments and reload the row on every
attempt. Delivery is at-least-once: a redelivered task broadcasts again, and
broadcasters must tolerate that.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from celery import shared_task
from django.core.exceptions import ObjectDoesNotExist

from . import dispatch
from .conf import broadcast_settings
from .exceptions import TransportError
from .references import ModelReference

if TYPE_CHECKING:
    from celery import Task
    from celery.result import AsyncResult
    from django.db import models

logger = logging.getLogger(__name__)


def _retry(task: Task, exc: Exception):
    options = broadcast_settings()
    kwargs: dict[str, Any] = {"exc": exc}
    if options["UPDATE_MAX_RETRIES"] is not None:
        kwargs["max_retries"] = options["UPDATE_MAX_RETRIES"]
    if options["UPDATE_RETRY_BACKOFF"] is not None:
        kwargs["countdown"] = options["UPDATE_RETRY_BACKOFF"] * (
            2**task.request.retries
        )
    return task.retry(**kwargs)


def _load(reference: ModelReference):
    try:
        return reference.resolve()
    except ObjectDoesNotExist:
        logger.info(
            "Skipping broadcast for %s.%s %s: row no longer exists",
            reference.app_label,
            reference.model_name,
            reference.pk,
        )
        return None


@shared_task(bind=True, name="broadcasting.model_updated")
def broadcast_model_updated(self, app_label: str, model_name: str, pk: Any) -> bool:
    """Send the update stream of a model through its broadcaster.

    Returns:
        False when the row was deleted before the task ran, True otherwise.
    """
    instance = _load(ModelReference(app_label, model_name, pk))
    if instance is None:
        return False

    # BroadcasterResolutionError propagates: a missing broadcaster is a
    # configuration error and retrying cannot fix it.
    broadcaster = instance.update_broadcaster()
    try:
        broadcaster.update(instance)
    except TransportError as exc:
        raise _retry(self, exc) from exc
    return True


@shared_task(bind=True, name="broadcasting.model_created")
def broadcast_model_created(self, app_label: str, model_name: str, pk: Any) -> bool:
    instance = _load(ModelReference(app_label, model_name, pk))
    if instance is None:
        return False

    broadcaster = instance.update_broadcaster()
    try:
        broadcaster.create(instance)
    except TransportError as exc:
        raise _retry(self, exc) from exc
    return True


def queue_model_updated(instance: models.Model) -> AsyncResult:
    return dispatch.enqueue(
        broadcast_model_updated, *ModelReference.of(instance).as_args()
    )


def queue_model_created(instance: models.Model) -> AsyncResult:
    return dispatch.enqueue(
        broadcast_model_created, *ModelReference.of(instance).as_args()
    )
