from __future__ import annotations

import logging
from functools import partial

from django.apps import apps
from django.db.models.signals import post_delete
from django.db.models.signals import post_save
from django.db.transaction import on_commit

from .events import ModelRemoved
from .events import RemovedEntity
from .models import Broadcastable
from .tasks import queue_model_created
from .tasks import queue_model_updated

logger = logging.getLogger(__name__)


def broadcast_saved_model(sender, instance, created, raw=False, using=None, **kwargs):
    # Fixture loading saves raw rows; related objects may not exist yet.
    if raw or not instance.broadcasts_automatically:
        return
    queue = queue_model_created if created else queue_model_updated
    on_commit(partial(queue, instance), using=using)


def broadcast_deleted_model(sender, instance, using=None, **kwargs):
    if not instance.broadcasts_automatically:
        return
    # Capture what needs the pk now; render and send after commit so a
    # broadcast failure never rolls the delete back.
    event = ModelRemoved(RemovedEntity.of(instance))
    on_commit(event.dispatch, using=using)


def connect_broadcastable_models() -> None:
    """Connect the lifecycle receivers to every concrete broadcastable model.

    Receivers are bound per sender so other models keep Django's fast
    (signal-free) cascade deletes.
    """
    for model in apps.get_models():
        if not issubclass(model, Broadcastable):
            continue
        label = model._meta.label_lower  # noqa: SLF001
        post_save.connect(
            broadcast_saved_model,
            sender=model,
            dispatch_uid=f"turbo_streams.saved.{label}",
        )
        post_delete.connect(
            broadcast_deleted_model,
            sender=model,
            dispatch_uid=f"turbo_streams.deleted.{label}",
        )
        logger.debug("Broadcasting lifecycle of %s", label)
