from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING
from typing import ClassVar

from django.db import models

from .channels import Channel
from .channels import private_channel
from .dom import dom_id
from .registry import broadcasters

if TYPE_CHECKING:
    from .registry import Broadcaster


def broadcasting_rule(instance: models.Model) -> str:
    """``<app_label>.<ModelName>.<pk>``, e.g. ``boards.Card.7``."""
    meta = instance._meta  # noqa: SLF001
    return f"{meta.app_label}.{meta.object_name}.{instance.pk}"


def _as_channels(target) -> tuple[Channel, ...]:
    if target is None:
        return ()
    if isinstance(target, Channel):
        return (target,)
    if isinstance(target, str):
        return (Channel(name=target),)
    if isinstance(target, Broadcastable):
        return tuple(target.broadcast_channels())
    if isinstance(target, models.Model):
        return (private_channel(broadcasting_rule(target)),)
    if isinstance(target, Iterable):
        channels: list[Channel] = []
        for item in target:
            channels.extend(c for c in _as_channels(item) if c not in channels)
        return tuple(channels)
    msg = f"Cannot derive a broadcast channel from {target!r}"
    raise TypeError(msg)


class Broadcastable(models.Model):
    """Capability mixin for models that stream Turbo updates.

    Subclasses get a private channel per row, a DOM id and a broadcaster
    resolved through :data:`~turbo_streams.broadcasting.registry.broadcasters`.
    Set ``broadcasts_to`` to the name of a relation (or a callable taking the
    instance) to stream on the related object's channels instead, e.g. cards
    that broadcast to their board.
    """

    broadcasts_to: ClassVar[str | None] = None
    broadcasts_automatically: ClassVar[bool] = True

    class Meta:
        abstract = True

    def broadcasting_rule(self) -> str:
        return broadcasting_rule(self)

    def broadcast_channels(self) -> tuple[Channel, ...]:
        # Class access keeps plain functions unbound.
        target = type(self).broadcasts_to
        if target is None:
            return (private_channel(self.broadcasting_rule()),)
        if callable(target):
            return _as_channels(target(self))
        return _as_channels(getattr(self, target))

    def dom_target_id(self) -> str:
        return dom_id(self)

    def broadcast_partial_name(self) -> str:
        meta = self._meta
        return f"{meta.app_label}/_{meta.model_name}.html"

    def update_broadcaster(self) -> Broadcaster:
        return broadcasters.resolve(self)
