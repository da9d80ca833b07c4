from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from . import dispatch
from .rendering import render_stream

if TYPE_CHECKING:
    from .channels import Channel
    from .models import Broadcastable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemovedEntity:
    """Channels and DOM id of a row, captured while its pk is still set.

    Django clears the primary key once a delete completes, so deletion streams
    are rendered from this snapshot after the transaction commits.
    """

    channels: tuple[Channel, ...]
    target: str

    @classmethod
    def of(cls, instance: Broadcastable) -> RemovedEntity:
        return cls(
            channels=tuple(instance.broadcast_channels()),
            target=instance.dom_target_id(),
        )

    def broadcast_channels(self) -> tuple[Channel, ...]:
        return self.channels

    def dom_target_id(self) -> str:
        return self.target


class ModelRemoved:
    """Announces that a model was deleted.

    Sent right away (no queue): by the time a worker would run, the row and
    its primary key are gone.
    """

    template_name = "turbo_streams/model_removed.html"

    def __init__(self, instance: Broadcastable | RemovedEntity, action: str = "remove"):
        if not isinstance(action, str) or not action:
            msg = "action must be a non-empty string"
            raise ValueError(msg)
        self.instance = instance
        self.action = action

    def broadcast_on(self) -> tuple[Channel, ...]:
        return self.instance.broadcast_channels()

    def broadcast_with(self) -> dict[str, str]:
        return {"message": self.render()}

    def render(self) -> str:
        return render_stream(
            self.template_name,
            {
                "target": self.instance.dom_target_id(),
                "action": self.action,
            },
        )

    def dispatch(self) -> None:
        # Render first so a template failure sends nothing.
        payload = self.broadcast_with()
        channels = self.broadcast_on()
        logger.debug("Broadcasting %s of %r", self.action, self.instance)
        dispatch.send_now(channels, payload)
