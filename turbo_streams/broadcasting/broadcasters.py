from __future__ import annotations

from typing import TYPE_CHECKING

from . import dispatch
from .dom import dom_id
from .dom import dom_list_id
from .events import ModelRemoved
from .rendering import render_stream

if TYPE_CHECKING:
    from .models import Broadcastable


class ModelBroadcaster:
    """Renders a model's partial into a Turbo Stream and sends it.

    Creates append to the model's list element, updates replace the row's own
    element. Sends are immediate; callers that want a queue go through the
    ``broadcasting.model_*`` tasks. Re-sending the same update is harmless
    because ``replace`` is idempotent on the client.
    """

    template_name = "turbo_streams/model_saved.html"
    create_action = "append"
    update_action = "replace"

    def create(self, instance: Broadcastable) -> None:
        message = self.render(instance, self.create_action, dom_list_id(instance))
        self.send(instance, message)

    def update(self, instance: Broadcastable) -> None:
        message = self.render(instance, self.update_action, dom_id(instance))
        self.send(instance, message)

    def remove(self, instance: Broadcastable) -> None:
        ModelRemoved(instance).dispatch()

    def get_context(self, instance: Broadcastable, action: str, target: str) -> dict:
        return {
            "action": action,
            "target": target,
            "partial": instance.broadcast_partial_name(),
            "object": instance,
            instance._meta.model_name: instance,  # noqa: SLF001
        }

    def render(self, instance: Broadcastable, action: str, target: str) -> str:
        context = self.get_context(instance, action, target)
        return render_stream(self.template_name, context)

    def send(self, instance: Broadcastable, message: str) -> None:
        dispatch.send_now(instance.broadcast_channels(), {"message": message})
