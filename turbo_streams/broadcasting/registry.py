"""Broadcaster lookup per model class.

Each broadcastable model type is paired with the object that renders and sends
its create/update streams. Lookups walk the model's MRO, so registering an
abstract parent covers its children. When nothing is registered the
``TURBO_STREAMS["DEFAULT_BROADCASTER"]`` dotted path is used, if set.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any
from typing import Protocol

from django.utils.module_loading import import_string

from .conf import broadcast_settings
from .exceptions import BroadcasterResolutionError

if TYPE_CHECKING:
    from django.db import models

logger = logging.getLogger(__name__)


class Broadcaster(Protocol):
    def create(self, instance: models.Model) -> None: ...

    def update(self, instance: models.Model) -> None: ...


class BroadcasterRegistry:
    def __init__(self) -> None:
        self._registry: dict[type, Broadcaster] = {}
        self._defaults: dict[str, Broadcaster] = {}

    def register(self, model: type[models.Model], broadcaster: Any = None):
        """Register ``broadcaster`` for ``model``.

        Without ``broadcaster`` this returns a class decorator; the decorated
        class is instantiated with no arguments.
        """
        if broadcaster is None:

            def decorator(broadcaster_class):
                self._registry[model] = broadcaster_class()
                return broadcaster_class

            return decorator

        if isinstance(broadcaster, type):
            broadcaster = broadcaster()
        self._registry[model] = broadcaster
        return broadcaster

    def unregister(self, model: type[models.Model]) -> None:
        self._registry.pop(model, None)

    def clear(self) -> None:
        self._registry.clear()
        self._defaults.clear()

    def is_registered(self, model: type[models.Model]) -> bool:
        return model in self._registry

    def resolve(self, model_or_instance: Any) -> Broadcaster:
        model = (
            model_or_instance
            if isinstance(model_or_instance, type)
            else type(model_or_instance)
        )
        for klass in model.__mro__:
            if klass in self._registry:
                return self._registry[klass]

        default = self._default_broadcaster()
        if default is not None:
            return default

        msg = f"No broadcaster configured for {model.__module__}.{model.__qualname__}"
        raise BroadcasterResolutionError(msg)

    def _default_broadcaster(self) -> Broadcaster | None:
        path = broadcast_settings()["DEFAULT_BROADCASTER"]
        if not path:
            return None
        if path not in self._defaults:
            try:
                target = import_string(path)
            except ImportError as exc:
                msg = f"DEFAULT_BROADCASTER {path!r} cannot be imported"
                raise BroadcasterResolutionError(msg) from exc
            self._defaults[path] = target() if isinstance(target, type) else target
            logger.debug("Loaded default broadcaster %s", path)
        return self._defaults[path]


broadcasters = BroadcasterRegistry()
