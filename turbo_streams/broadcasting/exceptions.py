class BroadcastingError(Exception):
    """Base class for broadcasting failures."""


class RenderError(BroadcastingError):
    """A Turbo Stream template is missing or failed to render."""


class BroadcasterResolutionError(BroadcastingError):
    """No broadcaster is configured for a model.

    Retrying cannot fix a missing configuration, so queued tasks never retry
    on this error.
    """


class TransportError(BroadcastingError):
    """The realtime transport or the task broker is unavailable."""
