from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class BroadcastingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "turbo_streams.broadcasting"
    verbose_name = _("Broadcasting")

    def ready(self):
        from turbo_streams.broadcasting.signals import (  # noqa: PLC0415
            connect_broadcastable_models,
        )

        connect_broadcastable_models()
