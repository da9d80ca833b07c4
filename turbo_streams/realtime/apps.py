from django.apps import AppConfig
from django.utils.module_loading import autodiscover_modules
from django.utils.translation import gettext_lazy as _


class RealtimeConfig(AppConfig):
    name = "turbo_streams.realtime"
    verbose_name = _("Realtime")

    def ready(self):
        # Each app declares its private channel authorizers in `channels.py`.
        autodiscover_modules("channels")
