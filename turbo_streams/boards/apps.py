from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class BoardsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "turbo_streams.boards"
    verbose_name = _("Boards")

    def ready(self):
        import turbo_streams.boards.broadcasters  # noqa: F401, PLC0415
