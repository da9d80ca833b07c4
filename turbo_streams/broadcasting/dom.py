from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.db import models

_NON_WORD = re.compile(r"[^0-9a-zA-Z]+")


def _snake(value: str) -> str:
    return _NON_WORD.sub("_", str(value)).strip("_").lower()


def dom_list_id(model: type[models.Model] | models.Model) -> str:
    """Id of the element that holds every rendered instance of ``model``.

    ``User`` -> ``users``.
    """
    return _snake(model._meta.verbose_name_plural)  # noqa: SLF001


def dom_id(instance: models.Model, prefix: str = "") -> str:
    """Id of the element rendering ``instance``.

    ``User(pk=1)`` -> ``users_1``; unsaved instances -> ``new_user``.
    """
    if instance.pk is None:
        identifier = f"new_{_snake(instance._meta.verbose_name)}"  # noqa: SLF001
    else:
        identifier = f"{dom_list_id(instance)}_{instance.pk}"
    if prefix:
        return f"{_snake(prefix)}_{identifier}"
    return identifier
