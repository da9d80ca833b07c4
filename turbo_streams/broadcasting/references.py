from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from django.apps import apps
from django.db import models


@dataclass(frozen=True)
class ModelReference:
    """Serializable pointer to a model row.

    Queued tasks receive one of these instead of a live instance, so every
    execution attempt loads the row fresh.
    """

    app_label: str
    model_name: str
    pk: Any

    @classmethod
    def of(cls, instance: models.Model) -> ModelReference:
        if instance.pk is None:
            msg = f"Cannot reference unsaved {instance._meta.label} instance"  # noqa: SLF001
            raise ValueError(msg)
        meta = instance._meta  # noqa: SLF001
        return cls(app_label=meta.app_label, model_name=meta.model_name, pk=instance.pk)

    @property
    def model(self) -> type[models.Model]:
        return apps.get_model(self.app_label, self.model_name)

    def as_args(self) -> tuple[str, str, Any]:
        return (self.app_label, self.model_name, self.pk)

    def resolve(self) -> models.Model:
        """Load the row; raises the model's ``DoesNotExist`` when it is gone."""
        return self.model._default_manager.get(pk=self.pk)  # noqa: SLF001
