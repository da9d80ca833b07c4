from __future__ import annotations

import logging
from typing import Any

from django.template.loader import render_to_string

from .exceptions import RenderError

logger = logging.getLogger(__name__)


def render_stream(template_name: str, context: dict[str, Any]) -> str:
    """Render a Turbo Stream fragment, raising ``RenderError`` on any fault."""
    try:
        return render_to_string(template_name, context)
    except Exception as exc:
        logger.warning("Rendering %s failed: %s", template_name, exc)
        msg = f"Cannot render {template_name}"
        raise RenderError(msg) from exc
