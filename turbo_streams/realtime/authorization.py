"""Authorization rules for private broadcast channels.

Apps register one callback per channel pattern in their ``channels.py``::

    @channel_authorizers.register("boards.Board.{pk}")
    def board_channel(user, pk):
        return Board.objects.filter(pk=pk, owner=user).exists()

Placeholders match a single dotted segment and are passed as keyword
arguments. Callbacks run in sync code and may hit the database; a
``ValueError`` or ``ValidationError`` from a callback denies the channel.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any

from django.core.exceptions import ValidationError

from turbo_streams.broadcasting.channels import parse_channel

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

Authorizer = Callable[..., Any]


def _compile(pattern: str) -> re.Pattern[str]:
    parts = []
    position = 0
    for match in _PLACEHOLDER.finditer(pattern):
        parts.append(re.escape(pattern[position : match.start()]))
        parts.append(f"(?P<{match.group(1)}>[^.]+)")
        position = match.end()
    parts.append(re.escape(pattern[position:]))
    return re.compile("".join(parts))


class ChannelAuthorizer:
    def __init__(self) -> None:
        self._rules: list[tuple[str, re.Pattern[str], Authorizer]] = []

    def register(self, pattern: str):
        def decorator(callback: Authorizer) -> Authorizer:
            self._rules.append((pattern, _compile(pattern), callback))
            return callback

        return decorator

    def clear(self) -> None:
        self._rules.clear()

    def authorize(self, user, broadcast_name: str) -> bool:
        channel = parse_channel(broadcast_name)
        if not channel.private:
            return True
        if user is None:
            return False

        for pattern, regex, callback in self._rules:
            match = regex.fullmatch(channel.name)
            if match is None:
                continue
            try:
                allowed = bool(callback(user, **match.groupdict()))
            except (ValueError, ValidationError) as exc:
                # Placeholder values come from the client, e.g. a non-numeric pk.
                logger.info("Denied malformed channel %s: %s", broadcast_name, exc)
                return False
            logger.debug(
                "Channel %s (%s) %s for user %s",
                broadcast_name,
                pattern,
                "allowed" if allowed else "denied",
                user.pk,
            )
            return allowed

        logger.info("No authorizer matches private channel %s", broadcast_name)
        return False


channel_authorizers = ChannelAuthorizer()
