from __future__ import annotations

from dataclasses import dataclass

PRIVATE_PREFIX = "private-"


@dataclass(frozen=True)
class Channel:
    name: str
    private: bool = False

    def __str__(self) -> str:
        return self.broadcast_name

    @property
    def broadcast_name(self) -> str:
        if self.private:
            return f"{PRIVATE_PREFIX}{self.name}"
        return self.name


def private_channel(name: str) -> Channel:
    return Channel(name=name, private=True)


def parse_channel(broadcast_name: str) -> Channel:
    """Inverse of ``Channel.broadcast_name``."""
    if broadcast_name.startswith(PRIVATE_PREFIX):
        return private_channel(broadcast_name.removeprefix(PRIVATE_PREFIX))
    return Channel(name=broadcast_name)
