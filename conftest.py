from unittest import mock

import pytest

from turbo_streams.boards.models import Board
from turbo_streams.boards.models import Card


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        username="owner",
        password="TestPass123!",  # noqa: S106
    )


@pytest.fixture
def board(user) -> Board:
    return Board.objects.create(owner=user, name="Roadmap")


@pytest.fixture
def card(board) -> Card:
    return Card.objects.create(board=board, title="Ship it")


@pytest.fixture
def sent():
    """Capture Socket.IO emits instead of hitting the server."""
    with mock.patch(
        "turbo_streams.broadcasting.dispatch.emit_event_to_room"
    ) as emit_event_to_room:
        yield emit_event_to_room
