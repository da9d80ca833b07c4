import pytest

from turbo_streams.boards.broadcasters import CardBroadcaster
from turbo_streams.boards.models import Board
from turbo_streams.boards.models import Card
from turbo_streams.broadcasting.broadcasters import ModelBroadcaster
from turbo_streams.broadcasting.channels import Channel
from turbo_streams.broadcasting.channels import private_channel
from turbo_streams.broadcasting.models import Broadcastable

pytestmark = pytest.mark.django_db


def test_rows_broadcast_on_their_own_private_channel(board):
    assert board.broadcasting_rule() == f"boards.Board.{board.pk}"
    assert board.broadcast_channels() == (
        private_channel(f"boards.Board.{board.pk}"),
    )
    assert str(board.broadcast_channels()[0]) == f"private-boards.Board.{board.pk}"


def test_broadcasts_to_relation_uses_parent_channels(card):
    assert card.broadcast_channels() == card.board.broadcast_channels()


def test_broadcasts_to_callable(card):
    def public_and_board(instance):
        return ["lobby", instance.board]

    card.__class__.broadcasts_to = public_and_board
    try:
        channels = card.broadcast_channels()
    finally:
        card.__class__.broadcasts_to = "board"

    assert channels == (
        Channel("lobby"),
        private_channel(f"boards.Board.{card.board_id}"),
    )


def test_partial_name(card):
    assert card.broadcast_partial_name() == "boards/_card.html"


def test_update_broadcaster_comes_from_the_registry(board, card):
    assert isinstance(card.update_broadcaster(), CardBroadcaster)
    assert type(board.update_broadcaster()) is ModelBroadcaster


def test_sample_models_are_broadcastable():
    assert issubclass(Board, Broadcastable)
    assert issubclass(Card, Broadcastable)
    assert Broadcastable._meta.abstract  # noqa: SLF001
