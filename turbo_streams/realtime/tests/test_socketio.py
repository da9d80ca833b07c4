from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from django.test import override_settings
from rest_framework_simplejwt.tokens import AccessToken

from turbo_streams.realtime import socketio as realtime


def test_extract_token_from_asgi_scope():
    environ = {"asgi.scope": {"query_string": b"token=abc&EIO=4"}}

    assert realtime._extract_token(environ, None) == "abc"


def test_extract_token_from_wsgi_environ():
    assert realtime._extract_token({"QUERY_STRING": "token=xyz"}, None) == "xyz"


def test_extract_token_falls_back_to_auth():
    assert realtime._extract_token({}, {"token": "from-auth"}) == "from-auth"
    assert realtime._extract_token({}, {"token": ""}) is None


def test_connect_without_token_is_refused():
    with pytest.raises(ConnectionRefusedError, match="unauthorized"):
        async_to_sync(realtime.connect)("sid", {}, None)


@pytest.mark.django_db(transaction=True)
def test_connect_saves_user_in_session(user):
    token = str(AccessToken.for_user(user))

    with mock.patch.object(
        realtime.sio, "save_session", new_callable=mock.AsyncMock
    ) as save_session:
        async_to_sync(realtime.connect)("sid", {}, {"token": token})

    save_session.assert_awaited_once_with("sid", {"user_id": user.pk})


@pytest.mark.django_db
def test_connect_with_bad_token_is_refused():
    with pytest.raises(ConnectionRefusedError, match="unauthorized"):
        async_to_sync(realtime.connect)("sid", {}, {"token": "not-a-jwt"})


@pytest.fixture
def session():
    with (
        mock.patch.object(
            realtime.sio,
            "get_session",
            new_callable=mock.AsyncMock,
            return_value={"user_id": 1},
        ),
        mock.patch.object(
            realtime.sio, "enter_room", new_callable=mock.AsyncMock
        ) as enter_room,
        mock.patch.object(
            realtime.sio, "leave_room", new_callable=mock.AsyncMock
        ) as leave_room,
    ):
        yield mock.Mock(enter_room=enter_room, leave_room=leave_room)


def test_subscribe_joins_authorized_room(session):
    with mock.patch.object(
        realtime,
        "_authorize_subscription",
        new_callable=mock.AsyncMock,
        return_value=True,
    ) as authorize:
        reply = async_to_sync(realtime.subscribe)(
            "sid", {"channel": "private-boards.Board.1"}
        )

    assert reply == {"ok": True, "channel": "private-boards.Board.1"}
    authorize.assert_awaited_once_with(1, "private-boards.Board.1")
    session.enter_room.assert_awaited_once_with("sid", "private-boards.Board.1")


def test_subscribe_denied(session):
    with mock.patch.object(
        realtime,
        "_authorize_subscription",
        new_callable=mock.AsyncMock,
        return_value=False,
    ):
        reply = async_to_sync(realtime.subscribe)("sid", "private-boards.Board.2")

    assert reply["ok"] is False
    assert reply["error"] == "forbidden"
    session.enter_room.assert_not_awaited()


def test_subscribe_rejects_invalid_payload(session):
    reply = async_to_sync(realtime.subscribe)("sid", {"channel": "  "})

    assert reply == {"ok": False, "channel": None, "error": "invalid_channel"}


def test_unsubscribe_leaves_room(session):
    reply = async_to_sync(realtime.unsubscribe)("sid", {"channel": "lobby"})

    assert reply == {"ok": True, "channel": "lobby"}
    session.leave_room.assert_awaited_once_with("sid", "lobby")


def test_emit_event_to_room_uses_the_server():
    with mock.patch.object(
        realtime.sio, "emit", new_callable=mock.AsyncMock
    ) as emit:
        realtime.emit_event_to_room("lobby", "turbo-stream", {"message": "x"})

    emit.assert_awaited_once_with("turbo-stream", {"message": "x"}, room="lobby")


@override_settings(SOCKETIO_MESSAGE_QUEUE="redis://queue:6379/3")
def test_emit_event_to_room_publishes_through_write_only_manager():
    realtime._write_only_manager.cache_clear()
    with (
        mock.patch.object(realtime.socketio, "RedisManager") as redis_manager,
        mock.patch.object(realtime.sio, "emit", new_callable=mock.AsyncMock) as emit,
    ):
        realtime.emit_event_to_room("lobby", "turbo-stream", {"message": "x"})
        realtime.emit_event_to_room("lobby", "turbo-stream", {"message": "y"})
    realtime._write_only_manager.cache_clear()

    redis_manager.assert_called_once_with("redis://queue:6379/3", write_only=True)
    manager = redis_manager.return_value
    assert manager.emit.call_args_list == [
        mock.call("turbo-stream", {"message": "x"}, room="lobby"),
        mock.call("turbo-stream", {"message": "y"}, room="lobby"),
    ]
    emit.assert_not_awaited()


def test_extract_token_prefers_query_over_auth():
    environ = {"QUERY_STRING": "token=query"}

    assert realtime._extract_token(environ, {"token": "auth"}) == "query"
    assert realtime._extract_token(None, None) is None
