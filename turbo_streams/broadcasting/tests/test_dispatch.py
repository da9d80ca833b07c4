from unittest import mock

from django.test import override_settings

from turbo_streams.broadcasting.channels import Channel
from turbo_streams.broadcasting.channels import private_channel
from turbo_streams.broadcasting.dispatch import send_now


def test_send_now_emits_to_each_room(sent):
    send_now(
        [private_channel("boards.Board.1"), Channel("lobby")],
        {"message": "<turbo-stream></turbo-stream>"},
    )

    assert sent.call_args_list == [
        mock.call(
            "private-boards.Board.1",
            "turbo-stream",
            {
                "channel": "private-boards.Board.1",
                "message": "<turbo-stream></turbo-stream>",
            },
        ),
        mock.call(
            "lobby",
            "turbo-stream",
            {"channel": "lobby", "message": "<turbo-stream></turbo-stream>"},
        ),
    ]


def test_send_now_accepts_broadcast_names(sent):
    send_now(["private-boards.Board.2"], {"message": "x"})

    assert sent.call_args.args[0] == "private-boards.Board.2"


def test_send_now_without_channels_is_a_no_op(sent):
    send_now([], {"message": "x"})

    sent.assert_not_called()


@override_settings(TURBO_STREAMS={"EVENT_NAME": "stream"})
def test_event_name_is_configurable(sent):
    send_now(["lobby"], {"message": "x"})

    assert sent.call_args.args[1] == "stream"
