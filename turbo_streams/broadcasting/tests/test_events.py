import pytest

from turbo_streams.broadcasting.channels import private_channel
from turbo_streams.broadcasting.events import ModelRemoved
from turbo_streams.broadcasting.exceptions import RenderError
from turbo_streams.broadcasting.exceptions import TransportError


class StubUser:
    """Anything exposing channels and a DOM id can be removed."""

    def __init__(self, pk):
        self.pk = pk

    def broadcast_channels(self):
        return (private_channel(f"users.User.{self.pk}"),)

    def dom_target_id(self):
        return f"users_{self.pk}"


class MissingTemplateRemoved(ModelRemoved):
    template_name = "turbo_streams/does_not_exist.html"


def test_default_action_is_remove():
    assert ModelRemoved(StubUser(1)).action == "remove"


def test_render_binds_target_and_action():
    message = ModelRemoved(StubUser(1), "remove").render()

    assert 'target="users_1"' in message
    assert 'action="remove"' in message
    assert message.strip().startswith("<turbo-stream")


def test_payload_message_uses_given_action():
    payload = ModelRemoved(StubUser(3), "fade-out").broadcast_with()

    assert set(payload) == {"message"}
    assert "users_3" in payload["message"]
    assert 'action="fade-out"' in payload["message"]


def test_channels_are_the_entity_channels():
    user = StubUser(5)

    assert ModelRemoved(user).broadcast_on() == user.broadcast_channels()


@pytest.mark.parametrize("action", ["", None, 42])
def test_action_must_be_a_non_empty_string(action):
    with pytest.raises(ValueError, match="non-empty"):
        ModelRemoved(StubUser(1), action)


def test_missing_template_raises_render_error(sent):
    event = MissingTemplateRemoved(StubUser(1))

    with pytest.raises(RenderError):
        event.broadcast_with()
    with pytest.raises(RenderError):
        event.dispatch()
    sent.assert_not_called()


def test_dispatch_sends_payload_on_every_channel(sent):
    event = ModelRemoved(StubUser(9))

    event.dispatch()

    sent.assert_called_once()
    room, name, payload = sent.call_args.args
    assert room == "private-users.User.9"
    assert name == "turbo-stream"
    assert payload["channel"] == "private-users.User.9"
    assert 'target="users_9"' in payload["message"]


def test_dispatch_surfaces_transport_failures(sent):
    sent.side_effect = RuntimeError("socket server gone")

    with pytest.raises(TransportError) as excinfo:
        ModelRemoved(StubUser(1)).dispatch()
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.django_db
def test_removing_a_card_targets_its_dom_id(card):
    message = ModelRemoved(card).render()

    assert f'target="cards_{card.pk}"' in message
    assert ModelRemoved(card).broadcast_on() == card.board.broadcast_channels()
