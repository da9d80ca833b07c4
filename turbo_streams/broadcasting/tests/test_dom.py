import pytest
from django.contrib.auth import get_user_model

from turbo_streams.boards.models import Card
from turbo_streams.broadcasting.dom import dom_id
from turbo_streams.broadcasting.dom import dom_list_id

User = get_user_model()


def test_dom_id_uses_plural_name_and_pk():
    assert dom_id(User(pk=1)) == "users_1"


def test_dom_id_for_unsaved_instance():
    assert dom_id(Card()) == "new_card"


def test_dom_id_prefix():
    assert dom_id(Card(pk=4), prefix="Edit") == "edit_cards_4"


def test_dom_list_id_accepts_models_and_instances():
    assert dom_list_id(Card) == "cards"
    assert dom_list_id(Card(pk=2)) == "cards"


@pytest.mark.django_db
def test_dom_target_id_of_saved_card(card):
    assert card.dom_target_id() == f"cards_{card.pk}"
