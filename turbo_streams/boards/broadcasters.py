from turbo_streams.broadcasting.broadcasters import ModelBroadcaster
from turbo_streams.broadcasting.registry import broadcasters

from .models import Board
from .models import Card


@broadcasters.register(Card)
class CardBroadcaster(ModelBroadcaster):
    # Newest cards first.
    create_action = "prepend"


broadcasters.register(Board, ModelBroadcaster)
