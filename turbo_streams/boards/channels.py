from turbo_streams.realtime.authorization import channel_authorizers

from .models import Board


@channel_authorizers.register("boards.Board.{pk}")
def board_channel(user, pk):
    return Board.objects.filter(pk=pk, owner=user).exists()
