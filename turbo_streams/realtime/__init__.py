"""Realtime infrastructure (Socket.IO).

Every Turbo Stream channel maps to one Socket.IO room named after the
channel's broadcast name (``private-boards.Board.1``). Browsers join rooms by
emitting ``subscribe``; private rooms are gated by channel authorizers.
"""
