"""Turbo Stream broadcasts for Django models.

Models opt in by subclassing :class:`~turbo_streams.broadcasting.models.Broadcastable`.
Deletions are announced immediately; creates and updates are queued on Celery
and rendered by the model's registered broadcaster.
"""
