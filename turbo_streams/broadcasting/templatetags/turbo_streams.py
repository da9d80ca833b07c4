from django import template
from django.utils.html import format_html_join

from turbo_streams.broadcasting import dom

register = template.Library()


@register.simple_tag
def dom_id(instance, prefix=""):
    """{% dom_id card %} -> cards_7"""
    return dom.dom_id(instance, prefix)


@register.simple_tag
def turbo_stream_from(*sources):
    """Render subscription markers for the channels of each source.

    The client script subscribes to every ``channel`` it finds on the page.
    """
    names = []
    for source in sources:
        channels = (
            source.broadcast_channels()
            if hasattr(source, "broadcast_channels")
            else [source]
        )
        names.extend(str(channel) for channel in channels)
    return format_html_join(
        "\n",
        '<turbo-stream-from channel="{}"></turbo-stream-from>',
        ((name,) for name in dict.fromkeys(names)),
    )
