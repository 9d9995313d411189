"""Renderer module - turns tickets back into Markdown."""

from ticketr.renderer.serializer import TicketSerializer, serialize

__all__ = ["TicketSerializer", "serialize"]
