"""Textual front end for trying the engine in a terminal."""

from .controller import TextualHangulAdapter, TextualUIHooks, key_event_from_textual

__all__ = ["TextualHangulAdapter", "TextualUIHooks", "key_event_from_textual"]
