"""Textual host: cell-grid terminal backend and the editor application."""

from .backend import TextualTerminal

__all__ = ["TextualTerminal"]
