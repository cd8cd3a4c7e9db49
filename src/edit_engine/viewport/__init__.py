"""Viewport scrolling and mouse coordinate mapping."""

from .mapper import STATUS_ROWS, Viewport, ViewportMapper, gutter_width_for

__all__ = ["STATUS_ROWS", "Viewport", "ViewportMapper", "gutter_width_for"]
