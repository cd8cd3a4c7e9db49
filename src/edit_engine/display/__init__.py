"""Display seam: the terminal protocol and the frame renderer."""

from .renderer import NO_NAME, Renderer
from .terminal import TerminalBackend

__all__ = ["NO_NAME", "Renderer", "TerminalBackend"]
