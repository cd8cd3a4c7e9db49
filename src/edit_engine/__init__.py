"""Terminal text editor core: byte-exact buffers, UTF-8 aware views, atomic saves."""

__all__ = [
    "adapters",
    "buffer",
    "controller",
    "display",
    "input",
    "runtime",
    "text",
    "viewport",
]

__version__ = "0.1.0"
