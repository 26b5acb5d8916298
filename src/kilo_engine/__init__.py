"""Terminal text editing engine: rows, viewport, compositor, and key decoding."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "editor",
    "input",
    "io",
    "keymaps",
    "modes",
    "runtime",
    "screen",
    "search",
]

__version__ = "0.1.0"
