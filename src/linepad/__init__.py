"""Single-cursor, line-oriented text editing core with a Textual front end."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "runtime",
]

__version__ = "0.1.0"
