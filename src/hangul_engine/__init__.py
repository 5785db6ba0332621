"""Host-agnostic Hangul input method engine."""

__all__ = [
    "adapters",
    "buffer",
    "candidates",
    "composer",
    "config",
    "engine",
    "keys",
    "pipeline",
    "runtime",
    "session",
]

__version__ = "0.1.0"
