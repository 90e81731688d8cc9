"""Small presentation helpers shared by the HTTP layer."""

__all__ = [
    "formatting",
]
