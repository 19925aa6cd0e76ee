"""In-memory Store implementation."""

from .store import InMemoryStore

__all__ = [
    "InMemoryStore",
]
