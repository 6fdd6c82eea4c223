"""
Adapters layer - Storage implementations of the service interfaces.
"""

from .json_store import JsonFileStore
from .memory_store import InMemoryStore

__all__ = ["InMemoryStore", "JsonFileStore"]
