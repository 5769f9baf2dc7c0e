"""Storage module - key-value cache stores."""

from src.storage.cache_store import CacheStore, JsonFileStore, MemoryStore

__all__ = ["CacheStore", "JsonFileStore", "MemoryStore"]
