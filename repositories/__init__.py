"""
Repository layer - abstracts persistence.

Usage:
    from repositories import get_repository

    repo = get_repository()  # Returns configured backend
    repo.participants.save(participant)
    repo.teams.max_id()

Backends are swappable via config. The controller never calls
get_repository() itself - the repository is handed to it.
"""

from config import STORAGE_BACKEND
from .base import Repository
from .json_backend import JsonRepository
from .memory_backend import MemoryRepository

# Default backend - can be changed via config
_backend: str = STORAGE_BACKEND
_options: dict = {}
_instance: Repository = None


def get_repository() -> Repository:
    """Get the configured repository instance."""
    global _instance

    if _instance is None:
        if _backend == "json":
            _instance = JsonRepository(**_options)
        elif _backend == "memory":
            _instance = MemoryRepository()
        else:
            raise ValueError(f"Unknown backend: {_backend}")

    return _instance


def configure_backend(backend: str, **kwargs) -> None:
    """Configure the repository backend."""
    global _backend, _options, _instance
    _backend = backend
    _options = kwargs
    _instance = None  # Force re-initialization


__all__ = ["get_repository", "configure_backend", "Repository", "JsonRepository", "MemoryRepository"]
