"""
Loads domain package.

Public API:
- Domain models: Load, LoadStatus
- Access: LoadRepository, InMemoryLoadRepository
"""
from .models import Load, LoadStatus
from .repository import InMemoryLoadRepository, LoadRepository

__all__ = [
    "Load",
    "LoadStatus",
    "LoadRepository",
    "InMemoryLoadRepository",
]
