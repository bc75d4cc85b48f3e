from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol

from .models import Load


class LoadRepository(Protocol):
    def get(self, load_id: str) -> Optional[Load]:
        ...


class InMemoryLoadRepository:
    """
    Dict-backed loads for tests and simulations.
    """

    def __init__(self, loads: Iterable[Load] = ()):
        self._loads: Dict[str, Load] = {load.id: load for load in loads}

    def get(self, load_id: str) -> Optional[Load]:
        return self._loads.get(load_id)

    def add(self, load: Load) -> None:
        self._loads[load.id] = load
