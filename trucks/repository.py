"""
Purpose: Read access to the fleet.
What it does:
Defines the TruckRepository interface the matching engine depends on and an
in-memory implementation used by tests, scripts and the simulation.

A real deployment plugs in its own storage-backed implementation; it should
raise core.errors.UpstreamUnavailableError when the store can't be reached.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol

from .models import Truck


class TruckRepository(Protocol):
    def get(self, truck_id: str) -> Optional[Truck]:
        ...

    def list_all(self) -> List[Truck]:
        ...


class InMemoryTruckRepository:
    """
    Dict-backed fleet snapshot, fixed at construction. Iteration order is
    insertion order.
    """

    def __init__(self, trucks: Iterable[Truck] = ()):
        self._trucks: Dict[str, Truck] = {}
        for truck in trucks:
            self._trucks[truck.id] = truck

    def get(self, truck_id: str) -> Optional[Truck]:
        return self._trucks.get(truck_id)

    def list_all(self) -> List[Truck]:
        return list(self._trucks.values())
