"""
Trucks domain package.

Public API:
- Domain models: Truck, TruckType, AvailabilityStatus
- Fleet access: TruckRepository, InMemoryTruckRepository
- CSV snapshots: load_trucks_csv
"""
from .models import AvailabilityStatus, Truck, TruckType
from .repository import InMemoryTruckRepository, TruckRepository
from .loader import load_trucks_csv

__all__ = [
    "Truck",
    "TruckType",
    "AvailabilityStatus",
    "TruckRepository",
    "InMemoryTruckRepository",
    "load_trucks_csv",
]
