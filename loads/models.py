"""
Purpose: Domain models for the Loads capability.
What it does:
- Defines Load (id, pickup, drop, cargo type, weight in tons, status)
- Defines LoadStatus = Active | Bidding | Assigned | En Route | Delivered | Cancelled

Load status transitions belong to the load-lifecycle workflow, not to the
matching engine. The engine only reads loads.

Rule: No distance math, no scoring. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from routing.geo import Location
from trucks.models import TruckType


class LoadStatus(str, Enum):
    ACTIVE = "Active"
    BIDDING = "Bidding"
    ASSIGNED = "Assigned"
    EN_ROUTE = "En Route"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


@dataclass(frozen=True)
class Load:
    """
    A posted shipment. Immutable once posted.
    """
    id: str
    pickup: Location
    drop: Location
    cargo_type: TruckType
    weight_tons: float
    status: LoadStatus = LoadStatus.ACTIVE

    def __post_init__(self):
        if not self.weight_tons > 0:
            raise ValueError(f"Load {self.id}: weight_tons must be > 0, got {self.weight_tons}")

    @staticmethod # Factory that accepts loose cargo type strings from forms/CSV
    def new(
        load_id: str,
        pickup: Location,
        drop: Location,
        cargo_type: Union[str, TruckType],
        weight_tons: float,
        status: Union[str, LoadStatus] = LoadStatus.ACTIVE,
    ) -> Load:
        return Load(
            id=load_id,
            pickup=pickup,
            drop=drop,
            cargo_type=TruckType.parse(cargo_type),
            weight_tons=float(weight_tons),
            status=LoadStatus(status),
        )
