"""
Purpose: Core data models for the trucks domain.
What it does:
Defines the structure of a Truck, its type and availability without relying
on any ORM. TruckType is shared with loads: a load's cargo type and a truck's
body type are drawn from the same enum.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from routing.geo import Location


class TruckType(str, Enum):
    """
    Body/equipment type. Values are the labels shippers see in the app.
    """
    DRY_VAN = "Dry Van"
    FLATBED = "Flatbed"
    REFRIGERATED = "Refrigerated"
    CONTAINER = "Container"
    OPEN = "Open"
    FT_32 = "32FT"
    FT_20 = "20FT"
    TANKER = "Tanker"

    @classmethod
    def parse(cls, value: Union[str, "TruckType"]) -> "TruckType":
        """
        Accepts the display value ("Dry Van"), the member name ("DRY_VAN")
        or snake/camel variants ("dry_van", "DryVan"), case-insensitively.

        Raises ValueError for anything else.
        """
        if isinstance(value, TruckType):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown truck type: {value!r}")

        wanted = _squash(value)
        for member in cls:
            if wanted in (_squash(member.value), _squash(member.name)):
                return member
        raise ValueError(f"Unknown truck type: {value!r}")


def _squash(text: str) -> str:
    return re.sub(r"[^a-z0-9]", "", text.lower())


class AvailabilityStatus(str, Enum):
    AVAILABLE = "Available"
    EN_ROUTE = "En Route"
    BUSY = "Busy"

    @classmethod
    def parse(cls, value: Union[str, "AvailabilityStatus"]) -> "AvailabilityStatus":
        if isinstance(value, AvailabilityStatus):
            return value
        wanted = _squash(str(value))
        for member in cls:
            if wanted in (_squash(member.value), _squash(member.name)):
                return member
        raise ValueError(f"Unknown availability status: {value!r}")


@dataclass(frozen=True)
class Truck:
    """
    A stateless snapshot of a truck as the marketplace sees it right now.

    reliability_score is the carrier-level reputation (0-100), maintained by the
    ratings workflow; this engine only reads it.
    """
    id: str
    carrier_id: str
    carrier_name: str
    driver_name: str
    license_plate: str
    truck_type: TruckType
    load_capacity_tons: float
    current_location: Location
    availability: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    reliability_score: float = 0.0
    documents_verified: bool = False

    def __post_init__(self):
        #written as "not (in range)" so NaN is rejected too
        if not 0.0 <= self.reliability_score <= 100.0:
            raise ValueError(f"Truck {self.id}: reliability_score must be within 0-100, got {self.reliability_score}")
        if not self.load_capacity_tons >= 0.0:
            raise ValueError(f"Truck {self.id}: load_capacity_tons must be >= 0, got {self.load_capacity_tons}")

    @classmethod
    def new(
        cls,
        truck_id: str,
        truck_type: Union[str, TruckType],
        load_capacity_tons: float,
        current_location: Location,
        *,
        carrier_id: str = "",
        carrier_name: str = "",
        driver_name: str = "",
        license_plate: str = "",
        availability: Union[str, AvailabilityStatus] = AvailabilityStatus.AVAILABLE,
        reliability_score: float = 0.0,
        documents_verified: bool = False,
    ) -> Truck:
        return cls(
            id=truck_id,
            carrier_id=carrier_id or truck_id,
            carrier_name=carrier_name,
            driver_name=driver_name,
            license_plate=license_plate,
            truck_type=TruckType.parse(truck_type),
            load_capacity_tons=float(load_capacity_tons),
            current_location=current_location,
            availability=AvailabilityStatus.parse(availability),
            reliability_score=float(reliability_score),
            documents_verified=documents_verified,
        )

    @property
    def is_available(self) -> bool:
        return self.availability == AvailabilityStatus.AVAILABLE
