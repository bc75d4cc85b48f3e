"""
Purpose: Load a fleet snapshot from CSV (mock data, simulations, fixtures).
What it does:
Reads rows like

    truck_id,carrier_id,carrier_name,driver_name,license_plate,truck_type,
    load_capacity_tons,current_location,lat,lon,availability,reliability_score,
    documents_verified

into Truck objects. A row's location is (lat, lon) when both columns are
filled, otherwise the `current_location` place name.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from .models import Truck

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["truck_id", "truck_type", "load_capacity_tons"]

_TRUTHY = {"1", "true", "yes", "y", "t"}


def load_trucks_csv(path: Union[str, Path]) -> List[Truck]:
    df = pd.read_csv(path, dtype=str)

    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing required columns {missing}")

    trucks: List[Truck] = []
    for _, row in df.iterrows():
        location = _row_location(row)
        if location is None:
            logger.warning("Skipping truck %s: no location", row["truck_id"])
            continue

        trucks.append(
            Truck.new(
                str(row["truck_id"]),
                row["truck_type"],
                float(row["load_capacity_tons"]),
                location,
                carrier_id=_text(row, "carrier_id"),
                carrier_name=_text(row, "carrier_name"),
                driver_name=_text(row, "driver_name"),
                license_plate=_text(row, "license_plate"),
                availability=_text(row, "availability") or "Available",
                reliability_score=_number(row, "reliability_score", 0.0),
                documents_verified=_text(row, "documents_verified").lower() in _TRUTHY,
            )
        )

    logger.debug("Loaded %d trucks from %s", len(trucks), path)
    return trucks


def _text(row: pd.Series, column: str) -> str:
    if column not in row or pd.isna(row[column]):
        return ""
    return str(row[column]).strip()


def _number(row: pd.Series, column: str, default: float) -> float:
    if column not in row or pd.isna(row[column]):
        return default
    return float(row[column])


def _row_location(row: pd.Series):
    if "lat" in row and "lon" in row and not pd.isna(row["lat"]) and not pd.isna(row["lon"]):
        return (float(row["lat"]), float(row["lon"]))
    name = _text(row, "current_location")
    return name or None
