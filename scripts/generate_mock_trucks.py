import numpy as np
import pandas as pd

from routing.gazetteer import CITY_COORDINATES
from trucks.models import AvailabilityStatus, TruckType

CARRIERS = [
    ("CAR-001", "Shree Ganesh Roadlines"),
    ("CAR-002", "Western Freight Carriers"),
    ("CAR-003", "Deccan Logistics"),
    ("CAR-004", "Sahyadri Transport Co."),
    ("CAR-005", "Konkan Cargo Movers"),
]

DRIVERS = ["Ramesh Patil", "Suresh Yadav", "Imran Shaikh", "Gurpreet Singh", "Anil Jadhav", "Manoj Kumar"]

CAPACITIES_TONS = [5, 7.5, 9, 10, 12, 16, 20, 25, 32]


def generate_mock_trucks(num_trucks=100, hubs=("pune", "mumbai"), output_file="mock_trucks_100.csv", seed=None):
    """
    Generates a fleet snapshot scattered around a few hub cities, so that a
    load posted at a hub has a realistic mix of near, far, busy and
    mismatched trucks to rank.
    """
    if seed is not None:
        np.random.seed(seed)

    data = []
    for truck_index in range(num_trucks):
        hub = np.random.choice(hubs)
        hub_lat, hub_lon = CITY_COORDINATES[hub]
        carrier_id, carrier_name = CARRIERS[np.random.randint(len(CARRIERS))]

        # Trucks within roughly +/- 60km of the hub (0.55 degrees)
        lat = hub_lat + np.random.uniform(-0.55, 0.55)
        lon = hub_lon + np.random.uniform(-0.55, 0.55)

        data.append({
            "truck_id": f"TRK-{str(truck_index+1).zfill(3)}",
            "carrier_id": carrier_id,
            "carrier_name": carrier_name,
            "driver_name": np.random.choice(DRIVERS),
            "license_plate": f"MH{np.random.randint(1, 51):02d} {''.join(np.random.choice(list('ABCDEFGH'), 2))} {np.random.randint(1000, 9999)}",
            "truck_type": np.random.choice([t.value for t in TruckType]),
            "load_capacity_tons": np.random.choice(CAPACITIES_TONS),
            "current_location": hub.title(),
            "lat": np.round(lat, 6),
            "lon": np.round(lon, 6),
            "availability": np.random.choice(
                [s.value for s in AvailabilityStatus], p=[0.7, 0.15, 0.15]
            ),
            "reliability_score": np.random.randint(55, 100),
            "documents_verified": np.random.choice([True, False], p=[0.85, 0.15]),
        })

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_trucks} trucks and saved to '{output_file}'")

    print("\nFleet by availability:")
    for status, count in df["availability"].value_counts().items():
        print(f"  {status}: {count}")


if __name__ == "__main__":
    generate_mock_trucks(num_trucks=100)
