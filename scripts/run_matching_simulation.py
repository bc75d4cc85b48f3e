"""
End-to-end Nearby Trucks run on a mock fleet:

1. load trucks from CSV
2. rank nearby trucks for a handful of loads under each sort option
3. fire duplicate quote requests from two threads per load and check only one lands
"""

import logging
import os
import sys
import threading
import time

from core.errors import DuplicateRequestError
from dispatch import MatchingEngine, SearchFilters, SortOption
from loads.models import Load
from loads.repository import InMemoryLoadRepository
from trucks.loader import load_trucks_csv
from trucks.repository import InMemoryTruckRepository

LOADS = [
    Load.new("LD-1001", "Pune", "Mumbai", "Container", 18),
    Load.new("LD-1002", "Pune, Maharashtra", "Nashik", "Dry Van", 8),
    Load.new("LD-1003", "Pune", "Bengaluru", "Refrigerated", 12),
    Load.new("LD-1004", "Atlantis", "Mumbai", "Open", 10),  # unknown pickup -> no trucks
]


def main(filepath="mock_trucks_100.csv"):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not os.path.exists(filepath):
        print(f"'{filepath}' not found. Run scripts/generate_mock_trucks.py first.")
        return 1

    print("=== STARTING NEARBY TRUCKS SIMULATION ===")
    trucks = load_trucks_csv(filepath)
    engine = MatchingEngine(InMemoryTruckRepository(trucks), InMemoryLoadRepository(LOADS))
    print(f"Loaded {len(trucks)} Trucks and {len(LOADS)} Loads.\n")

    filters = SearchFilters(radius_km=50, available_only=True)
    for load in LOADS:
        print(f"--- {load.id}: {load.cargo_type.value}, {load.weight_tons:g} t from {load.pickup} ---")
        for option in SortOption:
            start_time = time.time()
            results = engine.find_nearby_trucks(load, filters, option)
            elapsed_ms = (time.time() - start_time) * 1000
            top = ", ".join(f"{r.truck_id}({r.match_score}/{r.distance_km:.1f}km)" for r in results[:3])
            print(f"  {option.value:<10} {len(results):>3} trucks in {elapsed_ms:.1f}ms  top: {top or '-'}")

        summary = engine.summarize_nearby(load)
        print(f"  summary: {summary.count} available within 30km, top match {summary.top_match_score}")

        results = engine.find_nearby_trucks(load, filters)
        if not results:
            print("  no trucks found nearby.\n")
            continue

        winner = results[0]
        outcomes = []

        def tab():
            try:
                outcomes.append(engine.request_quote(winner.truck_id, load.id))
            except DuplicateRequestError:
                outcomes.append("duplicate")

        tabs = [threading.Thread(target=tab) for _ in range(2)]
        for t in tabs:
            t.start()
        for t in tabs:
            t.join()

        print(f"  two tabs requested a quote from {winner.truck_id}: {outcomes}")
        print(f"  active bids on {load.id}: {[b.id for b in engine.get_active_bids_for_load(load.id)]}\n")

    print("=== SIMULATION COMPLETE ===")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:]))
