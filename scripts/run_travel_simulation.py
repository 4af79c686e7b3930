import logging
import time
from typing import List

import pandas as pd

from routing.osrm_client import OSRMClient
from routing.route_service import route_fetcher_from_client
from travel.formatting import format_entry
from travel.meeting_point import optimal_meeting_point, rank_destinations
from travel.models import Destination, Participant
from travel.policy import default_travel_policy
from travel.session import TravelSession
from preferences.store import PreferenceStore

def load_participants(filepath="mock_participants.csv") -> List[Participant]:
    df = pd.read_csv(filepath)
    participants = []
    for _, row in df.iterrows():
        has_location = not (pd.isna(row["lat"]) or pd.isna(row["lon"]))
        participants.append(
            Participant.new(
                str(row["participant_id"]),
                str(row["name"]),
                float(row["lat"]) if has_location else None,
                float(row["lon"]) if has_location else None,
            )
        )
    return participants

def load_restaurants(filepath="mock_restaurants.csv") -> List[Destination]:
    df = pd.read_csv(filepath)
    return [
        Destination.new(str(row["name"]), float(row["lat"]), float(row["lon"]), address=str(row["address"]))
        for _, row in df.iterrows()
    ]

def run_simulation(participants_file="mock_participants.csv",
                   restaurants_file="mock_restaurants.csv",
                   preferences_file="preferences.json"):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    policy = default_travel_policy()
    osrm = OSRMClient(profile=policy.profile, timeout=policy.request_timeout_s)
    preferences = PreferenceStore(preferences_file)

    participants = load_participants(participants_file)
    restaurants = load_restaurants(restaurants_file)

    print("=== STARTING TRAVEL INFO SIMULATION ===")
    print(f"Loaded {len(participants)} Participants and {len(restaurants)} Restaurants.\n")

    meeting_point = optimal_meeting_point(participants)
    print(f"Fair meeting point: {meeting_point}")

    ranked = rank_destinations(osrm, participants, restaurants)
    if not ranked:
        print("[FAILED] No restaurant is reachable by the group.")
        return

    print("\n--- Restaurant Ranking (worst drive first) ---")
    for r in ranked[:5]:
        print(f"{r.destination.name}: worst {r.max_duration_s / 60:.1f} min, "
              f"total {r.total_duration_s / 60:.1f} min ({r.reachable_count} reachable)")

    session = TravelSession(participants, route_fetcher_from_client(osrm), policy)
    session.subscribe(lambda state: logging.getLogger(__name__).debug(
        f"state gen={state.generation} entries={len(state.travel_info)} routes={len(state.routes)}"
    ))

    best = ranked[0].destination
    start_time = time.time()
    state = session.select_destination(best)
    print(f"\nTravel info for {best.name} in {time.time() - start_time:.2f}s:")

    unit = preferences.distance_unit
    for entry in state.travel_info.sorted_by_duration():
        print(f"  {format_entry(entry, unit)}")

    missing = [p.name for p in participants if p not in state.travel_info]
    if missing:
        print(f"  No travel info for: {', '.join(missing)}")

    state = session.show_routes()
    region = session.camera_region()
    print(f"\nDrew {len(state.routes)} routes; camera center {region.center}, "
          f"span {region.span_lat:.4f} x {region.span_lon:.4f}")

    if state.travel_info:
        preferences.save_participants(participants)
        preferences.save_region(region)
        print(f"Saved participants and map region to '{preferences_file}'.")

    print("\n=== SIMULATION COMPLETE ===")

if __name__ == "__main__":
    run_simulation()
