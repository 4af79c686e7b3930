import pandas as pd
import numpy as np
import uuid

def generate_mock_participants(num_participants=6, num_restaurants=10,
                               participants_file="mock_participants.csv",
                               restaurants_file="mock_restaurants.csv",
                               missing_location_ratio=0.2):
    """
    Generates a group of friends scattered around a city plus a handful of
    candidate restaurants between them.
    Some participants are written without a location to exercise the
    "no coordinate" path of the aggregator.
    """
    # Center around Kolkata (same as the default camera region)
    CENTER_LAT = 22.5726
    CENTER_LON = 88.3639

    # 1. Participants within roughly 10km of the center
    participants = []
    for participant_index in range(num_participants):
        has_location = np.random.random() >= missing_location_ratio
        participants.append({
            "participant_id": f"p_{str(uuid.uuid4())[:8]}",
            "name": f"Friend {participant_index + 1}",
            "lat": np.round(CENTER_LAT + np.random.uniform(-0.09, 0.09), 6) if has_location else None,
            "lon": np.round(CENTER_LON + np.random.uniform(-0.09, 0.09), 6) if has_location else None,
        })

    # 2. Restaurants closer in (roughly 3km) so everyone has a fair drive
    restaurants = []
    for restaurant_index in range(num_restaurants):
        restaurants.append({
            "restaurant_id": f"r_{str(uuid.uuid4())[:8]}",
            "name": f"Restaurant {restaurant_index + 1}",
            "address": f"{np.random.randint(1, 200)} Park Street",
            "lat": np.round(CENTER_LAT + np.random.uniform(-0.03, 0.03), 6),
            "lon": np.round(CENTER_LON + np.random.uniform(-0.03, 0.03), 6),
        })

    pd.DataFrame(participants).to_csv(participants_file, index=False)
    pd.DataFrame(restaurants).to_csv(restaurants_file, index=False)

    located = sum(1 for p in participants if p["lat"] is not None)
    print(f"✅ Generated {num_participants} participants ({located} located) into '{participants_file}'")
    print(f"✅ Generated {num_restaurants} restaurants into '{restaurants_file}'")

if __name__ == "__main__":
    generate_mock_participants()
