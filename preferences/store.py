"""
Purpose: Thin key-value persistence for user preferences.
What it does:
Keeps a small JSON document on disk with:
- lastPeopleInput: last participant list of a successful search
- mapRegion: last camera region
- distanceUnit: "Kilometers" | "Miles"

Rule: The travel engine never reads or writes this; screens do.
Decoding problems are logged and treated as "nothing saved".
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from travel.formatting import DistanceUnit
from travel.models import Participant, Region

logger = logging.getLogger(__name__)

PEOPLE_INPUT_KEY = "lastPeopleInput"
MAP_REGION_KEY = "mapRegion"
DISTANCE_UNIT_KEY = "distanceUnit"


class PreferenceStore:
    def __init__(self, path: str):
        self.path = path

    # --- raw key-value access ---

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read preferences from {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Any:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value

        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        # write-then-rename so a crash never leaves half a file behind
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    # --- participants ---

    def save_participants(self, participants: List[Participant]) -> None:
        self.set(PEOPLE_INPUT_KEY, [
            {
                "id": p.id,
                "name": p.name,
                "latitude": p.coordinate[0] if p.coordinate else None,
                "longitude": p.coordinate[1] if p.coordinate else None,
            }
            for p in participants
        ])

    def load_participants(self) -> Optional[List[Participant]]:
        raw = self.get(PEOPLE_INPUT_KEY)
        if raw is None:
            return None
        try:
            return [
                Participant.new(item["id"], item["name"], item.get("latitude"), item.get("longitude"))
                for item in raw
            ]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to load participants from preferences: {e}")
            return None

    # --- map region ---

    def save_region(self, region: Region) -> None:
        self.set(MAP_REGION_KEY, {
            "latitude": region.center[0],
            "longitude": region.center[1],
            "latitudeDelta": region.span_lat,
            "longitudeDelta": region.span_lon,
        })

    def load_region(self) -> Optional[Region]:
        raw = self.get(MAP_REGION_KEY)
        if raw is None:
            return None
        try:
            return Region(
                center=(float(raw["latitude"]), float(raw["longitude"])),
                span_lat=float(raw["latitudeDelta"]),
                span_lon=float(raw["longitudeDelta"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Error loading map region: {e}")
            return None

    # --- distance unit ---

    @property
    def distance_unit(self) -> DistanceUnit:
        raw = self.get(DISTANCE_UNIT_KEY)
        try:
            return DistanceUnit(raw) if raw is not None else DistanceUnit.KILOMETERS
        except ValueError:
            logger.warning(f"Unknown distance unit {raw!r}, using kilometers")
            return DistanceUnit.KILOMETERS

    @distance_unit.setter
    def distance_unit(self, unit: DistanceUnit) -> None:
        self.set(DISTANCE_UNIT_KEY, DistanceUnit(unit).value)
