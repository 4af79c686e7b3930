"""
Purpose: Fair meeting point helpers.
What it does:
- optimal_meeting_point: spherical centroid of everyone's coordinate, used to
  center the restaurant search between participants.
- rank_destinations: orders candidate destinations by how long everyone
  needs to drive there, using one OSRM /table call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .aggregator import eligible_participants
from .models import Destination, LatLon, Participant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedDestination:
    destination: Destination
    total_duration_s: float
    max_duration_s: float
    reachable_count: int


def optimal_meeting_point(participants: Sequence[Participant]) -> Optional[LatLon]:
    """
    Mean of the participants' positions on the unit sphere, projected back to
    (lat, lon). Handles groups straddling the antimeridian, unlike a plain
    average of degrees. None when nobody has a coordinate.
    """
    located = eligible_participants(participants)
    if not located:
        return None

    coords = np.radians(np.array([p.coordinate for p in located], dtype=float))
    lat, lon = coords[:, 0], coords[:, 1]

    x = np.mean(np.cos(lat) * np.cos(lon))
    y = np.mean(np.cos(lat) * np.sin(lon))
    z = np.mean(np.sin(lat))

    # antipodal points cancel out; fall back to the first participant
    if np.isclose(np.hypot(x, y), 0.0) and np.isclose(z, 0.0):
        return located[0].coordinate

    center_lat = np.degrees(np.arctan2(z, np.hypot(x, y)))
    center_lon = np.degrees(np.arctan2(y, x))
    return (float(center_lat), float(center_lon))


def rank_destinations(
    osrm_client,
    participants: Sequence[Participant],
    destinations: Sequence[Destination],
) -> List[RankedDestination]:
    """
    Rank destinations by (unreachable participants, worst drive, total drive), best first.
    Destinations nobody can reach are dropped.
    """
    located = eligible_participants(participants)
    if not located or not destinations:
        return []

    table = osrm_client.compute_table(
        sources=[p.coordinate for p in located],
        destinations=[d.coordinate for d in destinations],
    )
    durations = np.array(
        [[np.nan if value is None else value for value in row] for row in table.get("durations", [])],
        dtype=float,
    )
    if durations.shape != (len(located), len(destinations)):
        logger.warning(
            f"OSRM table shape {durations.shape} does not match "
            f"{len(located)} participants x {len(destinations)} destinations"
        )
        return []

    ranked: List[RankedDestination] = []
    for index, destination in enumerate(destinations):
        column = durations[:, index]
        reachable = column[~np.isnan(column)]
        if reachable.size == 0:
            continue
        ranked.append(
            RankedDestination(
                destination=destination,
                total_duration_s=float(reachable.sum()),
                max_duration_s=float(reachable.max()),
                reachable_count=int(reachable.size),
            )
        )

    ranked.sort(
        key=lambda r: (
            -r.reachable_count, #everyone able to get there beats a faster partial group
            r.max_duration_s,
            r.total_duration_s,
        )
    )
    return ranked
