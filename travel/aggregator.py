"""
Purpose: The parallel travel-info aggregator (fan-out / fan-in).
What it does:

- drops participants without a coordinate (they never reach the provider)
- submits one route fetch per remaining participant, all at once
- collects results in completion order
- builds a TravelResultSet keyed by participant id, silently omitting
  participants whose fetch came back empty or raised

Rule: Stateless. Every call gets its full input and returns its full output;
superseding stale selections is the caller's job (see travel/session.py).
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence

from .models import Destination, LatLon, Participant, Route, TravelResultSet, participant_key
from .policy import TravelPolicy, default_travel_policy

logger = logging.getLogger(__name__)

RouteFetcher = Callable[[LatLon, LatLon], Optional[Route]]


def eligible_participants(participants: Sequence[Participant]) -> List[Participant]:
    """
    Participants with a coordinate, first occurrence per id.
    """
    seen = set()
    eligible = []

    for participant in participants:
        if not participant.has_coordinate:
            continue

        key = participant_key(participant)
        if key in seen:
            continue

        seen.add(key)
        eligible.append(participant)

    return eligible


def aggregate(
    participants: Sequence[Participant],
    destination: Optional[Destination],
    *,
    route_fetcher: RouteFetcher,
    policy: Optional[TravelPolicy] = None,
) -> TravelResultSet:
    """
    Main aggregation entry point.

    Parameters
    ----------
    participants:
        Read-only snapshot owned by the caller.
    destination:
        Selected destination, or None when nothing is selected (no-op).
    route_fetcher:
        (origin, destination) -> Optional[Route]. Usually
        routing.route_fetcher_from_client(OSRMClient(...)).
    policy:
        TravelPolicy; only max_workers (optional concurrency cap) is used here.

    Returns
    -------
    TravelResultSet:
        one entry per participant whose route was found. Empty when the
        destination is unset, nobody has a coordinate or every fetch failed.
    """
    policy = policy or default_travel_policy()

    if destination is None:
        return TravelResultSet.empty()

    eligible = eligible_participants(participants)
    if not eligible:
        return TravelResultSet.empty()

    found: Dict[str, Route] = {}
    by_id = {participant_key(p): p for p in eligible}

    # one thread per participant so every request is in flight at once, unless the policy caps it
    pool_size = len(eligible) if policy.max_workers is None else min(policy.max_workers, len(eligible))

    with ThreadPoolExecutor(max_workers=pool_size) as executor:
        futures = {
            executor.submit(route_fetcher, participant.coordinate, destination.coordinate): participant_key(participant)
            for participant in eligible
        }

        # fan-in: wait for every future, in whatever order they settle
        for future in as_completed(futures):
            key = futures[future]
            try:
                route = future.result()
            except Exception as e:
                # one participant failing never aborts the siblings
                logger.warning(f"Route fetch for participant {key} raised: {e}")
                continue

            if route is None:
                logger.debug(f"No route for participant {key} to {destination.name}")
                continue

            found[key] = route

    # build in submission order so the mapping does not depend on arrival order
    result = TravelResultSet.from_pairs(
        [(by_id[key], found[key]) for key in by_id if key in found]
    )
    logger.info(
        f"Travel info for {destination.name}: {len(result)}/{len(eligible)} routes found"
    )
    return result


def aggregate_routes(
    participants: Sequence[Participant],
    destination: Optional[Destination],
    *,
    route_fetcher: RouteFetcher,
    policy: Optional[TravelPolicy] = None,
) -> List[Route]:
    """
    Polyline-only variant: same per-participant fetch, routes only,
    ordered by participant id.
    """
    result = aggregate(participants, destination, route_fetcher=route_fetcher, policy=policy)
    return [entry.route for entry in sorted(result, key=lambda entry: entry.participant.id)]
