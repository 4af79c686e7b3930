#Purpose: Route computation for downstream use (the Route Fetcher).
#Returns the "best route" between one participant and the destination:
#travel duration, travel distance and the polyline geometry for the map overlay.
#Uses OSRM /route (not /table), automobile profile, first candidate wins.
#Failures are an expected outcome here (no road connectivity, timeouts):
#they are logged and turned into None, never raised to the aggregator.

from __future__ import annotations

import logging
from typing import Optional

import requests

from routing.osrm_client import OSRMClient, OSRMError
from travel.aggregator import RouteFetcher
from travel.models import LatLon, Route

logger = logging.getLogger(__name__)


def fetch_route(client: OSRMClient, origin: LatLon, destination: LatLon) -> Optional[Route]:
    """
    One directions request, no retries, no caching.
    Returns None when OSRM errors, times out or finds no route.
    """
    try:
        result = client.compute_route([origin, destination], with_geometry=True)
    except requests.exceptions.RequestException as e:
        logger.warning(f"OSRM request failed for {origin} -> {destination}: {e}")
        return None
    except OSRMError as e:
        logger.warning(f"No route for {origin} -> {destination}: {e}")
        return None
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning(f"Could not parse OSRM route for {origin} -> {destination}: {e}")
        return None

    return Route(
        duration_s=result["duration"],
        distance_m=result["distance"],
        geometry=tuple(result["geometry"]),
    )


def route_fetcher_from_client(client: OSRMClient) -> RouteFetcher:
    """
    Binds an OSRMClient into the (origin, destination) -> Optional[Route]
    callable the aggregator expects.
    """
    def _fetch(origin: LatLon, destination: LatLon) -> Optional[Route]:
        return fetch_route(client, origin, destination)

    return _fetch
