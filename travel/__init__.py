"""
Purpose: Package entry + stable exports.
What it does:

Marks travel as a Python package and re-exports the public API so other
modules can do:

from travel import Participant, Destination, aggregate, reduce_viewport

Should not contain business logic.

Public API:
- Domain models: Participant, Destination, Route, TravelResultSet, Viewport, Region
- Aggregation: aggregate, aggregate_routes
- Viewport: reduce_viewport, region_for, initial_region
- Controller: TravelSession, TravelViewState
"""
from .models import (
    Destination,
    Participant,
    Region,
    Route,
    TravelEntry,
    TravelResultSet,
    Viewport,
    participant_key,
)
from .policy import TravelPolicy, default_travel_policy
from .aggregator import aggregate, aggregate_routes
from .viewport import bounding_box, reduce_viewport, region_for, initial_region
from .session import TravelSession, TravelViewState

__all__ = [
    "Destination",
    "Participant",
    "Region",
    "Route",
    "TravelEntry",
    "TravelResultSet",
    "Viewport",
    "participant_key",
    "TravelPolicy",
    "default_travel_policy",
    "aggregate",
    "aggregate_routes",
    "bounding_box",
    "reduce_viewport",
    "region_for",
    "initial_region",
    "TravelSession",
    "TravelViewState",
]
