"""
Purpose: Central configuration for travel aggregation and camera framing.
What it does:

Stores all tunable thresholds/caps:

PROFILE = "driving" (automobile travel mode)
REQUEST_TIMEOUT_S = 10
MAX_WORKERS = None (one thread per located participant)
FALLBACK_CENTER = (22.5726, 88.3639), FALLBACK_SPAN = 0.5 degrees

Rule: No logic here—just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class TravelPolicy:
    """
    Central configuration for route fetching and viewport framing.
    """

    # --- Directions provider ---
    # OSRM profile; travel info is always computed for automobiles.
    profile: str = "driving"

    # How long one directions request may take before it counts as failed.
    request_timeout_s: float = 10

    # --- Fan-out ---
    # Optional cap on concurrent directions requests for one selection.
    # None starts every request at once (one thread per located participant).
    max_workers: Optional[int] = None

    # --- Camera fallback ---
    # Used when there is nothing to frame (no routes, no coordinates).
    fallback_center: Tuple[float, float] = (22.5726, 88.3639)
    fallback_span_degrees: float = 0.5

    # Extra margin around route bounding boxes, as a fraction of the span.
    viewport_padding_ratio: float = 0.0

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if not self.profile:
            raise ValueError("profile must be set")

        if self.request_timeout_s <= 0:
            raise ValueError("request_timeout_s must be > 0")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        if self.fallback_span_degrees <= 0:
            raise ValueError("fallback_span_degrees must be > 0")

        if self.viewport_padding_ratio < 0:
            raise ValueError("viewport_padding_ratio must be >= 0")

        lat, lon = self.fallback_center
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            raise ValueError("fallback_center must be a valid (lat, lon)")


def default_travel_policy() -> TravelPolicy:
    """
    Convenience factory for the default policy.
    """
    p = TravelPolicy()
    p.validate()
    return p
