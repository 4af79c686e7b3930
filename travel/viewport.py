"""
Purpose: Viewport reduction for camera framing.
What it does:
Computes the bounding box of every route geometry and unions them into the
single region the map camera should show. Also turns a viewport into a
camera Region, falling back to the policy's default region when there is
nothing to frame.

Pure functions only: same routes in, same box out, regardless of order.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .models import LatLon, Region, Route, Viewport
from .policy import TravelPolicy, default_travel_policy


def bounding_box(geometry: Iterable[LatLon]) -> Viewport:
    """
    Min/max latitude and longitude over all points; unconstrained when empty.
    """
    points = list(geometry)
    if not points:
        return Viewport.unconstrained()

    latitudes = [lat for lat, _ in points]
    longitudes = [lon for _, lon in points]
    return Viewport(
        south_west=(min(latitudes), min(longitudes)),
        north_east=(max(latitudes), max(longitudes)),
    )


def reduce_viewport(routes: Iterable[Route]) -> Viewport:
    """
    Union of the per-route bounding boxes (min of mins, max of maxes).
    reduce_viewport([]) is Viewport.unconstrained().
    """
    viewport = Viewport.unconstrained()
    for route in routes:
        viewport = viewport.union(bounding_box(route.geometry))
    return viewport


def padded(viewport: Viewport, ratio: float) -> Viewport:
    """Grow the viewport by ratio * span on every side, clamped to valid coordinates."""
    if viewport.is_unconstrained or ratio <= 0:
        return viewport

    span_lat, span_lon = viewport.span
    pad_lat = span_lat * ratio
    pad_lon = span_lon * ratio
    return Viewport(
        south_west=(max(-90.0, viewport.south_west[0] - pad_lat), max(-180.0, viewport.south_west[1] - pad_lon)),
        north_east=(min(90.0, viewport.north_east[0] + pad_lat), min(180.0, viewport.north_east[1] + pad_lon)),
    )


def fallback_region(policy: Optional[TravelPolicy] = None) -> Region:
    policy = policy or default_travel_policy()
    return Region(
        center=policy.fallback_center,
        span_lat=policy.fallback_span_degrees,
        span_lon=policy.fallback_span_degrees,
    )


def region_for(viewport: Viewport, policy: Optional[TravelPolicy] = None) -> Region:
    """
    Camera region covering the viewport (with the policy's padding),
    or the fallback region when the viewport is unconstrained.
    """
    policy = policy or default_travel_policy()
    if viewport.is_unconstrained:
        return fallback_region(policy)

    framed = padded(viewport, policy.viewport_padding_ratio)
    span_lat, span_lon = framed.span
    return Region(center=framed.center, span_lat=span_lat, span_lon=span_lon)


def initial_region(coordinates: Sequence[LatLon], policy: Optional[TravelPolicy] = None) -> Region:
    """
    Initial camera before any selection: everything we know about
    (destinations + located participants), or the fallback region if nothing.
    """
    return region_for(bounding_box(coordinates), policy)
