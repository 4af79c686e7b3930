"""
Purpose: Domain models for the Travel capability.
What it does:
- Defines core data structures:
- Participant (id, name, optional (lat, lon))
- Destination (name, coordinate, address)
- Route (duration, distance, geometry)
- TravelResultSet (participant -> route, keyed by participant id)
- Viewport (two opposite corners, or unconstrained)
- Region (camera center + span)

Rule: No HTTP calls, no aggregation logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

LatLon = Tuple[float, float]


def validate_coordinate(lat: float, lon: float) -> LatLon:
    lat, lon = float(lat), float(lon)
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"latitude {lat} outside [-90, 90]")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"longitude {lon} outside [-180, 180]")
    return (lat, lon)


@dataclass(frozen=True, eq=False)
class Participant:
    """
    A person whose coordinate is used as a route origin.
    Identity is the id alone: two participants with the same id are the same
    entity even if name or coordinate differ.
    """
    id: str
    name: str
    coordinate: Optional[LatLon] = None

    @classmethod
    def new(
        cls,
        participant_id: str,
        name: str,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
    ) -> Participant:
        if (lat is None) != (lon is None):
            raise ValueError(
                f"Participant {participant_id} has a partial coordinate; pass both lat and lon or neither."
            )

        coordinate = validate_coordinate(lat, lon) if lat is not None else None
        return cls(id=str(participant_id), name=name, coordinate=coordinate)

    @property
    def has_coordinate(self) -> bool:
        return self.coordinate is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Participant):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def participant_key(participant: Participant) -> str:
    """Key extractor used by every participant-keyed mapping."""
    return participant.id


@dataclass(frozen=True)
class Destination:
    """
    The selected target location (e.g. a restaurant) for travel-time computation.
    """
    name: str
    coordinate: LatLon
    address: Optional[str] = None

    @classmethod
    def new(cls, name: str, lat: float, lon: float, address: Optional[str] = None) -> Destination:
        return cls(name=name, coordinate=validate_coordinate(lat, lon), address=address)


@dataclass(frozen=True)
class Viewport:
    """
    Bounding region defined by its south-west and north-east corners.
    Both corners None means "no constraint" (the caller picks its own camera).
    """
    south_west: Optional[LatLon] = None
    north_east: Optional[LatLon] = None

    @classmethod
    def unconstrained(cls) -> Viewport:
        return cls()

    @property
    def is_unconstrained(self) -> bool:
        return self.south_west is None or self.north_east is None

    @property
    def center(self) -> Optional[LatLon]:
        if self.is_unconstrained:
            return None
        return (
            (self.south_west[0] + self.north_east[0]) / 2,
            (self.south_west[1] + self.north_east[1]) / 2,
        )

    @property
    def span(self) -> Tuple[float, float]:
        """(latitude delta, longitude delta); (0, 0) when unconstrained."""
        if self.is_unconstrained:
            return (0.0, 0.0)
        return (
            self.north_east[0] - self.south_west[0],
            self.north_east[1] - self.south_west[1],
        )

    def union(self, other: Viewport) -> Viewport:
        # interval union per axis; unconstrained is the identity
        if self.is_unconstrained:
            return other
        if other.is_unconstrained:
            return self
        return Viewport(
            south_west=(
                min(self.south_west[0], other.south_west[0]),
                min(self.south_west[1], other.south_west[1]),
            ),
            north_east=(
                max(self.north_east[0], other.north_east[0]),
                max(self.north_east[1], other.north_east[1]),
            ),
        )


@dataclass(frozen=True)
class Region:
    """Camera region: center plus latitude/longitude span in degrees."""
    center: LatLon
    span_lat: float
    span_lon: float


@dataclass(frozen=True)
class Route:
    """
    One computed path between a participant and the destination.
    geometry is the ordered (lat, lon) polyline.
    """
    duration_s: float
    distance_m: float
    geometry: Tuple[LatLon, ...] = ()


@dataclass(frozen=True)
class TravelEntry:
    participant: Participant
    route: Route


@dataclass(frozen=True)
class TravelResultSet:
    """
    Per-selection mapping from participant to route.
    Built fresh on every destination selection, never merged across selections.
    """
    _entries: Dict[str, TravelEntry] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> TravelResultSet:
        return cls()

    @classmethod
    def from_pairs(cls, pairs: List[Tuple[Participant, Route]]) -> TravelResultSet:
        entries: Dict[str, TravelEntry] = {}
        for participant, route in pairs:
            # keys are unique; first pair for an id wins
            entries.setdefault(participant_key(participant), TravelEntry(participant, route))
        return cls(_entries=entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[TravelEntry]:
        return iter(self._entries.values())

    def __contains__(self, participant: object) -> bool:
        if not isinstance(participant, Participant):
            return False
        return participant_key(participant) in self._entries

    def get(self, participant: Participant) -> Optional[Route]:
        entry = self._entries.get(participant_key(participant))
        return entry.route if entry else None

    def participant_ids(self) -> List[str]:
        return list(self._entries.keys())

    def routes(self) -> List[Route]:
        return [entry.route for entry in self._entries.values()]

    def sorted_by_duration(self) -> List[TravelEntry]:
        return sorted(
            self._entries.values(),
            key=lambda entry: (entry.route.duration_s, entry.participant.id),
        )
