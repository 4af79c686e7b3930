"""
Purpose: Selection controller (the "glue" between a map screen and the engine).
What it does:
Owns the travel view state for one screen. Each destination selection starts a
fresh fetch -> aggregate -> reduce cycle; the result replaces the previous
state wholesale and is pushed to subscribers.

Superseding: every selection/deselection bumps a generation number. Results
are written back only if their generation is still the latest, so a slow
aggregation for an old destination can never leak into the current state.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence, Tuple

from .aggregator import RouteFetcher, aggregate, aggregate_routes
from .models import Destination, Participant, Region, Route, TravelResultSet, Viewport
from .policy import TravelPolicy, default_travel_policy
from .viewport import reduce_viewport, region_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TravelViewState:
    """
    Immutable snapshot of everything the screen renders from this core.
    """
    generation: int
    destination: Optional[Destination] = None
    travel_info: TravelResultSet = field(default_factory=TravelResultSet.empty)
    routes: Tuple[Route, ...] = ()
    viewport: Viewport = field(default_factory=Viewport.unconstrained)


Subscriber = Callable[[TravelViewState], None]


class TravelSession:
    """
    Observable travel state for one map screen.
    """
    def __init__(
        self,
        participants: Sequence[Participant],
        route_fetcher: RouteFetcher,
        policy: Optional[TravelPolicy] = None,
    ):
        self.policy = policy or default_travel_policy()
        self.route_fetcher = route_fetcher
        self._participants: Tuple[Participant, ...] = tuple(participants)

        # RLock: subscribers may call back into the session from the notifying thread
        self._lock = threading.RLock()
        self._generation = 0
        self._state = TravelViewState(generation=0)
        self._subscribers: List[Subscriber] = []

        # background worker for the *_async calls, created on first use
        self._executor: Optional[ThreadPoolExecutor] = None

    # --- Public API ---

    @property
    def state(self) -> TravelViewState:
        with self._lock:
            return self._state

    @property
    def participants(self) -> Tuple[Participant, ...]:
        with self._lock:
            return self._participants

    def update_participants(self, participants: Sequence[Participant]) -> None:
        """
        Replace the participant snapshot used by the next selection.
        Aggregations already running keep the snapshot they started with.
        """
        with self._lock:
            self._participants = tuple(participants)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for every published snapshot. Returns an unsubscribe function.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def select_destination(self, destination: Destination) -> TravelViewState:
        """
        A new destination was picked: clear everything, then compute travel info.
        Returns the published state, or the current one if a newer selection won.
        """
        generation, participants = self._begin_selection(destination)
        return self._fetch_travel_info(generation, destination, participants)

    def select_destination_async(self, destination: Destination) -> Future[TravelViewState]:
        """
        Non-blocking select_destination for UI threads.
        The cleared state is published before this returns; the fan-out runs on
        the session's worker and the Future resolves to the state after it.
        A later selection still supersedes this one.
        """
        generation, participants = self._begin_selection(destination)
        return self._submit(self._fetch_travel_info, generation, destination, participants)

    def show_routes(self) -> TravelViewState:
        """
        Route overlay for the current destination: polylines plus the viewport framing them.
        """
        return self._fetch_route_overlay(*self._current_selection())

    def show_routes_async(self) -> Future[TravelViewState]:
        """Non-blocking show_routes for UI threads."""
        return self._submit(self._fetch_route_overlay, *self._current_selection())

    def deselect(self) -> TravelViewState:
        """
        Nothing selected: travel info, routes and viewport are all cleared.
        """
        self._begin(None)
        return self.state

    def camera_region(self) -> Region:
        """Region for the current viewport, or the fallback region when there is none."""
        return region_for(self.state.viewport, self.policy)

    def close(self) -> None:
        """Stop the background worker; pending *_async calls still finish."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    # --- Internal helpers ---

    def _begin_selection(self, destination: Destination) -> Tuple[int, Tuple[Participant, ...]]:
        with self._lock:
            return self._begin(destination), self._participants

    def _current_selection(self) -> Tuple[int, Optional[Destination], Tuple[Participant, ...]]:
        with self._lock:
            return self._generation, self._state.destination, self._participants

    def _fetch_travel_info(
        self,
        generation: int,
        destination: Destination,
        participants: Tuple[Participant, ...],
    ) -> TravelViewState:
        travel_info = aggregate(
            participants,
            destination,
            route_fetcher=self.route_fetcher,
            policy=self.policy,
        )

        self._commit(generation, travel_info=travel_info)
        return self.state

    def _fetch_route_overlay(
        self,
        generation: int,
        destination: Optional[Destination],
        participants: Tuple[Participant, ...],
    ) -> TravelViewState:
        if destination is None:
            return self.state

        routes = aggregate_routes(
            participants,
            destination,
            route_fetcher=self.route_fetcher,
            policy=self.policy,
        )

        self._commit(generation, routes=tuple(routes), viewport=reduce_viewport(routes))
        return self.state

    def _submit(self, fn, *args) -> Future[TravelViewState]:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(thread_name_prefix="travel-session")
            return self._executor.submit(fn, *args)

    def _begin(self, destination: Optional[Destination]) -> int:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._publish(TravelViewState(generation=generation, destination=destination))
        return generation

    def _commit(self, generation: int, **changes) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    f"Discarding stale travel results (generation {generation}, current {self._generation})"
                )
                return False
            self._publish(replace(self._state, **changes))
        return True

    def _publish(self, state: TravelViewState) -> None:
        # caller holds the lock, so subscribers see snapshots in publish order
        self._state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                # a broken observer never stops the others or the selection cycle
                logger.exception(f"Travel state subscriber {callback!r} raised")
