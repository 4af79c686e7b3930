import threading
import time

import pytest

from travel.aggregator import aggregate, aggregate_routes, eligible_participants
from travel.models import Destination, Participant, Route
from travel.policy import TravelPolicy


class RecordingFetcher:
    """
    Fake Route Fetcher: returns a route unless the origin is listed as failing.
    Records every call so tests can assert nothing was requested.
    """
    def __init__(self, failing_origins=(), raising_origins=()):
        self.failing_origins = set(failing_origins)
        self.raising_origins = set(raising_origins)
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, origin, destination):
        with self._lock:
            self.calls.append((origin, destination))
        if origin in self.raising_origins:
            raise RuntimeError("provider exploded")
        if origin in self.failing_origins:
            return None
        duration = abs(origin[0] - destination[0]) * 10000
        return Route(duration_s=duration, distance_m=duration * 10, geometry=(origin, destination))


@pytest.fixture
def restaurant():
    return Destination.new("Peter Cat", 22.5530, 88.3520, address="18 Park Street")


@pytest.fixture
def friends():
    return [
        Participant.new("p1", "Asha", 22.60, 88.40),
        Participant.new("p2", "Ben", 22.50, 88.30),
        Participant.new("p3", "Chen", 22.70, 88.45),
    ]


def test_partial_failure_drops_only_the_failed_participant(friends, restaurant):
    fetcher = RecordingFetcher(failing_origins=[friends[2].coordinate])

    result = aggregate(friends, restaurant, route_fetcher=fetcher)

    assert len(result) == 2
    assert friends[0] in result
    assert friends[1] in result
    assert friends[2] not in result
    assert len(fetcher.calls) == 3


def test_no_located_participants_issues_no_requests(restaurant):
    fetcher = RecordingFetcher()
    participants = [Participant.new("p1", "Asha"), Participant.new("p2", "Ben")]

    result = aggregate(participants, restaurant, route_fetcher=fetcher)

    assert len(result) == 0
    assert fetcher.calls == []


def test_unset_destination_issues_no_requests(friends):
    fetcher = RecordingFetcher()

    result = aggregate(friends, None, route_fetcher=fetcher)

    assert len(result) == 0
    assert fetcher.calls == []


def test_unlocated_participants_never_appear(restaurant):
    participants = [
        Participant.new("p1", "Asha", 22.60, 88.40),
        Participant.new("p2", "Ben"),
        Participant.new("p3", "Chen", 22.70, 88.45),
    ]
    fetcher = RecordingFetcher()

    result = aggregate(participants, restaurant, route_fetcher=fetcher)

    assert "p2" not in result.participant_ids()
    assert len(result) <= len([p for p in participants if p.has_coordinate])
    assert len(fetcher.calls) == 2


def test_raising_fetch_does_not_abort_siblings(friends, restaurant):
    fetcher = RecordingFetcher(raising_origins=[friends[0].coordinate])

    result = aggregate(friends, restaurant, route_fetcher=fetcher)

    assert sorted(result.participant_ids()) == ["p2", "p3"]


def test_every_fetch_failing_gives_empty_result(friends, restaurant):
    fetcher = RecordingFetcher(failing_origins=[p.coordinate for p in friends])

    result = aggregate(friends, restaurant, route_fetcher=fetcher)

    assert len(result) == 0
    assert not result


@pytest.mark.parametrize("group_size", [3, 12])
def test_fetches_run_concurrently(restaurant, group_size):
    """
    Every fetch waits on a barrier sized to the whole group: it only opens if
    all requests are in flight at the same time, however large the group.
    """
    group = [
        Participant.new(f"p{i}", f"Friend {i}", 22.5 + i * 0.01, 88.3 + i * 0.01)
        for i in range(group_size)
    ]
    barrier = threading.Barrier(group_size, timeout=5)

    def fetcher(origin, destination):
        barrier.wait()
        return Route(duration_s=60, distance_m=500, geometry=(origin, destination))

    result = aggregate(group, restaurant, route_fetcher=fetcher)

    assert len(result) == group_size


def test_policy_rejects_non_positive_worker_cap():
    with pytest.raises(ValueError):
        TravelPolicy(max_workers=0).validate()


def test_result_does_not_depend_on_completion_order(friends, restaurant):
    # first participant finishes last
    def fetcher(origin, destination):
        if origin == friends[0].coordinate:
            time.sleep(0.05)
        return Route(duration_s=origin[0], distance_m=1, geometry=(origin,))

    result = aggregate(friends, restaurant, route_fetcher=fetcher)

    assert result.participant_ids() == ["p1", "p2", "p3"]


def test_duplicate_ids_are_fetched_once(restaurant):
    participants = [
        Participant.new("p1", "Asha", 22.60, 88.40),
        Participant.new("p1", "Asha (phone)", 22.61, 88.41),
    ]
    fetcher = RecordingFetcher()

    result = aggregate(participants, restaurant, route_fetcher=fetcher)

    assert len(result) == 1
    assert len(fetcher.calls) == 1
    assert eligible_participants(participants)[0].name == "Asha"


def test_single_worker_policy_still_collects_everything(friends, restaurant):
    result = aggregate(
        friends,
        restaurant,
        route_fetcher=RecordingFetcher(),
        policy=TravelPolicy(max_workers=1),
    )

    assert len(result) == 3


def test_aggregate_routes_returns_routes_by_participant_id(friends, restaurant):
    routes = aggregate_routes(list(reversed(friends)), restaurant, route_fetcher=RecordingFetcher())

    assert [route.geometry[0] for route in routes] == [p.coordinate for p in friends]


def test_sorted_by_duration(friends, restaurant):
    result = aggregate(friends, restaurant, route_fetcher=RecordingFetcher())

    durations = [entry.route.duration_s for entry in result.sorted_by_duration()]
    assert durations == sorted(durations)
