import pytest

from preferences.store import PreferenceStore
from travel.formatting import DistanceUnit, format_distance, format_entry, format_travel_time
from travel.models import Participant, Region, Route, TravelEntry


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0 min"),
        (25 * 60 + 30, "25 min"),
        (3600, "1 hr"),
        (3900, "1 hr, 5 min"),
        (-1, "N/A"),
        (float("nan"), "N/A"),
    ],
)
def test_format_travel_time(seconds, expected):
    assert format_travel_time(seconds) == expected


def test_format_distance_units():
    assert format_distance(5230) == "5.2 km"
    assert format_distance(5230, DistanceUnit.MILES) == "3.2 mi"


def test_format_entry():
    entry = TravelEntry(Participant.new("p1", "Asha"), Route(duration_s=1500, distance_m=8000))

    assert format_entry(entry, DistanceUnit.KILOMETERS) == "Asha: 25 min / 8.0 km"


@pytest.fixture
def store(tmp_path):
    return PreferenceStore(str(tmp_path / "prefs" / "preferences.json"))


def test_empty_store_has_defaults(store):
    assert store.load_participants() is None
    assert store.load_region() is None
    assert store.distance_unit == DistanceUnit.KILOMETERS


def test_participants_survive_a_save(store):
    participants = [
        Participant.new("p1", "Asha", 22.6, 88.4),
        Participant.new("p2", "Ben"),
    ]

    store.save_participants(participants)
    loaded = store.load_participants()

    assert [p.id for p in loaded] == ["p1", "p2"]
    assert loaded[0].coordinate == (22.6, 88.4)
    assert loaded[1].coordinate is None


def test_region_and_unit_share_one_file(store):
    store.save_region(Region(center=(22.5726, 88.3639), span_lat=0.5, span_lon=0.4))
    store.distance_unit = DistanceUnit.MILES

    assert store.load_region() == Region(center=(22.5726, 88.3639), span_lat=0.5, span_lon=0.4)
    assert store.distance_unit == DistanceUnit.MILES


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{not json")

    assert PreferenceStore(str(path)).load_participants() is None


def test_bad_participant_payload_is_ignored(store):
    store.set("lastPeopleInput", [{"id": "p1", "name": "Asha", "latitude": 22.6}])

    assert store.load_participants() is None


def test_unknown_unit_falls_back_to_kilometers(store):
    store.set("distanceUnit", "Furlongs")

    assert store.distance_unit == DistanceUnit.KILOMETERS
