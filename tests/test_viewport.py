import itertools

import pytest

from travel.models import Route, Viewport
from travel.policy import TravelPolicy
from travel.viewport import (
    bounding_box,
    initial_region,
    padded,
    reduce_viewport,
    region_for,
)


def route_through(*points):
    return Route(duration_s=600, distance_m=5000, geometry=tuple(points))


@pytest.fixture
def two_routes():
    return [
        route_through((10, 20), (11, 21), (12, 22)),
        route_through((11, 19), (13, 21)),
    ]


def test_union_of_two_route_boxes(two_routes):
    viewport = reduce_viewport(two_routes)

    assert viewport.south_west == (10, 19)
    assert viewport.north_east == (13, 22)


def test_empty_input_is_unconstrained():
    viewport = reduce_viewport([])

    assert viewport.is_unconstrained
    assert viewport == Viewport.unconstrained()


def test_order_independent(two_routes):
    third = route_through((9.5, 21.5), (10.5, 23))
    routes = two_routes + [third]

    boxes = {reduce_viewport(list(order)) for order in itertools.permutations(routes)}

    assert len(boxes) == 1


def test_duplicate_route_does_not_change_box(two_routes):
    assert reduce_viewport(two_routes + [two_routes[0]]) == reduce_viewport(two_routes)


def test_route_without_geometry_contributes_nothing(two_routes):
    empty = Route(duration_s=1, distance_m=1, geometry=())

    assert reduce_viewport(two_routes + [empty]) == reduce_viewport(two_routes)
    assert reduce_viewport([empty]).is_unconstrained


def test_bounding_box_of_single_point():
    box = bounding_box([(22.5, 88.3)])

    assert box.south_west == box.north_east == (22.5, 88.3)
    assert box.span == (0.0, 0.0)


def test_region_for_unconstrained_uses_fallback():
    policy = TravelPolicy(fallback_center=(48.1374, 11.5755), fallback_span_degrees=0.2)

    region = region_for(Viewport.unconstrained(), policy)

    assert region.center == (48.1374, 11.5755)
    assert region.span_lat == region.span_lon == 0.2


def test_region_for_viewport_is_centered(two_routes):
    region = region_for(reduce_viewport(two_routes))

    assert region.center == (11.5, 20.5)
    assert region.span_lat == 3
    assert region.span_lon == 3


def test_padding_grows_every_side():
    viewport = Viewport(south_west=(10, 20), north_east=(12, 24))

    grown = padded(viewport, 0.5)

    assert grown.south_west == (9, 18)
    assert grown.north_east == (13, 26)


def test_padding_is_clamped_to_valid_coordinates():
    viewport = Viewport(south_west=(80, 170), north_east=(89, 179))

    grown = padded(viewport, 1.0)

    assert grown.north_east == (90.0, 180.0)


def test_initial_region_without_coordinates_is_fallback():
    assert initial_region([]) == region_for(Viewport.unconstrained())
