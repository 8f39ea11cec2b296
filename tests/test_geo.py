import math

import pytest

from routing.geo import Coordinate, coerce_distance, distance_km


def test_identical_points_are_zero_apart(roban_mart):
    assert distance_km(roban_mart, roban_mart) == 0.0


def test_distance_is_symmetric(roban_mart, customer_location):
    assert distance_km(roban_mart, customer_location) == pytest.approx(
        distance_km(customer_location, roban_mart)
    )


def test_one_degree_of_latitude():
    # 2 * pi * 6371 / 360
    expected = 2 * math.pi * 6371 / 360
    assert distance_km(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0)) == pytest.approx(expected, rel=1e-9)
    assert expected == pytest.approx(111.19, abs=0.01)


def test_antipodal_points_are_half_the_circumference():
    d = distance_km(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
    assert d == pytest.approx(math.pi * 6371, rel=1e-9)
    assert d == pytest.approx(20015, abs=1)


def test_enugu_vendor_to_customer(roban_mart, customer_location):
    # Roban Mart -> 15 Zik Ave
    assert distance_km(roban_mart, customer_location) == pytest.approx(0.77, abs=0.02)


def test_coordinate_validity():
    assert Coordinate(6.2239, 7.1185).is_valid()
    assert not Coordinate(91.0, 0.0).is_valid()
    assert not Coordinate(0.0, -180.5).is_valid()
    assert not Coordinate(float("nan"), 0.0).is_valid()


def test_coordinate_pairs():
    coordinate = Coordinate.from_pair((6.2239, 7.1185))
    assert coordinate == Coordinate(6.2239, 7.1185)
    assert coordinate.as_pair() == (6.2239, 7.1185)


@pytest.mark.parametrize("value", [None, float("nan"), float("inf"), "far", True, -0.5])
def test_coerce_distance_rejects_unknowns(value):
    assert coerce_distance(value) is None


def test_coerce_distance_accepts_numbers():
    assert coerce_distance(3) == 3.0
    assert coerce_distance(8.2) == 8.2
    assert coerce_distance(0) == 0.0
