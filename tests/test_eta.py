import pytest

from routing.eta_service import EtaRange, eta_range, format_eta, travel_minutes
from routing.policy import DeliveryPolicy


@pytest.mark.parametrize("distance", [None, float("nan"), float("-inf"), -10])
def test_unknown_distance_has_no_eta(distance):
    assert eta_range(distance) is None
    assert format_eta(eta_range(distance)) == "—"


def test_ten_km_at_thirty_kmh():
    assert travel_minutes(10) == 20
    assert eta_range(10) == EtaRange(15, 25)


def test_low_bound_never_below_one_minute():
    assert eta_range(0) == EtaRange(1, 5)
    # 0.77 km -> ceil(1.54) = 2 minutes
    assert eta_range(0.77) == EtaRange(1, 7)

    for step in range(0, 200):
        assert eta_range(step * 0.1).low_min >= 1


def test_window_is_fixed_once_clear_of_the_floor():
    for distance in (3.5, 8.2, 12, 40):
        eta = eta_range(distance)
        assert eta.high_min - eta.low_min == 10


def test_minutes_round_up():
    # 8.2 km / 30 km/h = 16.4 min -> 17
    assert eta_range(8.2) == EtaRange(12, 22)


def test_slower_policy():
    policy = DeliveryPolicy(avg_speed_kmh=25, eta_window_min=4)
    # 10 km / 25 km/h = 24 min
    assert eta_range(10, policy) == EtaRange(20, 28)


def test_format():
    assert format_eta(EtaRange(15, 25)) == "15-25 min"
