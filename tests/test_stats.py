from datetime import date, datetime, timezone

from orders.models import OrderStatus
from orders.stats import VendorStats, rider_earnings, vendor_stats


def test_vendor_stats(make_order):
    today = date(2025, 3, 14)
    noon = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)
    yesterday = datetime(2025, 3, 13, 12, 0, tzinfo=timezone.utc)

    done_today = make_order(fee=1300)
    done_today.created_at = noon
    done_today.status = OrderStatus.COMPLETED

    preparing_today = make_order()
    preparing_today.created_at = noon
    preparing_today.status = OrderStatus.PREPARING

    done_yesterday = make_order()
    done_yesterday.created_at = yesterday
    done_yesterday.status = OrderStatus.COMPLETED

    cancelled_today = make_order()
    cancelled_today.created_at = noon
    cancelled_today.status = OrderStatus.CANCELLED

    stats = vendor_stats([done_today, preparing_today, done_yesterday, cancelled_today], today=today)

    assert stats == VendorStats(today_count=3, pending_count=1, completed_count=2, todays_earnings=4500)


def test_vendor_stats_of_nothing():
    assert vendor_stats([]) == VendorStats(0, 0, 0, 0)


def test_rider_earnings_are_delivery_fees(make_order):
    first = make_order(fee=1300)
    second = make_order(fee=2450)
    open_order = make_order(fee=1300)
    someone_else = make_order(fee=5000)
    for order, status in ((first, OrderStatus.COMPLETED), (second, OrderStatus.COMPLETED),
                          (open_order, OrderStatus.OUT_FOR_DELIVERY), (someone_else, OrderStatus.COMPLETED)):
        order.status = status
        order.rider_id = "r1"
    someone_else.rider_id = "r2"

    assert rider_earnings([first, second, open_order, someone_else], "r1") == 3750
