from datetime import datetime

import pytest

from cafe.errors.exceptions import ValidationError
from cafe.services.report import ReportService


@pytest.fixture
def march_orders(order_factory, march):
    return {
        "paid": order_factory(total=440, payment_id="pay_1", created_at=march),
        "delivered_cash": order_factory(
            total=315, status="Delivered", payment_method="Cash on Delivery", created_at=march
        ),
        "confirmed_cash": order_factory(
            total=210, status="Confirmed", payment_method="Pay at Counter (Cash)",
            order_type="Dine-in", created_at=march,
        ),
        "pending_cash": order_factory(
            total=500, payment_method="Cash on Delivery", created_at=march
        ),
        "cancelled": order_factory(
            total=999, status="Cancelled", payment_id="pay_2", created_at=march
        ),
        "april": order_factory(total=100, payment_id="pay_3", created_at=datetime(2024, 4, 2, 9)),
    }


def test_monthly_orders_use_counted_definition(march_orders):
    orders = ReportService.monthly_orders(2024, 3)
    ids = {order.id for order in orders}
    assert ids == {
        march_orders["paid"].id,
        march_orders["delivered_cash"].id,
        march_orders["confirmed_cash"].id,
    }


def test_stats_group_by_month_newest_first(march_orders):
    stats = ReportService.invoice_stats()
    assert stats == [
        {"_id": {"year": 2024, "month": 4}, "totalOrders": 1, "totalRevenue": 100},
        {"_id": {"year": 2024, "month": 3}, "totalOrders": 3, "totalRevenue": 965},
    ]


def test_stats_and_download_agree(march_orders):
    march = next(row for row in ReportService.invoice_stats() if row["_id"]["month"] == 3)
    orders = ReportService.monthly_orders("2024", "3")
    assert march["totalOrders"] == len(orders)
    assert march["totalRevenue"] == sum(order.total_amount for order in orders)


@pytest.mark.parametrize("status", ["cancelled", "CANCELLED", "Cancelled by admin"])
def test_any_cancelled_status_is_not_counted(order_factory, march, status):
    order_factory(total=300, status=status, created_at=march)
    assert ReportService.monthly_orders(2024, 3) == []


@pytest.mark.parametrize("year,month", [(None, 3), (2024, None), ("", ""), (2024, 13), ("abc", 1)])
def test_month_is_required_and_valid(app, year, month):
    with pytest.raises(ValidationError):
        ReportService.monthly_orders(year, month)
