import datetime

from dateutil.relativedelta import relativedelta
from sqlalchemy import and_, extract, func, not_

from cafe.enums.order import OrderStatus
from cafe.errors.exceptions import ValidationError
from cafe.extensions import db
from cafe.lib.pricing import round_money
from cafe.models.order import Order


class ReportService:

    @staticmethod
    def counted_filter():
        """Orders that count as sales: not cancelled, and not an unconfirmed
        cash order."""
        unpaid_cash = and_(
            Order.payment_method.ilike("%cash%"),
            Order.status == OrderStatus.PENDING.value,
        )
        return and_(
            not_(Order.status.ilike(f"%{OrderStatus.CANCELLED.value}%")),
            not_(unpaid_cash),
        )

    @staticmethod
    def invoice_stats():
        year = extract("year", Order.created_at)
        month = extract("month", Order.created_at)
        rows = (
            db.session.query(
                year.label("year"),
                month.label("month"),
                func.count(Order.id).label("total_orders"),
                func.sum(Order.total_amount).label("total_revenue"),
            )
            .filter(ReportService.counted_filter())
            .group_by(year, month)
            .order_by(year.desc(), month.desc())
            .all()
        )
        return [
            {
                "_id": {"year": int(row.year), "month": int(row.month)},
                "totalOrders": int(row.total_orders),
                "totalRevenue": round_money(row.total_revenue or 0),
            }
            for row in rows
        ]

    @staticmethod
    def month_range(year, month):
        try:
            year = int(year)
            month = int(month)
            start = datetime.datetime(year, month, 1)
        except (TypeError, ValueError):
            raise ValidationError("Year and Month are required")
        return start, start + relativedelta(months=1)

    @staticmethod
    def monthly_orders(year, month):
        if year in (None, "") or month in (None, ""):
            raise ValidationError("Year and Month are required")
        start, end = ReportService.month_range(year, month)
        return (
            Order.query.filter(
                ReportService.counted_filter(),
                Order.created_at >= start,
                Order.created_at < end,
            )
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )
