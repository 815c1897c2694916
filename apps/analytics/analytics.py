"""
Analytics Module
=================

This module provides the vendor revenue queries behind the revenue
dashboard of the vendor app. It aggregates a vendor's orders together with
the prices of the deals they were placed on.

Classes:
    VendorAnalytics: Static methods for vendor revenue queries.

Key Features:
    - Revenue summary over a trailing window of days
    - Repeat buyer ranking
    - Zero-filled daily revenue series for charts

Example:
    Getting a vendor's last month::

        from apps.analytics.analytics import VendorAnalytics

        summary = VendorAnalytics.revenue_summary(vendor_id=vendor.id, period_days=30)
        print(f"{summary['total_orders']} orders, {summary['total_revenue']} revenue")

Note:
    Only orders in ``collected`` or ``reserved`` status count as revenue.
    An order's value is the discounted price of its deal. This module is
    read-only and all methods are static.
"""

from datetime import timedelta
from decimal import Decimal

from django.db.models import Sum, Count, Max, DecimalField
from django.db.models.functions import TruncDate, Coalesce
from django.utils import timezone

from apps.orders.models import Order, REVENUE_STATUSES
from .exceptions import InvalidPeriodError

CENT = Decimal('0.01')


def _revenue_orders(vendor_id):
    return Order.objects.filter(
        deal__vendor_id=vendor_id,
        status__in=REVENUE_STATUSES,
    )


class VendorAnalytics:
    """
    Revenue queries scoped to a single vendor.

    Methods:
        revenue_summary: Totals over the last N days.
        repeat_buyers: Buyers with more than one order, best first.
        daily_revenue: Per-day revenue for the last N days, zero-filled.

    Note:
        All methods return plain dictionaries or lists, not Django objects,
        making them suitable for JSON serialization in API responses.
    """

    @staticmethod
    def revenue_summary(vendor_id, period_days=30):
        """
        Calculate a vendor's revenue over a trailing window.

        Args:
            vendor_id (UUID): The vendor's user id.
            period_days (int, optional): Length of the window in days,
                ending now. Defaults to 30.

        Returns:
            dict: A dictionary containing:
                - total_revenue (Decimal): Sum of deal prices of counted orders.
                - total_orders (int): Number of counted orders.
                - avg_order_value (Decimal): Revenue per order, 0 with no orders.
                - period_start (datetime): ``period_end - period_days``.
                - period_end (datetime): Now.

        Raises:
            InvalidPeriodError: If period_days is less than 1.

        Example:
            With two orders at 30.00 and 45.00::

                summary = VendorAnalytics.revenue_summary(vendor.id)
                # total_revenue=75.00, total_orders=2, avg_order_value=37.50
        """
        if period_days < 1:
            raise InvalidPeriodError()

        period_end = timezone.now()
        period_start = period_end - timedelta(days=period_days)

        totals = _revenue_orders(vendor_id).filter(created_at__gte=period_start).aggregate(
            revenue=Coalesce(
                Sum('deal__discounted_price'),
                Decimal('0.00'),
                output_field=DecimalField(max_digits=12, decimal_places=2)
            ),
            count=Count('id'),
        )

        revenue = totals['revenue']
        count = totals['count']
        avg = (revenue / count).quantize(CENT) if count else Decimal('0.00')

        return {
            'total_revenue': revenue,
            'total_orders': count,
            'avg_order_value': avg,
            'period_start': period_start,
            'period_end': period_end,
        }

    @staticmethod
    def repeat_buyers(vendor_id):
        """
        Buyers who ordered from the vendor more than once.

        Args:
            vendor_id (UUID): The vendor's user id.

        Returns:
            list[dict]: One entry per repeat buyer, each containing
            buyer_id, buyer_name, buyer_phone, total_orders, total_spent and
            last_order_date. Ordered by total_orders, then total_spent,
            both descending.
        """
        rows = (
            _revenue_orders(vendor_id)
            .values('buyer_id', 'buyer__name', 'buyer__phone')
            .annotate(
                total_orders=Count('id'),
                total_spent=Sum('deal__discounted_price'),
                last_order_date=Max('created_at'),
            )
            .filter(total_orders__gt=1)
            .order_by('-total_orders', '-total_spent')
        )

        return [
            {
                'buyer_id': row['buyer_id'],
                'buyer_name': row['buyer__name'],
                'buyer_phone': row['buyer__phone'],
                'total_orders': row['total_orders'],
                'total_spent': row['total_spent'],
                'last_order_date': row['last_order_date'],
            }
            for row in rows
        ]

    @staticmethod
    def daily_revenue(vendor_id, days_back=30):
        """
        Revenue per calendar day for chart visualizations.

        Days are calendar days in the active time zone. The series always
        has ``days_back + 1`` points, from ``today - days_back`` to today;
        days without orders carry zero revenue.

        Args:
            vendor_id (UUID): The vendor's user id.
            days_back (int, optional): How many days before today to start.
                Defaults to 30.

        Returns:
            list[dict]: Points ordered by date, each containing:
                - date (date)
                - revenue (Decimal)
                - order_count (int)

        Raises:
            InvalidPeriodError: If days_back is negative.

        Example:
            A week of data::

                for point in VendorAnalytics.daily_revenue(vendor.id, days_back=6):
                    print(f"{point['date']}: {point['revenue']}")
        """
        if days_back < 0:
            raise InvalidPeriodError("days_back cannot be negative")

        today = timezone.localdate()
        first_day = today - timedelta(days=days_back)

        rows = (
            _revenue_orders(vendor_id)
            .annotate(day=TruncDate('created_at'))
            .filter(day__gte=first_day, day__lte=today)
            .values('day')
            .annotate(revenue=Sum('deal__discounted_price'), order_count=Count('id'))
            .order_by('day')
        )
        by_day = {row['day']: row for row in rows}

        series = []
        for offset in range(days_back + 1):
            day = first_day + timedelta(days=offset)
            row = by_day.get(day)
            series.append({
                'date': day,
                'revenue': row['revenue'] if row else Decimal('0.00'),
                'order_count': row['order_count'] if row else 0,
            })

        return series
