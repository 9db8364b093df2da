"""
Report service - derived views over the stored sales and products.

Nothing here is persisted: every figure is recomputed from the current
snapshot. All functions take an explicit ``today``/``now`` so results do not
depend on the wall clock.
"""

import enum
import math
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, NamedTuple, Optional

from bakery.models import PaymentMethod, Product, Sale

EXPIRING_SOON_DAYS = 3
WATCHLIST_LIMIT = 5
WEEKLY_PROFIT_RATE = 0.25
WEEKLY_PROFIT_SALES = 10


class ExpirationStatus(str, enum.Enum):
    """Shelf-life status (vencido / a vencer / ok)."""
    EXPIRED = 'expired'
    EXPIRING = 'expiring'
    OK = 'ok'


class OrderRange(str, enum.Enum):
    ALL = 'all'
    TODAY = 'today'
    WEEK = 'week'


class ClosingSummary(NamedTuple):
    """End-of-day totals per payment method, in centavos."""
    day: date
    cash: int
    card: int
    pix: int
    total: int
    count: int

    def to_dict(self) -> dict:
        data = self._asdict()
        data['day'] = self.day.isoformat()
        return data


def _naive(value: datetime) -> datetime:
    """Aware datetimes are converted to local time so they compare with naive ones."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _start_of(day: date) -> datetime:
    return datetime.combine(day, time.min)


def days_until(expires_at: Optional[datetime], today: date) -> float:
    """Whole days from the start of ``today`` to ``expires_at`` (floored); infinite when unset."""
    if expires_at is None:
        return math.inf
    delta = _naive(expires_at) - _start_of(today)
    return math.floor(delta.total_seconds() / 86400)


def expiration_status(product: Product, today: date, soon_days: int = EXPIRING_SOON_DAYS) -> ExpirationStatus:
    days = days_until(product.expires_at, today)
    if days < 0:
        return ExpirationStatus.EXPIRED
    if days <= soon_days:
        return ExpirationStatus.EXPIRING
    return ExpirationStatus.OK


def products_to_watch(products: Iterable[Product], today: date, limit: int = WATCHLIST_LIMIT,
                      soon_days: int = EXPIRING_SOON_DAYS) -> List[Product]:
    """Expired or soon-to-expire products, in catalog order."""
    flagged = [p for p in products if expiration_status(p, today, soon_days) != ExpirationStatus.OK]
    return flagged[:limit]


def sales_on(sales: Iterable[Sale], day: date) -> List[Sale]:
    return [s for s in sales if _naive(s.issued_at).date() == day]


def sum_totals(sales: Iterable[Sale]) -> int:
    return sum(s.total_cents for s in sales)


def today_sales_total(sales: Iterable[Sale], today: date) -> int:
    return sum_totals(sales_on(sales, today))


def totals_by_method(sales: Iterable[Sale]) -> Dict[PaymentMethod, int]:
    totals = {method: 0 for method in PaymentMethod}
    for sale in sales:
        totals[sale.payment_method] += sale.total_cents
    return totals


def average_ticket(sales: List[Sale]) -> int:
    if not sales:
        return 0
    return int(round(sum_totals(sales) / len(sales)))


def favorite_method(sales: Iterable[Sale]) -> PaymentMethod:
    """Method with the largest total. Ties keep the first of pix, card, cash."""
    totals = totals_by_method(sales)
    if not any(totals.values()):
        return PaymentMethod.PIX
    order = [PaymentMethod.PIX, PaymentMethod.CARD, PaymentMethod.CASH]
    return max(order, key=lambda method: totals[method])


def weekly_profit_estimate(sales: List[Sale]) -> int:
    """Rough margin: 25% of each of the last ten sales."""
    return sum(int(round(s.total_cents * WEEKLY_PROFIT_RATE)) for s in sales[-WEEKLY_PROFIT_SALES:])


def closing_summary(sales: Iterable[Sale], day: date) -> ClosingSummary:
    """Totals of the sales issued on ``day``, broken out by payment method."""
    day_sales = sales_on(sales, day)
    totals = totals_by_method(day_sales)
    return ClosingSummary(
        day=day,
        cash=totals[PaymentMethod.CASH],
        card=totals[PaymentMethod.CARD],
        pix=totals[PaymentMethod.PIX],
        total=sum_totals(day_sales),
        count=len(day_sales)
    )


def sort_newest_first(sales: Iterable[Sale]) -> List[Sale]:
    return sorted(sales, key=lambda s: _naive(s.issued_at), reverse=True)


def filter_orders(sales: Iterable[Sale], products: Iterable[Product], query: str = '',
                  method=None, order_range=OrderRange.ALL, now: Optional[datetime] = None) -> List[Sale]:
    """
    Orders board filtering.

    Args:
        query: Matches the receipt code or the name of any item's product (case-insensitive)
        method: PaymentMethod (or its value) to keep; None keeps all
        order_range: 'all', 'today' or 'week' (since the start of the day six days ago)
    """
    now = now or datetime.now()
    q = (query or '').strip().lower()
    method = PaymentMethod(method) if method else None
    order_range = OrderRange(order_range or OrderRange.ALL)
    names = {p.id: p.name.lower() for p in products}
    week_start = _start_of(now.date() - timedelta(days=6))

    def matches(sale: Sale) -> bool:
        if q and q not in sale.receipt_code.lower() and not any(
            q in names.get(item.product_id, '') for item in sale.items
        ):
            return False
        if method is not None and sale.payment_method != method:
            return False
        issued_at = _naive(sale.issued_at)
        if order_range == OrderRange.TODAY:
            return issued_at.date() == now.date()
        if order_range == OrderRange.WEEK:
            return issued_at >= week_start
        return True

    return [s for s in sort_newest_first(sales) if matches(s)]


def _method_totals_dict(sales) -> Dict[str, int]:
    return {method.value: amount for method, amount in totals_by_method(sales).items()}


def dashboard_summary(products: List[Product], sales: List[Sale], today: date,
                      soon_days: int = EXPIRING_SOON_DAYS) -> dict:
    """Admin dashboard cards: today's sales, estimated profit and products to watch."""
    watch = products_to_watch(products, today, soon_days=soon_days)
    return {
        'today_sales_cents': today_sales_total(sales, today),
        'weekly_profit_estimate_cents': weekly_profit_estimate(sales),
        'watch_count': len(watch),
        'watch': [
            {
                'id': p.id,
                'name': p.name,
                'status': expiration_status(p, today, soon_days).value,
                'expires_at': p.expires_at.isoformat() if p.expires_at else None,
            }
            for p in watch
        ],
    }


def orders_summary(sales: List[Sale], today: date) -> dict:
    """Orders board cards: today's count and revenue, average ticket, totals per method."""
    todays = sales_on(sales, today)
    return {
        'today_count': len(todays),
        'today_total_cents': sum_totals(todays),
        'total_cents': sum_totals(sales),
        'average_ticket_cents': average_ticket(sales),
        'totals_by_method': _method_totals_dict(sales),
        'favorite_method': favorite_method(sales).value,
    }
