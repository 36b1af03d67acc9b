from __future__ import annotations

from django.conf import settings
from ninja import Router
from ninja.errors import HttpError

from checkout.services import all_order_snapshots

from .schemas import DashboardOut
from .services import PERIOD_ALL, PeriodFilter, aggregate


router = Router(tags=["analytics"])


@router.get("/dashboard", response=DashboardOut)
def dashboard(request, period: str = PERIOD_ALL, start: str | None = None, end: str | None = None):
    try:
        pf = PeriodFilter(period=period, start=start, end=end)
    except ValueError as exc:
        raise HttpError(400, str(exc))

    stats = aggregate(all_order_snapshots(), pf)
    return {
        "currency": getattr(settings, "CURRENCY", "EUR"),
        "period": pf.period,
        **stats.as_dict(),
    }
