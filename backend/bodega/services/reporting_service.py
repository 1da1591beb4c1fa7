# Overview: Service-layer read models for the dashboard and totals report.

from __future__ import annotations

from datetime import date, timedelta

from ..time_utils import record_date, utcnow
from . import accounts_service, catalog_service
from . import storage_service as store
from .pricing import STATUS_PENDING, round_money


def _sales_on(sales: list[dict], day: date) -> list[dict]:
    return [s for s in sales if record_date(s.get("date")) == day]


def dashboard_summary(today: date | None = None, days: int = 7) -> dict:
    """
    Today's sales, credit sales and low stock, plus a daily sales series
    for the last `days` days (oldest first).
    """
    today = today or utcnow().date()
    sales = store.get_all(store.SALES)

    sales_today = _sales_on(sales, today)
    low_stock = catalog_service.low_stock_products()

    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        series.append({
            "date": day.isoformat(),
            "sales_usd": round_money(sum(s["total_usd"] for s in _sales_on(sales, day))),
        })

    return {
        "date": today.isoformat(),
        "sales_today_usd": round_money(sum(s["total_usd"] for s in sales_today)),
        "credit_sales_today_usd": round_money(sum(
            s["total_usd"] for s in sales_today if s.get("status") == STATUS_PENDING
        )),
        "sales_today_count": len(sales_today),
        "low_stock": [
            {"id": p["id"], "name": p["name"], "stock": p["stock"], "min_stock": p.get("min_stock", 0)}
            for p in low_stock
        ],
        "receivable_usd": accounts_service.total_pending(accounts_service.KIND_RECEIVABLE),
        "payable_usd": accounts_service.total_pending(accounts_service.KIND_PAYABLE),
        "daily_sales": series,
    }


def totals_report() -> dict:
    """
    All-time totals. Gross margin prices sold units at the catalog's
    current cost; products deleted since the sale count at zero cost.
    """
    sales = store.get_all(store.SALES)
    purchases = store.get_all(store.PURCHASES)
    costs = {p["id"]: p.get("cost_usd", 0) for p in store.get_all(store.PRODUCTS)}

    sales_usd = round_money(sum(s["total_usd"] for s in sales))
    cost_of_sales = round_money(sum(
        item["quantity"] * costs.get(item["product_id"], 0)
        for s in sales
        for item in s.get("items", [])
    ))

    return {
        "sales_usd": sales_usd,
        "sales_count": len(sales),
        "purchases_usd": round_money(sum(p["total_usd"] for p in purchases)),
        "purchases_count": len(purchases),
        "cost_of_sales_usd": cost_of_sales,
        "gross_margin_usd": round_money(sales_usd - cost_of_sales),
    }
