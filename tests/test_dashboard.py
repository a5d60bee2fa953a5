"""Admin dashboard statistics."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from conftest import auth
from storefront.models import Order
from storefront.services.dashboard_service import DashboardService


def test_stats(client, admin, make_product, place_order) -> None:
    laptop = make_product(name="Laptop", price="800.00", stock=10)
    mouse = make_product(name="Mouse", price="20.00", stock=100)

    place_order(product=laptop, payment_confirmed=True)
    place_order(product=mouse, quantity=5)
    cancelled = place_order(product=laptop, quantity=2, payment_confirmed=True)
    client.patch(f"/admin/orders/{cancelled['id']}/status", json={"status": "ANNULLATO"}, headers=auth(admin))

    response = client.get("/admin/stats", headers=auth(admin))
    assert response.status_code == 200
    stats = response.json()

    assert Decimal(stats["revenue_today"]) == Decimal("900.00")
    assert Decimal(stats["revenue_month"]) == Decimal("900.00")
    assert stats["orders_by_status"] == {
        "PENDING": 1,
        "PAGATO": 1,
        "SPEDITO": 0,
        "CONSEGNATO": 0,
        "ANNULLATO": 1,
    }
    top = [(p["name"], p["total_quantity"]) for p in stats["top_products"]]
    assert top == [("Mouse", 5), ("Laptop", 1)]
    assert Decimal(stats["top_products"][1]["total_revenue"]) == Decimal("800.00")


def test_revenue_windows(db_session, place_order, make_product) -> None:
    product = make_product(price="10.00", stock=100)
    order = place_order(product=product, payment_confirmed=True)

    now = datetime(2026, 3, 15, 9, 30, tzinfo=timezone.utc)
    stored = db_session.get(Order, order["id"])
    stored.created_at = now - timedelta(days=2)
    db_session.commit()

    stats = DashboardService(db_session).get_stats(now=now)
    assert stats.revenue_today == 0
    assert stats.revenue_month == Decimal("10.00")


def test_empty_dashboard(client, admin) -> None:
    stats = client.get("/admin/stats", headers=auth(admin)).json()
    assert Decimal(stats["revenue_today"]) == 0
    assert set(stats["orders_by_status"].values()) == {0}
    assert stats["top_products"] == []


def test_requires_admin(client, customer) -> None:
    assert client.get("/admin/stats", headers=auth(customer)).status_code == 403
