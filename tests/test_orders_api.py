"""Checkout, customer order history and admin order listing."""

from decimal import Decimal

from conftest import auth, checkout_payload
from storefront.models import Product


class TestCheckout:
    def test_creates_pending_order_with_price_snapshot(self, client, make_product, publisher, session_factory) -> None:
        phone = make_product(name="Smartphone X", price="499.00", stock=5)
        case = make_product(name="Cover", price="15.50", stock=20)

        response = client.post("/orders", json=checkout_payload((phone.id, 1), (case.id, 2)))
        assert response.status_code == 201, response.text
        order = response.json()

        assert order["status"] == "PENDING"
        assert order["payment_status"] == "pending"
        assert order["user_id"] is None
        assert Decimal(order["total"]) == Decimal("530.00")
        assert [(i["product_name"], i["quantity"]) for i in order["items"]] == [
            ("Smartphone X", 1),
            ("Cover", 2),
        ]
        assert Decimal(order["items"][1]["subtotal"]) == Decimal("31.00")

        with session_factory() as session:
            assert session.get(Product, phone.id).stock == 4
            assert session.get(Product, case.id).stock == 18

        kind, data = publisher.events[0]
        assert kind == "OrderCreated"
        assert data["order_id"] == order["id"]
        assert data["customer_email"] == "guest@example.com"
        assert data["shipping_address"] == "Via Roma 1, Roma, 00100, Italia"

    def test_confirmed_payment_starts_as_paid(self, client, make_product) -> None:
        product = make_product()
        response = client.post("/orders", json=checkout_payload((product.id, 1), payment_confirmed=True))
        assert response.status_code == 201
        assert response.json()["status"] == "PAGATO"
        assert response.json()["payment_status"] == "paid"

    def test_item_price_is_not_affected_by_later_price_change(self, client, admin, make_product) -> None:
        product = make_product(price="10.00")
        order = client.post("/orders", json=checkout_payload((product.id, 3))).json()

        response = client.put(f"/products/{product.id}", json={"price": "99.00"}, headers=auth(admin))
        assert response.status_code == 200

        stored = client.get(f"/admin/orders/{order['id']}", headers=auth(admin)).json()
        assert Decimal(stored["items"][0]["price"]) == Decimal("10.00")
        assert Decimal(stored["total"]) == Decimal("30.00")

    def test_duplicate_lines_are_merged(self, client, make_product) -> None:
        product = make_product(stock=5)
        response = client.post("/orders", json=checkout_payload((product.id, 2), (product.id, 1)))
        assert response.status_code == 201
        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 3

    def test_signed_in_customer_owns_order(self, client, customer, make_product) -> None:
        product = make_product()
        payload = checkout_payload((product.id, 1), email=None)
        response = client.post("/orders", json=payload, headers=auth(customer))
        assert response.status_code == 201
        assert response.json()["user_id"] == customer.id
        assert response.json()["customer_email"] == customer.email

    def test_empty_cart(self, client) -> None:
        response = client.post("/orders", json=checkout_payload())
        assert response.status_code == 400

    def test_unknown_product(self, client) -> None:
        response = client.post("/orders", json=checkout_payload((4242, 1)))
        assert response.status_code == 404

    def test_insufficient_stock_rolls_back(self, client, make_product, session_factory) -> None:
        plenty = make_product(name="Cavo USB", stock=10)
        scarce = make_product(name="Tablet", stock=1)

        response = client.post("/orders", json=checkout_payload((plenty.id, 2), (scarce.id, 2)))
        assert response.status_code == 409

        with session_factory() as session:
            assert session.get(Product, plenty.id).stock == 10
            assert session.get(Product, scarce.id).stock == 1

    def test_zero_quantity_rejected(self, client, make_product) -> None:
        product = make_product()
        response = client.post("/orders", json=checkout_payload((product.id, 0)))
        assert response.status_code == 422

    def test_publisher_failure_does_not_fail_checkout(self, client, make_product) -> None:
        from storefront.api.deps import get_event_publisher
        from storefront.main import app

        class BrokenPublisher:
            def publish_order_created(self, order_data):
                raise RuntimeError("broker down")

        app.dependency_overrides[get_event_publisher] = BrokenPublisher
        product = make_product()
        response = client.post("/orders", json=checkout_payload((product.id, 1)))
        assert response.status_code == 201


class TestCustomerOrders:
    def test_lists_only_own_orders_newest_first(self, client, make_user, place_order) -> None:
        alice = make_user(email="alice@example.com")
        bob = make_user(email="bob@example.com")
        first = place_order(user=alice)
        second = place_order(user=alice)
        place_order(user=bob)

        response = client.get("/orders", headers=auth(alice))
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [second["id"], first["id"]]

    def test_requires_identity(self, client) -> None:
        assert client.get("/orders").status_code == 401

    def test_other_customers_order_is_forbidden(self, client, make_user, place_order) -> None:
        alice = make_user(email="alice@example.com")
        bob = make_user(email="bob@example.com")
        order = place_order(user=alice)

        assert client.get(f"/orders/{order['id']}", headers=auth(alice)).status_code == 200
        assert client.get(f"/orders/{order['id']}", headers=auth(bob)).status_code == 403
        assert client.get("/orders/9999", headers=auth(bob)).status_code == 404


class TestAdminOrders:
    def test_pagination_and_status_filter(self, client, admin, place_order) -> None:
        for _ in range(3):
            place_order()
        for _ in range(2):
            place_order(payment_confirmed=True)

        response = client.get("/admin/orders", params={"page": 2, "limit": 2}, headers=auth(admin))
        assert response.status_code == 200
        body = response.json()
        assert len(body["orders"]) == 2
        assert body["pagination"] == {
            "current_page": 2,
            "total_pages": 3,
            "total_items": 5,
            "items_per_page": 2,
        }

        paid = client.get("/admin/orders", params={"status": "PAGATO"}, headers=auth(admin)).json()
        assert paid["pagination"]["total_items"] == 2
        assert {o["status"] for o in paid["orders"]} == {"PAGATO"}

        everything = client.get("/admin/orders", params={"status": "all"}, headers=auth(admin)).json()
        assert everything["pagination"]["total_items"] == 5

    def test_invalid_status_filter(self, client, admin) -> None:
        response = client.get("/admin/orders", params={"status": "paid"}, headers=auth(admin))
        assert response.status_code == 400

    def test_soft_delete_hides_order(self, client, admin, place_order, session_factory) -> None:
        from storefront.models import Order

        order = place_order()
        assert client.delete(f"/admin/orders/{order['id']}", headers=auth(admin)).status_code == 204
        assert client.get(f"/admin/orders/{order['id']}", headers=auth(admin)).status_code == 404
        assert client.delete(f"/admin/orders/{order['id']}", headers=auth(admin)).status_code == 404

        with session_factory() as session:
            stored = session.get(Order, order["id"])
            assert stored is not None
            assert stored.is_deleted is True

    def test_customers_cannot_list(self, client, customer) -> None:
        assert client.get("/admin/orders", headers=auth(customer)).status_code == 403
