"""Admin status-update endpoint."""

from datetime import datetime

import pytest

from conftest import auth
from storefront.models import Order


def update_status(client, admin, order_id, status):
    return client.patch(
        f"/admin/orders/{order_id}/status", json={"status": status}, headers=auth(admin)
    )


def stored_status(session_factory, order_id):
    with session_factory() as session:
        return session.get(Order, order_id).status


class TestStatusUpdate:
    def test_full_happy_path(self, client, admin, place_order, publisher) -> None:
        order = place_order()
        assert order["status"] == "PENDING"
        previous = datetime.fromisoformat(order["updated_at"])

        for status in ["PAGATO", "SPEDITO", "CONSEGNATO"]:
            response = update_status(client, admin, order["id"], status)
            assert response.status_code == 200, response.text
            body = response.json()
            assert body["status"] == status
            updated_at = datetime.fromisoformat(body["updated_at"])
            assert updated_at > previous
            previous = updated_at

        changes = [data for kind, data in publisher.events if kind == "OrderStatusChanged"]
        assert [(c["old_status"], c["new_status"]) for c in changes] == [
            ("PENDING", "PAGATO"),
            ("PAGATO", "SPEDITO"),
            ("SPEDITO", "CONSEGNATO"),
        ]
        assert changes[0]["customer_email"] == "guest@example.com"

    def test_paid_to_shipped(self, client, admin, place_order, session_factory) -> None:
        order = place_order(payment_confirmed=True)
        assert order["status"] == "PAGATO"

        response = update_status(client, admin, order["id"], "SPEDITO")
        assert response.status_code == 200
        assert response.json()["status"] == "SPEDITO"
        assert stored_status(session_factory, order["id"]) == "SPEDITO"

    def test_invalid_transition_echoes_allowed_set(self, client, admin, place_order, session_factory) -> None:
        order = place_order(payment_confirmed=True)

        response = update_status(client, admin, order["id"], "CONSEGNATO")
        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["current_status"] == "PAGATO"
        assert detail["requested_status"] == "CONSEGNATO"
        assert detail["allowed_transitions"] == ["SPEDITO", "ANNULLATO"]
        assert stored_status(session_factory, order["id"]) == "PAGATO"

    def test_cancelled_order_is_final(self, client, admin, place_order, publisher) -> None:
        order = place_order(payment_confirmed=True)
        assert update_status(client, admin, order["id"], "ANNULLATO").status_code == 200

        response = update_status(client, admin, order["id"], "PAGATO")
        assert response.status_code == 409
        assert response.json()["detail"]["allowed_transitions"] == []

        changes = [kind for kind, _ in publisher.events if kind == "OrderStatusChanged"]
        assert len(changes) == 1

    @pytest.mark.parametrize("status", ["CONSEGNATO", "ANNULLATO"])
    def test_terminal_self_transition_rejected(self, client, admin, place_order, status) -> None:
        order = place_order(payment_confirmed=True)
        if status == "CONSEGNATO":
            update_status(client, admin, order["id"], "SPEDITO")
        assert update_status(client, admin, order["id"], status).status_code == 200

        assert update_status(client, admin, order["id"], status).status_code == 409

    def test_repeated_request_is_rejected(self, client, admin, place_order, session_factory) -> None:
        order = place_order()
        assert update_status(client, admin, order["id"], "PAGATO").status_code == 200
        response = update_status(client, admin, order["id"], "PAGATO")
        assert response.status_code == 409
        assert stored_status(session_factory, order["id"]) == "PAGATO"

    @pytest.mark.parametrize("status", ["pagato", "IN_ELABORAZIONE", "", 3, None, ["PAGATO"]])
    def test_invalid_status_value(self, client, admin, place_order, session_factory, status) -> None:
        order = place_order()
        response = update_status(client, admin, order["id"], status)
        assert response.status_code == 400
        assert response.json()["detail"]["valid_statuses"] == [
            "PENDING", "PAGATO", "SPEDITO", "CONSEGNATO", "ANNULLATO"
        ]
        assert stored_status(session_factory, order["id"]) == "PENDING"

    def test_unknown_order(self, client, admin) -> None:
        response = update_status(client, admin, 9999, "PAGATO")
        assert response.status_code == 404

    def test_soft_deleted_order_is_not_found(self, client, admin, place_order) -> None:
        order = place_order()
        assert client.delete(f"/admin/orders/{order['id']}", headers=auth(admin)).status_code == 204
        assert update_status(client, admin, order["id"], "PAGATO").status_code == 404


class TestAuthorization:
    def test_requires_identity(self, client, place_order) -> None:
        order = place_order()
        response = client.patch(f"/admin/orders/{order['id']}/status", json={"status": "PAGATO"})
        assert response.status_code == 401

    def test_requires_admin(self, client, customer, place_order, session_factory) -> None:
        order = place_order(user=customer)
        response = update_status(client, customer, order["id"], "PAGATO")
        assert response.status_code == 403
        assert stored_status(session_factory, order["id"]) == "PENDING"


class TestNotificationFailure:
    class ExplodingPublisher:
        def publish_order_created(self, order_data):
            return True

        def publish_order_status_changed(self, order_data):
            raise RuntimeError("broker down")

    def test_status_persisted_when_notification_fails(self, client, admin, place_order, session_factory) -> None:
        from storefront.api.deps import get_event_publisher
        from storefront.main import app

        order = place_order(payment_confirmed=True)
        app.dependency_overrides[get_event_publisher] = lambda: self.ExplodingPublisher()

        response = update_status(client, admin, order["id"], "SPEDITO")
        assert response.status_code == 200
        assert response.json()["status"] == "SPEDITO"
        assert stored_status(session_factory, order["id"]) == "SPEDITO"
