"""Cart pricing."""

from decimal import Decimal


def test_quote_prices_and_merges_lines(client, make_product) -> None:
    mouse = make_product(name="Mouse", price="25.00", stock=10)
    keyboard = make_product(name="Tastiera", price="45.50", stock=1)

    response = client.post("/cart/quote", json={"items": [
        {"product_id": mouse.id, "quantity": 1},
        {"product_id": keyboard.id, "quantity": 2},
        {"product_id": mouse.id, "quantity": 2},
    ]})
    assert response.status_code == 200
    quote = response.json()

    assert [(line["name"], line["quantity"]) for line in quote["items"]] == [("Mouse", 3), ("Tastiera", 2)]
    assert Decimal(quote["items"][0]["subtotal"]) == Decimal("75.00")
    assert quote["items"][0]["in_stock"] is True
    assert quote["items"][1]["in_stock"] is False
    assert quote["total_items"] == 5
    assert Decimal(quote["total_price"]) == Decimal("166.00")


def test_empty_cart_quote(client) -> None:
    quote = client.post("/cart/quote", json={"items": []}).json()
    assert quote["items"] == []
    assert quote["total_items"] == 0
    assert Decimal(quote["total_price"]) == 0


def test_unknown_product(client) -> None:
    response = client.post("/cart/quote", json={"items": [{"product_id": 123, "quantity": 1}]})
    assert response.status_code == 404
