from datetime import datetime

from conftest import SHIPPING_ADDRESS, register


def place(client, items=None, **extra):
    payload = {"shipping_address": SHIPPING_ADDRESS, **extra}
    if items is not None:
        payload["items"] = items
    return client.post("/api/orders", json=payload)


def test_orders_require_login(client):
    assert client.get("/api/orders").status_code == 401
    assert place(client, [{"product_id": 1, "quantity": 1}]).status_code == 401


def test_place_order_with_explicit_items(user_client, store):
    response = place(user_client, [{"product_id": 1, "quantity": 1}], payment_method="upi", notes="Leave at door")
    assert response.status_code == 201
    order = response.json()

    assert len(order["id"]) == 36
    assert order["status"] == "pending"
    assert order["payment_status"] == "pending"
    assert order["payment_method"] == "upi"
    assert order["notes"] == "Leave at door"
    assert order["shipping_address"]["country"] == "India"
    assert order["items"][0]["title"].startswith("Apple iPhone 15")
    assert order["pricing"] == {
        "subtotal": 1199.99,
        "shipping": 0.0,
        "tax": 96.0,
        "discount": 0.0,
        "total": 1295.99,
    }
    delivery = datetime.fromisoformat(order["estimated_delivery"])
    created = datetime.fromisoformat(order["created_at"])
    assert (delivery - created).days == 5
    assert store.products[1].stock_count == 49


def test_place_order_applies_discount(user_client):
    order = place(user_client, [{"product_id": 11, "quantity": 1}], discount=5).json()
    assert order["pricing"]["tax"] == 6.0
    assert order["pricing"]["discount"] == 5.0
    assert order["pricing"]["total"] == 75.99


def test_place_order_from_cart_empties_it(user_client):
    user_client.post("/api/cart/add", json={"product_id": 11, "quantity": 2})
    user_client.post("/api/cart/add", json={"product_id": 7})
    user_client.post("/api/cart/save-for-later/7")

    response = place(user_client)
    assert response.status_code == 201
    assert [(i["product_id"], i["quantity"]) for i in response.json()["items"]] == [(11, 2)]

    cart = user_client.get("/api/cart").json()
    assert cart["items"] == []
    assert [line["product_id"] for line in cart["saved_for_later"]] == [7]


def test_place_order_with_empty_cart(user_client):
    response = place(user_client)
    assert response.status_code == 400
    assert response.json()["detail"] == "Order must contain items"


def test_place_order_unknown_product(user_client):
    assert place(user_client, [{"product_id": 999, "quantity": 1}]).status_code == 404


def test_insufficient_stock_reserves_nothing(user_client, store):
    response = place(user_client, [{"product_id": 1, "quantity": 1}, {"product_id": 12, "quantity": 11}])
    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient stock for Peloton Bike+ Indoor Exercise Bike"
    assert store.products[1].stock_count == 50
    assert store.orders == {}


def test_order_that_sells_out_marks_product_unavailable(user_client, store):
    assert place(user_client, [{"product_id": 12, "quantity": 10}]).status_code == 201
    assert store.products[12].stock_count == 0
    assert store.products[12].in_stock is False


def test_shipping_address_is_validated(user_client):
    address = {key: value for key, value in SHIPPING_ADDRESS.items() if key != "city"}
    response = user_client.post(
        "/api/orders",
        json={"items": [{"product_id": 1, "quantity": 1}], "shipping_address": address},
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "shipping_address.city"


def test_list_orders_newest_first(user_client):
    first = place(user_client, [{"product_id": 1, "quantity": 1}]).json()
    second = place(user_client, [{"product_id": 11, "quantity": 3}]).json()

    summaries = user_client.get("/api/orders").json()
    assert [s["id"] for s in summaries] == [second["id"], first["id"]]
    assert summaries[0]["item_count"] == 3
    assert summaries[0]["total"] == second["pricing"]["total"]


def test_orders_are_private(user_client):
    order = place(user_client, [{"product_id": 1, "quantity": 1}]).json()
    assert user_client.get(f"/api/orders/{order['id']}").status_code == 200

    register(user_client, name="Other Person", email="other@example.com")
    response = user_client.get(f"/api/orders/{order['id']}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"
    assert user_client.get("/api/orders").json() == []


def test_cancel_restores_stock(user_client, store):
    order = place(user_client, [{"product_id": 2, "quantity": 3}]).json()
    assert store.products[2].stock_count == 97

    response = user_client.post(f"/api/orders/{order['id']}/cancel", json={"reason": "Changed my mind"})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "cancelled"
    assert body["cancel_reason"] == "Changed my mind"
    assert body["cancelled_at"] is not None
    assert store.products[2].stock_count == 100

    again = user_client.post(f"/api/orders/{order['id']}/cancel")
    assert again.status_code == 400
    assert again.json()["detail"] == "Only pending orders can be cancelled"


def test_cancel_paid_order_is_refunded(user_client, store):
    order = place(user_client, [{"product_id": 2, "quantity": 1}]).json()
    store.orders[order["id"]].payment_status = "paid"

    body = user_client.post(f"/api/orders/{order['id']}/cancel").json()
    assert body["payment_status"] == "refunded"
    assert body["cancel_reason"] is None


def test_cannot_cancel_shipped_order(user_client, store):
    order = place(user_client, [{"product_id": 2, "quantity": 1}]).json()
    store.orders[order["id"]].status = "shipped"

    assert user_client.post(f"/api/orders/{order['id']}/cancel").status_code == 400
    assert store.products[2].stock_count == 99
