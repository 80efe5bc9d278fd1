def lines(cart, key="items"):
    return {line["product_id"]: line["quantity"] for line in cart[key]}


def test_cart_requires_login(client):
    assert client.get("/api/cart").status_code == 401


def test_empty_cart(user_client):
    body = user_client.get("/api/cart").json()
    assert body["items"] == []
    assert body["saved_for_later"] == []
    assert body["updated_at"] is None
    assert body["totals"] == {"subtotal": 0.0, "item_count": 0, "shipping": 0.0, "tax": 0.0, "total": 0.0}


def test_add_snapshots_product_and_increments(user_client):
    response = user_client.post("/api/cart/add", json={"product_id": 11, "quantity": 2})
    assert response.status_code == 200
    line = response.json()["items"][0]
    assert line["title"] == "PlayStation 5 DualSense Controller - Cosmic Red"
    assert line["price"] == 74.99

    body = user_client.post("/api/cart/add", json={"product_id": 11}).json()
    assert lines(body) == {11: 3}
    assert body["updated_at"] is not None
    assert body["totals"] == {
        "subtotal": 224.97,
        "item_count": 3,
        "shipping": 0.0,
        "tax": 18.0,
        "total": 242.97,
    }


def test_add_rejects_unknown_and_out_of_stock(user_client, store):
    assert user_client.post("/api/cart/add", json={"product_id": 999}).status_code == 404

    store.products[6].in_stock = False
    response = user_client.post("/api/cart/add", json={"product_id": 6})
    assert response.status_code == 400
    assert response.json()["detail"] == "Product is out of stock"


def test_add_rejects_zero_quantity(user_client):
    response = user_client.post("/api/cart/add", json={"product_id": 1, "quantity": 0})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "quantity"


def test_update_quantity(user_client):
    response = user_client.put("/api/cart/update/1", json={"quantity": 2})
    assert response.status_code == 404
    assert response.json()["detail"] == "Cart not found"

    user_client.post("/api/cart/add", json={"product_id": 1})
    assert lines(user_client.put("/api/cart/update/1", json={"quantity": 4}).json()) == {1: 4}

    missing = user_client.put("/api/cart/update/2", json={"quantity": 1})
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Item not found in cart"

    assert user_client.put("/api/cart/update/1", json={"quantity": 0}).status_code == 400


def test_remove_and_clear(user_client):
    assert user_client.delete("/api/cart/remove/1").status_code == 404

    user_client.post("/api/cart/add", json={"product_id": 1})
    user_client.post("/api/cart/add", json={"product_id": 2})
    assert lines(user_client.delete("/api/cart/remove/1").json()) == {2: 1}

    body = user_client.delete("/api/cart/clear").json()
    assert body["items"] == []
    assert body["totals"]["total"] == 0.0


def test_merge_guest_cart(user_client, store):
    user_client.post("/api/cart/add", json={"product_id": 11})
    store.products[6].in_stock = False

    response = user_client.post(
        "/api/cart/merge",
        json={
            "items": [
                {"product_id": 11, "quantity": 2},
                {"product_id": 7, "quantity": 1},
                {"product_id": 999, "quantity": 1},
                {"product_id": 6, "quantity": 1},
            ]
        },
    )
    assert response.status_code == 200
    assert lines(response.json()) == {11: 3, 7: 1}


def test_merge_into_missing_cart_creates_it(user_client):
    body = user_client.post("/api/cart/merge", json={"items": [{"product_id": 2, "quantity": 2}]}).json()
    assert lines(body) == {2: 2}


def test_save_for_later_and_move_back(user_client):
    user_client.post("/api/cart/add", json={"product_id": 1})
    user_client.post("/api/cart/add", json={"product_id": 2})

    body = user_client.post("/api/cart/save-for-later/1").json()
    assert lines(body) == {2: 1}
    assert lines(body, "saved_for_later") == {1: 1}
    assert body["totals"]["item_count"] == 1

    # Moving back merges with a line already in the cart
    user_client.post("/api/cart/add", json={"product_id": 1, "quantity": 2})
    body = user_client.post("/api/cart/move-to-cart/1").json()
    assert lines(body) == {2: 1, 1: 3}
    assert body["saved_for_later"] == []

    assert user_client.post("/api/cart/move-to-cart/1").status_code == 404
