from storefront.data.models import CartItemModel

USER = "shopper"
HEADERS = {"X-User-Id": USER}


def add(client, variant, quantity=1, gift_note=None, headers=HEADERS):
    body = {"productId": variant.product_id, "variantId": variant.id, "quantity": quantity}
    if gift_note is not None:
        body["giftNote"] = gift_note
    return client.post("/cart", json=body, headers=headers)


def test_cart_requires_identity(client):
    assert client.get("/cart").status_code == 401


def test_empty_cart_is_not_an_error(client):
    resp = client.get("/cart", headers=HEADERS)

    assert resp.status_code == 200
    assert resp.json() == {
        "items": [],
        "summary": {"subtotal": 0, "totalItems": 0, "totalWeight": 0, "itemCount": 0},
    }


def test_add_and_read_cart(client, make_variant):
    saffron = make_variant(price_minor=50000, weight_grams=1, name="Saffron")
    pepper = make_variant(price_minor=30000, weight_grams=250, name="Pepper")

    resp = add(client, saffron, quantity=2, gift_note="For Amma")
    assert resp.status_code == 201
    assert resp.json()["quantity"] == 2
    assert resp.json()["giftNote"] == "For Amma"
    assert resp.json()["variant"]["priceMinor"] == 50000
    add(client, pepper, quantity=1)

    cart = client.get("/cart", headers=HEADERS).json()

    assert cart["summary"] == {"subtotal": 130000, "totalItems": 3, "totalWeight": 252, "itemCount": 2}
    assert {i["product"]["name"] for i in cart["items"]} == {"Saffron", "Pepper"}


def test_adding_same_variant_merges_quantity(client, make_variant):
    variant = make_variant(stock_qty=5)

    add(client, variant, quantity=2, gift_note="keep me")
    resp = add(client, variant, quantity=1)

    assert resp.status_code == 201
    assert resp.json()["quantity"] == 3
    assert resp.json()["giftNote"] == "keep me"
    assert len(client.get("/cart", headers=HEADERS).json()["items"]) == 1


def test_add_respects_stock(client, make_variant):
    variant = make_variant(stock_qty=3)

    resp = add(client, variant, quantity=4)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Only 3 items available in stock"}

    add(client, variant, quantity=2)
    resp = add(client, variant, quantity=2)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Cannot add 2 more items. Only 1 more available."}


def test_add_unknown_or_inactive_variant(client, make_variant):
    inactive = make_variant(active=False)

    resp = client.post(
        "/cart",
        json={"productId": "x", "variantId": "missing", "quantity": 1},
        headers=HEADERS,
    )
    assert resp.status_code == 404
    assert resp.json() == {"error": "Product or variant not found"}

    assert add(client, inactive).status_code == 404


def test_variant_must_belong_to_product(client, make_variant):
    one = make_variant()
    other = make_variant()

    resp = client.post(
        "/cart",
        json={"productId": other.product_id, "variantId": one.id, "quantity": 1},
        headers=HEADERS,
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Variant does not belong to the specified product"}


def test_add_rejects_zero_quantity(client, make_variant):
    resp = add(client, make_variant(), quantity=0)

    assert resp.status_code == 400
    assert resp.json()["error"].startswith("quantity:")


def test_update_quantity_and_gift_note(client, make_variant):
    variant = make_variant(stock_qty=5)
    item_id = add(client, variant).json()["id"]

    resp = client.patch(f"/cart/{item_id}", json={"quantity": 4, "giftNote": "Wrap it"}, headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 4
    assert resp.json()["giftNote"] == "Wrap it"

    resp = client.patch(f"/cart/{item_id}", json={"quantity": 6}, headers=HEADERS)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Only 5 items available in stock"}


def test_update_to_zero_removes_item(client, fresh, make_variant):
    item_id = add(client, make_variant()).json()["id"]

    resp = client.patch(f"/cart/{item_id}", json={"quantity": 0}, headers=HEADERS)

    assert resp.json() == {"message": "Item removed from cart"}
    with fresh() as s:
        assert s.get(CartItemModel, item_id) is None


def test_cannot_touch_someone_elses_item(client, make_variant):
    item_id = add(client, make_variant()).json()["id"]
    stranger = {"X-User-Id": "stranger"}

    assert client.patch(f"/cart/{item_id}", json={"quantity": 2}, headers=stranger).status_code == 403
    assert client.delete(f"/cart/{item_id}", headers=stranger).status_code == 403
    assert client.delete("/cart/does-not-exist", headers=HEADERS).status_code == 404


def test_remove_and_clear(client, make_variant):
    first = add(client, make_variant()).json()["id"]
    add(client, make_variant())

    resp = client.delete(f"/cart/{first}", headers=HEADERS)
    assert resp.json() == {"message": "Item removed from cart"}
    assert len(client.get("/cart", headers=HEADERS).json()["items"]) == 1

    resp = client.delete("/cart", headers=HEADERS)
    assert resp.json() == {"message": "Cart cleared successfully"}
    assert client.get("/cart", headers=HEADERS).json()["items"] == []


def test_unexpected_failure_returns_json_500(monkeypatch):
    from fastapi.testclient import TestClient

    from storefront.main import app
    from storefront.repos.cart_repo import CartRepo

    def explode(self, user_id):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(CartRepo, "get_items_by_user", explode)

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/cart", headers=HEADERS)

    assert resp.status_code == 500
    assert resp.headers["content-type"] == "application/json"
    assert resp.json() == {"error": "Internal server error"}
