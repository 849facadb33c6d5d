import pytest
from sqlalchemy.exc import IntegrityError

from storefront.data.models import OrderModel

USER = "collector"
HEADERS = {"X-User-Id": USER}


def place_order(client, make_address, make_variant, add_to_cart, user=USER, price_minor=50000, quantity=1):
    address = make_address(user)
    add_to_cart(user, make_variant(price_minor=price_minor), quantity=quantity)
    resp = client.post(
        "/checkout",
        json={"shippingAddressId": address.id, "billingAddressId": address.id},
        headers={"X-User-Id": user},
    )
    assert resp.status_code == 200
    return resp.json()


def test_list_orders_with_pagination(client, make_address, make_variant, add_to_cart):
    for _ in range(3):
        place_order(client, make_address, make_variant, add_to_cart)
    place_order(client, make_address, make_variant, add_to_cart, user="someone-else")

    resp = client.get("/orders", params={"page": 1, "limit": 2}, headers=HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["orders"]) == 2
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    second = client.get("/orders", params={"page": 2, "limit": 2}, headers=HEADERS).json()
    assert len(second["orders"]) == 1


def test_list_orders_status_filter(client, make_address, make_variant, add_to_cart):
    place_order(client, make_address, make_variant, add_to_cart)

    pending = client.get("/orders", params={"status": "pending"}, headers=HEADERS).json()
    shipped = client.get("/orders", params={"status": "shipped"}, headers=HEADERS).json()
    everything = client.get("/orders", params={"status": "all"}, headers=HEADERS).json()

    assert pending["pagination"]["total"] == 1
    assert shipped["pagination"]["total"] == 0
    assert everything["pagination"]["total"] == 1


def test_order_detail(client, make_address, make_variant, add_to_cart):
    placed = place_order(client, make_address, make_variant, add_to_cart, price_minor=45000, quantity=2)

    resp = client.get(f"/orders/{placed['orderId']}", headers=HEADERS)

    assert resp.status_code == 200
    order = resp.json()["order"]
    assert order["orderNumber"] == placed["orderNumber"]
    assert order["subtotalMinor"] == 90000
    assert order["items"][0]["lineTotalMinor"] == 90000
    assert sum(i["lineTotalMinor"] for i in order["items"]) == order["subtotalMinor"]


def test_order_detail_ownership(client, make_address, make_variant, add_to_cart):
    placed = place_order(client, make_address, make_variant, add_to_cart)

    assert client.get(f"/orders/{placed['orderId']}", headers={"X-User-Id": "nosy"}).status_code == 403
    assert client.get("/orders/unknown", headers=HEADERS).status_code == 404


def test_wishlist_add_list_remove(client, make_variant):
    variant = make_variant(name="Cinnamon")

    resp = client.post(
        "/wishlist",
        json={"productId": variant.product_id, "variantId": variant.id},
        headers=HEADERS,
    )
    assert resp.status_code == 201
    item = resp.json()
    assert item["product"]["name"] == "Cinnamon"
    assert item["variant"]["sku"] == variant.sku

    again = client.post(
        "/wishlist",
        json={"productId": variant.product_id, "variantId": variant.id},
        headers=HEADERS,
    )
    assert again.status_code == 200
    assert again.json() == {"message": "Item already in wishlist"}

    items = client.get("/wishlist", headers=HEADERS).json()["items"]
    assert [i["id"] for i in items] == [item["id"]]

    assert client.delete(f"/wishlist/{item['id']}", headers={"X-User-Id": "other"}).status_code == 403
    resp = client.delete(f"/wishlist/{item['id']}", headers=HEADERS)
    assert resp.json() == {"message": "Item removed from wishlist"}
    assert client.get("/wishlist", headers=HEADERS).json()["items"] == []


def test_wishlist_product_without_variant_is_deduplicated(client, make_variant):
    variant = make_variant()
    body = {"productId": variant.product_id}

    assert client.post("/wishlist", json=body, headers=HEADERS).status_code == 201
    assert client.post("/wishlist", json=body, headers=HEADERS).status_code == 200


def test_wishlist_unknown_product_or_variant(client, make_variant):
    variant = make_variant()
    other = make_variant()

    resp = client.post("/wishlist", json={"productId": "ghost"}, headers=HEADERS)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Product not found"}

    resp = client.post(
        "/wishlist",
        json={"productId": variant.product_id, "variantId": other.id},
        headers=HEADERS,
    )
    assert resp.status_code == 404
    assert resp.json() == {"error": "Variant not found"}
    assert client.delete("/wishlist/ghost", headers=HEADERS).status_code == 404


def test_list_orders_rejects_unknown_status(client):
    resp = client.get("/orders", params={"status": "lost-in-transit"}, headers=HEADERS)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid status: lost-in-transit"}


def test_order_status_is_constrained(client, fresh, make_address, make_variant, add_to_cart):
    placed = place_order(client, make_address, make_variant, add_to_cart)

    with fresh() as s:
        order = s.get(OrderModel, placed["orderId"])
        order.status = "lost-in-transit"
        with pytest.raises(IntegrityError):
            s.commit()
        s.rollback()

    with fresh() as s:
        assert s.get(OrderModel, placed["orderId"]).status == "pending"
