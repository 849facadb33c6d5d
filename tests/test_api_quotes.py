from storefront.data.models import QuoteItemModel, QuoteModel

USER = "buyer@masala-house"
ACCOUNT = "acct-masala-house"
HEADERS = {"X-User-Id": USER, "X-Business-Account-Id": ACCOUNT}


def line(variant, quantity=10):
    return {"productId": variant.product_id, "variantId": variant.id, "quantity": quantity}


def test_quotes_require_identity_and_business_account(client):
    assert client.get("/b2b/quotes").status_code == 401

    resp = client.get("/b2b/quotes", headers={"X-User-Id": USER})
    assert resp.status_code == 403
    assert resp.json() == {"error": "Business account required"}

    resp = client.post("/b2b/quotes", json={"items": []}, headers={"X-User-Id": USER})
    assert resp.status_code == 403


def test_create_quote_with_unpriced_lines(client, fresh, make_variant):
    saffron = make_variant(name="Saffron", price_minor=50000)
    pepper = make_variant(name="Pepper", price_minor=30000)

    resp = client.post(
        "/b2b/quotes",
        json={"items": [line(saffron, 50), line(pepper, 200)], "notes": "Monthly restock"},
        headers=HEADERS,
    )

    assert resp.status_code == 201
    quote = resp.json()["quote"]
    assert quote["status"] == "pending"
    assert quote["businessAccountId"] == ACCOUNT
    assert quote["notes"] == "Monthly restock"
    assert quote["totalMinor"] == 0
    assert [i["product"]["name"] for i in quote["items"]] == ["Saffron", "Pepper"]
    assert [i["quantity"] for i in quote["items"]] == [50, 200]
    assert all(i["priceMinor"] == 0 and i["totalMinor"] == 0 for i in quote["items"])

    with fresh() as s:
        stored = s.get(QuoteModel, quote["id"])
        assert stored.requested_by == USER
        assert len(stored.items) == 2


def test_invalid_line_writes_nothing(client, fresh, make_variant):
    one = make_variant()
    other = make_variant()
    mismatched = {"productId": other.product_id, "variantId": one.id, "quantity": 5}

    resp = client.post("/b2b/quotes", json={"items": [line(one), mismatched]}, headers=HEADERS)

    assert resp.status_code == 400
    assert resp.json() == {"error": f"Invalid product or variant: {other.product_id}"}

    resp = client.post(
        "/b2b/quotes",
        json={"items": [{"productId": one.product_id, "variantId": "ghost", "quantity": 1}]},
        headers=HEADERS,
    )
    assert resp.status_code == 400

    with fresh() as s:
        assert s.query(QuoteModel).count() == 0
        assert s.query(QuoteItemModel).count() == 0


def test_quote_payload_validation(client, make_variant):
    variant = make_variant()

    resp = client.post("/b2b/quotes", json={"items": [line(variant, quantity=0)]}, headers=HEADERS)
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("quantity:")

    resp = client.post("/b2b/quotes", json={"items": []}, headers=HEADERS)
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("items:")


def test_list_quotes_newest_first_per_account(client, make_variant):
    variant = make_variant()
    first = client.post("/b2b/quotes", json={"items": [line(variant, 5)]}, headers=HEADERS).json()["quote"]
    second = client.post("/b2b/quotes", json={"items": [line(variant, 9)]}, headers=HEADERS).json()["quote"]
    client.post(
        "/b2b/quotes",
        json={"items": [line(variant, 1)]},
        headers={"X-User-Id": "someone", "X-Business-Account-Id": "acct-other"},
    )

    resp = client.get("/b2b/quotes", headers=HEADERS)

    assert resp.status_code == 200
    quotes = resp.json()["quotes"]
    assert [q["id"] for q in quotes] == [second["id"], first["id"]]
    assert quotes[0]["items"][0]["variant"]["sku"] == variant.sku
