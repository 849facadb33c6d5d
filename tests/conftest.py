import os
import tempfile
from datetime import datetime, timedelta, timezone
from decimal import Decimal

_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")

# musi byc ustawione przed pierwszym importem storefront.*
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

import pytest
from fastapi.testclient import TestClient

from storefront.api.deps import get_lock_service
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import (
    AddressModel,
    CartItemModel,
    DiscountCodeModel,
    ProductModel,
    ProductVariantModel,
)
from storefront.main import app


class FakeLockService:
    """Lock w pamieci zamiast Redisa."""

    def __init__(self):
        self.locks = {}
        self.released = []

    def acquire_checkout_lock(self, user_id, token, ttl):
        if user_id in self.locks:
            return False
        self.locks[user_id] = token
        return True

    def release_checkout_lock(self, user_id, token):
        if self.locks.get(user_id) == token:
            del self.locks[user_id]
            self.released.append(user_id)
            return True
        return False


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def client(lock_service):
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_variant(db):
    counter = {"n": 0}

    def _make(price_minor=50000, stock_qty=10, weight_grams=100, name="Cardamom", active=True):
        counter["n"] += 1
        n = counter["n"]
        product = ProductModel(name=name, slug=f"{name.lower()}-{n}", origin="Kerala", is_active=True)
        db.add(product)
        db.flush()
        variant = ProductVariantModel(
            product_id=product.id,
            sku=f"SKU-{n}",
            name=f"{weight_grams} g",
            price_minor=price_minor,
            list_price_minor=price_minor + 1000,
            weight_grams=weight_grams,
            stock_qty=stock_qty,
            is_active=active,
        )
        db.add(variant)
        db.commit()
        return variant

    return _make


@pytest.fixture
def make_address(db):
    def _make(user_id):
        address = AddressModel(
            user_id=user_id,
            full_name="Asha Rao",
            line1="221 Residency Road",
            city="Bengaluru",
            postal_code="560025",
            country="IN",
        )
        db.add(address)
        db.commit()
        return address

    return _make


@pytest.fixture
def add_to_cart(db):
    def _add(user_id, variant, quantity=1, gift_note=None):
        item = CartItemModel(
            user_id=user_id,
            product_id=variant.product_id,
            variant_id=variant.id,
            quantity=quantity,
            gift_note=gift_note,
        )
        db.add(item)
        db.commit()
        return item

    return _add


@pytest.fixture
def make_coupon(db):
    def _make(
        code="SAVE10",
        kind="percentage",
        value="10",
        max_discount_minor=None,
        is_active=True,
        valid_from=None,
        valid_until=None,
    ):
        now = datetime.now(timezone.utc)
        coupon = DiscountCodeModel(
            code=code,
            kind=kind,
            value=Decimal(value),
            max_discount_minor=max_discount_minor,
            is_active=is_active,
            valid_from=valid_from or now - timedelta(days=1),
            valid_until=valid_until or now + timedelta(days=30),
        )
        db.add(coupon)
        db.commit()
        return coupon

    return _make


@pytest.fixture
def fresh():
    """Nowa sesja do asercji - widzi to, co zacommitowala aplikacja."""
    return SessionLocal
