"""Unit tests for the catalog models.

Covers:
- Product creation, UUIDv7 ids, timestamps, inline photo storage.
- apply_patch: bulk assignment and rejection of unknown fields.
- Category deletion protection.
- INFO log on persistence.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from django.db.models import ProtectedError

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestProductCreation:
    def test_create_with_valid_data(self, make_product, category):
        p = make_product()
        p.refresh_from_db()
        assert p.name == "Widget"
        assert p.slug == "widget"
        assert p.price == Decimal("19.99")
        assert p.category == category
        assert p.quantity == 10

    def test_id_is_uuid7(self, make_product):
        p = make_product()
        assert isinstance(p.id, uuid.UUID)
        assert p.id.version == 7

    def test_timestamps_set_on_create(self, make_product):
        p = make_product()
        assert p.created_at is not None
        assert p.updated_at is not None

    def test_photo_defaults_to_empty(self, make_product):
        p = make_product()
        p.refresh_from_db()
        assert p.photo is None
        assert p.photo_content_type == ""
        assert p.has_photo is False

    def test_shipping_defaults_to_unset(self, make_product):
        assert make_product().shipping is None

    def test_photo_round_trips(self, make_product):
        p = make_product(photo=b"\x89PNG", photo_content_type="image/png")
        p.refresh_from_db()
        assert bytes(p.photo) == b"\x89PNG"
        assert p.has_photo is True

    def test_negative_values_allowed_at_model_level(self, make_product):
        p = make_product(price=Decimal("-1.00"), quantity=-5)
        p.refresh_from_db()
        assert p.quantity == -5


class TestApplyPatch:
    def test_assigns_all_fields(self, category):
        p = Product()
        p.apply_patch(
            {
                "name": "Desk",
                "slug": "desk",
                "description": "Oak",
                "price": Decimal("10"),
                "category_id": category.id,
                "quantity": 2,
                "shipping": False,
            }
        )
        assert p.name == "Desk"
        assert p.slug == "desk"
        assert p.category_id == category.id
        assert p.shipping is False

    def test_does_not_touch_unlisted_fields(self, make_product):
        p = make_product(shipping=True)
        p.apply_patch({"name": "Renamed"})
        assert p.name == "Renamed"
        assert p.shipping is True
        assert p.description == "A fine widget"

    def test_unknown_field_rejected_without_partial_application(self):
        p = Product(name="Before")
        with pytest.raises(ValueError, match="photo"):
            p.apply_patch({"name": "After", "photo": b"sneaky"})
        assert p.name == "Before"
        assert p.photo is None


class TestCategoryProtection:
    def test_category_with_products_cannot_be_deleted(self, make_product, category):
        make_product()
        with pytest.raises(ProtectedError):
            category.delete()


class TestProductLogging:
    def test_persist_logs_event(self, make_product, caplog):
        with caplog.at_level("INFO"):
            make_product()
        assert any("product.persisted" in r.getMessage() for r in caplog.records)


class TestStr:
    def test_str(self, make_product):
        assert str(make_product()) == "Widget (widget)"
