from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.products.models import Category, Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def staff_client():
    """APIClient force-authenticated as a staff user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="catalog-admin", password="testpass123", is_staff=True
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def category():
    return Category.objects.create(name="Electronics", slug="electronics")


@pytest.fixture()
def make_product(category):
    """Factory persisting a Product with sensible defaults."""

    def _make(**overrides) -> Product:
        defaults = {
            "name": "Widget",
            "slug": "widget",
            "description": "A fine widget",
            "price": Decimal("19.99"),
            "category": category,
            "quantity": 10,
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
