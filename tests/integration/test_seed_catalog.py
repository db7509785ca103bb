"""Integration tests for the ``seed_catalog`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from modules.products.models import Category, Product

pytestmark = pytest.mark.integration


def _seed(*args) -> str:
    out = StringIO()
    call_command("seed_catalog", *args, stdout=out, stderr=StringIO())
    return out.getvalue()


class TestSeedCatalog:
    def test_seeds_categories_products_and_admin(self):
        output = _seed()

        assert "Seed completed" in output
        assert Category.objects.count() == 3
        assert Product.objects.count() == 6
        assert get_user_model().objects.filter(username="admin", is_staff=True).exists()

    def test_products_get_derived_slugs(self):
        _seed()
        assert Product.objects.filter(slug="ergonomic-chair").exists()
        assert Product.objects.filter(slug="monitor-27").exists()

    def test_is_idempotent(self):
        _seed()
        output = _seed()
        assert Product.objects.count() == 6
        assert "products=0" in output

    def test_attaches_photos_from_directory(self, tmp_path):
        (tmp_path / "office-desk.jpg").write_bytes(b"\xff\xd8desk")

        _seed("--photos-dir", str(tmp_path))

        desk = Product.objects.get(slug="office-desk")
        assert bytes(desk.photo) == b"\xff\xd8desk"
        assert desk.photo_content_type == "image/jpeg"
        assert Product.objects.get(slug="wireless-mouse").photo is None

    def test_rejects_missing_directory(self, tmp_path):
        with pytest.raises(CommandError):
            _seed("--photos-dir", str(tmp_path / "nope"))
