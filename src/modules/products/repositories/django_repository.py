"""Django ORM implementation of the Product repository.

Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity into a domain exception.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction

from modules.products.models import Category, Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_slug(self, slug: str) -> Optional[Product]:
        return Product.objects.filter(slug=slug).order_by("-created_at").first()

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Permanently delete a product by ID.

        Returns ``True`` if a row was removed, ``False`` if no product
        exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.deleted", product_id=str(id))
        return True

    def category_exists(self, category_id: UUID) -> bool:
        return Category.objects.filter(id=category_id).exists()
