"""Product repository interface.

Extends ``IRepository[Product]`` with the slug look-up used by the public
product page.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[Product]:
        """Retrieve the most recent product carrying ``slug``."""

    @abstractmethod
    def category_exists(self, category_id: UUID) -> bool:
        """Whether a category with ``category_id`` exists."""
