"""Product service layer (Use Cases).

``ProductService.save_product`` is the create/update path shared by both
controllers.  It is fail-fast: when validation rejects the input, the
record is left untouched (no patch, no photo read, no write) and a
``SaveFailure`` is returned.  Once validation passes the steps run strictly
in sequence: slug → ``apply_patch`` → photo → ``asave``.

Persistence and I/O errors are not caught here; they propagate to the
caller, which owns the mapping to a user-facing error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from uuid import UUID

import structlog

from modules.products.dtos import (
    ProductFields,
    ProductFiles,
    ProductPolicy,
    SaveFailure,
    SaveResult,
    SaveSuccess,
)
from modules.products.exceptions import ProductNotFound
from modules.products.photos import FileSystemPhotoReader, attach_photo_if_present
from modules.products.slugs import derive_slug
from modules.products.validators import validate_product_fields

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.products.photos import PhotoReader
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    ``policy`` defaults to the limits configured in Django settings.
    """

    def __init__(
        self,
        repository: IProductRepository,
        policy: Optional[ProductPolicy] = None,
    ) -> None:
        self._repo = repository
        self._policy = policy if policy is not None else ProductPolicy.from_settings()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def save_product(
        self,
        product: Product,
        fields: ProductFields,
        files: ProductFiles,
        read_bytes: Optional[PhotoReader] = None,
    ) -> SaveResult:
        """Validate ``fields``/``files`` and persist them onto ``product``.

        Create and update are the same operation here; which one happens
        depends only on whether ``product`` is a fresh instance or one
        loaded by key.
        """
        failure = validate_product_fields(fields, files, self._policy)
        if failure is not None:
            logger.warning(
                "product.validation_failed",
                status=failure.status,
                error=failure.error,
            )
            return SaveFailure.from_validation(failure)

        slug = derive_slug(fields.name)
        product.apply_patch({**fields.to_patch(), "slug": slug})

        reader = read_bytes if read_bytes is not None else FileSystemPhotoReader()
        await attach_photo_if_present(product, files.photo, reader)

        await product.asave()
        logger.info(
            "product.saved",
            product_id=str(product.id),
            slug=slug,
            with_photo=files.photo is not None,
        )
        return SaveSuccess()

    def delete_product(self, id: str) -> None:
        """Delete a product permanently.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def get_product_by_slug(self, slug: str) -> Product:
        product = self._repo.get_by_slug(slug)
        if not product:
            raise ProductNotFound(f"Product '{slug}' not found.")
        return product

    def category_exists(self, category_id: UUID) -> bool:
        return self._repo.category_exists(category_id)
