"""Catalog models: ``Category`` and ``Product``.

A product stores its photo inline (``photo`` bytes + ``photo_content_type``)
instead of pointing at a file on disk, so a record is self-contained.

``slug`` is never user-supplied: the save service derives it from ``name``
on every save, which keeps it in step with the current name.
"""

from __future__ import annotations

from typing import Any, Mapping

import structlog
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Category(BaseModel):
    name = models.CharField(max_length=120, unique=True)
    slug = models.SlugField(max_length=140, db_index=True)

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Product(BaseModel):
    """Catalog entry.

    Price and quantity carry no bounds at the database level; whether
    negative values are acceptable is configurable policy enforced by the
    validator (see ``ProductPolicy``).
    """

    # Attributes ``apply_patch`` may assign.  Anything else is rejected.
    PATCHABLE_FIELDS = frozenset(
        {
            "name",
            "slug",
            "description",
            "price",
            "category_id",
            "quantity",
            "shipping",
        }
    )

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, db_index=True)
    description = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2)
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )
    quantity = models.IntegerField()
    photo = models.BinaryField(null=True, blank=True, default=None)
    photo_content_type = models.CharField(max_length=100, blank=True, default="")
    shipping = models.BooleanField(null=True, blank=True, default=None)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply_patch(self, patch: Mapping[str, Any]) -> None:
        """Assign every key of ``patch`` onto this instance in one step.

        Unknown keys raise ``ValueError`` before any attribute changes, so a
        rejected patch leaves the instance exactly as it was.
        """
        unknown = set(patch) - self.PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot patch product fields: {sorted(unknown)}")
        for field, value in patch.items():
            setattr(self, field, value)

    @property
    def has_photo(self) -> bool:
        return bool(self.photo)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        logger.info(
            "product.persisted",
            product_id=str(self.id),
            slug=self.slug,
            created=is_new,
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.slug})"
