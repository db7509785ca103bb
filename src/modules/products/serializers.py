"""Product DRF serializers for API output.

Input never goes through these: requests are parsed into the Pydantic DTOs
from ``dtos.py`` and handed to the Service Layer.  Photo bytes are never
serialized; clients fetch them from the ``photo`` endpoint.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only representation of a product, without its photo payload."""

    has_photo = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "price",
            "category",
            "quantity",
            "shipping",
            "has_photo",
            "photo_content_type",
            "created_at",
            "updated_at",
        ]
