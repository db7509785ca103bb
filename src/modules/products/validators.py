"""Field validation for product create/update requests.

``validate_product_fields`` is pure: it inspects parsed input and returns
either ``None`` or a ``ValidationFailure`` describing the *first* rule the
input violates.  Rules run in a fixed order so that a request missing
several fields always reports the same message:

    name > description > price > category > quantity > bounds > photo size
"""

from __future__ import annotations

from typing import Optional

from modules.products.dtos import (
    DEFAULT_POLICY,
    ProductFields,
    ProductFiles,
    ProductPolicy,
    ValidationFailure,
)

BAD_REQUEST = 400

REQUIRED_FIELDS = (
    ("name", "Name is Required"),
    ("description", "Description is Required"),
    ("price", "Price is Required"),
    ("category", "Category is Required"),
    ("quantity", "Quantity is Required"),
)

PHOTO_TOO_LARGE = "Photo should be less then 1mb"


def _fail(message: str) -> ValidationFailure:
    return ValidationFailure(status=BAD_REQUEST, error=message)


def validate_product_fields(
    fields: ProductFields,
    files: ProductFiles,
    policy: ProductPolicy = DEFAULT_POLICY,
) -> Optional[ValidationFailure]:
    for field, message in REQUIRED_FIELDS:
        if getattr(fields, field) is None:
            return _fail(message)

    if policy.min_price is not None and fields.price < policy.min_price:
        return _fail(f"Price should be at least {policy.min_price}")
    if policy.min_quantity is not None and fields.quantity < policy.min_quantity:
        return _fail(f"Quantity should be at least {policy.min_quantity}")

    # Inclusive bound: a photo of exactly ``photo_max_bytes`` is accepted.
    if files.photo is not None and files.photo.size > policy.photo_max_bytes:
        return _fail(PHOTO_TOO_LARGE)

    return None
