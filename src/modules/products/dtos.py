"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
Every DTO is immutable (``frozen=True``).

Inputs
    - ``ProductFields``: the non-file form fields of a create/update request.
      All members are optional; presence is the validator's concern.
    - ``PhotoUpload``: metadata of an uploaded photo before its bytes are read.
    - ``ProductFiles``: the file part of the request.

Outputs
    - ``ValidationFailure``: what the validator returns for a rejected request.
    - ``SaveSuccess`` / ``SaveFailure``: the ``SaveResult`` union.
    - ``ProductPolicy``: configurable limits the validator enforces.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, Mapping, Optional, Union
from uuid import UUID

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Column limits of ``Product``; values outside them are parse errors.
NAME_MAX_LENGTH = 255
PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2
QUANTITY_MIN = -2_147_483_648
QUANTITY_MAX = 2_147_483_647

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ProductFields(BaseModel):
    """Field bag of a product create/update request, parsed.

    Blank strings become ``None`` before coercion, so an empty form field
    reads as "absent" rather than failing to parse as a number.  Values that
    would not fit the ``Product`` columns fail here too.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    category: Optional[UUID] = None
    quantity: Optional[int] = Field(default=None, ge=QUANTITY_MIN, le=QUANTITY_MAX)
    shipping: Optional[bool] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> ProductFields:
        """Parse the known keys of a request payload, ignoring the rest."""
        return cls.model_validate(
            {name: data.get(name) for name in cls.model_fields}
        )

    def to_patch(self) -> dict[str, Any]:
        """Supplied fields as model attributes, ready for ``apply_patch``."""
        patch = {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category_id": self.category,
            "quantity": self.quantity,
            "shipping": self.shipping,
        }
        return {field: value for field, value in patch.items() if value is not None}


class PhotoUpload(BaseModel):
    """Descriptor of an uploaded photo: where its bytes are, and what they claim to be."""

    model_config = ConfigDict(frozen=True)

    path: str
    content_type: str
    size: int = Field(ge=0)


class ProductFiles(BaseModel):
    model_config = ConfigDict(frozen=True)

    photo: Optional[PhotoUpload] = None


# ---------------------------------------------------------------------------
# Validation / save results
# ---------------------------------------------------------------------------


class ValidationFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: int
    error: str


class SaveSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True


class SaveFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    status: int
    error: str

    @classmethod
    def from_validation(cls, failure: ValidationFailure) -> SaveFailure:
        return cls(status=failure.status, error=failure.error)


SaveResult = Union[SaveSuccess, SaveFailure]


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


class ProductPolicy(BaseModel):
    """Limits applied by ``validate_product_fields``.

    ``min_price`` / ``min_quantity`` default to ``None``: without explicit
    configuration only presence is checked.
    """

    model_config = ConfigDict(frozen=True)

    photo_max_bytes: int = 1_000_000
    min_price: Optional[Decimal] = None
    min_quantity: Optional[int] = None

    @classmethod
    def from_settings(cls) -> ProductPolicy:
        return cls(
            photo_max_bytes=getattr(settings, "PRODUCT_PHOTO_MAX_BYTES", 1_000_000),
            min_price=getattr(settings, "PRODUCT_MIN_PRICE", None),
            min_quantity=getattr(settings, "PRODUCT_MIN_QUANTITY", None),
        )


DEFAULT_POLICY = ProductPolicy()
