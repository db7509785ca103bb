"""Base abstract model shared by the catalog apps.

``BaseModel`` provides a UUIDv7 primary key plus ``created_at`` /
``updated_at`` timestamps.  UUIDv7 keys are time-ordered, so index
locality stays good while identifiers remain opaque to API clients.
"""

from __future__ import annotations

import uuid6
from django.db import models


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
