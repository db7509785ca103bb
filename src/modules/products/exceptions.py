"""Product domain exceptions.

Raised by the Service Layer for look-up failures.  Validation problems are
*not* exceptions: they travel as ``ValidationFailure`` / ``SaveFailure``
values.  The API layer (Views) catches these and translates them into
HTTP responses.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """The requested product does not exist."""
