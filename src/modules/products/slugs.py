import hashlib
import re

from django.utils.text import slugify

# Punctuation separates words ("2.4GHz" -> "2-4ghz") instead of vanishing.
_PUNCTUATION = re.compile(r"[^\w\s-]")

# Length of ``Product.slug``.
SLUG_MAX_LENGTH = 255


def derive_slug(name: str) -> str:
    """Return a URL-safe, lowercase, hyphenated slug for ``name``.

    Never empty: names with no ASCII letters or digits fall back to a
    unicode slug, then to a digest of the name.  Never longer than
    ``SLUG_MAX_LENGTH``, since ASCII folding can expand some characters.
    """
    spaced = _PUNCTUATION.sub(" ", name)
    slug = slugify(spaced) or slugify(spaced, allow_unicode=True)
    slug = slug[:SLUG_MAX_LENGTH].rstrip("-_")
    if slug:
        return slug
    digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:12]
    return f"product-{digest}"
