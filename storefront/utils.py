import re
from datetime import datetime, timezone

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def utc_now() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def slugify(name: str) -> str:
    """Route slug for a category name: "Home & Decor" -> "home-decor" """
    return _NON_SLUG.sub("-", name.lower().strip()).strip("-")
