"""Filesystem- and URL-safe slugs for page paths and in-page anchors."""

import re

# Keep lowercase letters, digits, underscore and dash; everything else separates.
SLUG_UNSAFE_RE = re.compile(r"[^a-z0-9_-]+")

# Basenames Windows refuses to create, whatever the extension.
RESERVED_NAMES = {
    "con",
    "prn",
    "aux",
    "nul",
    *(f"com{i}" for i in range(1, 10)),
    *(f"lpt{i}" for i in range(1, 10)),
}


def slugify(name: str) -> str:
    """Make a stable, lower-cased filename token from a qualified name.

    ``ns::Widget<T>`` -> ``ns-widget-t``; ``include/foo.h`` -> ``include-foo-h``.
    """
    s = name.strip().lower()
    s = s.replace("::", "-")
    s = s.replace("~", "dtor-")
    s = SLUG_UNSAFE_RE.sub("-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-_")
    if not s:
        return "unnamed"
    if s in RESERVED_NAMES:
        return f"{s}-page"
    return s


def header_slug(s: str) -> str:
    """Generate a GitHub-ish anchor slug: lower, hyphenate non-alnum."""
    s = s.strip().lower()
    s = s.replace("~", "dtor-")
    s = re.sub(r"[^a-z0-9_]+", "-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "section"


def disambiguate(slug: str, taken: set[str]) -> str:
    """Return ``slug`` or the first free ``slug-2``, ``slug-3``... and mark it taken."""
    candidate = slug
    n = 2
    while candidate in taken:
        candidate = f"{slug}-{n}"
        n += 1
    taken.add(candidate)
    return candidate
