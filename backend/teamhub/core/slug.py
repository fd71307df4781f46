"""Slug derivation for organization names.

Invariants:
    - Output is lowercase ASCII [a-z0-9-]
    - Whitespace runs collapse to one hyphen; hyphen runs collapse to one
    - No leading or trailing hyphen
"""

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def generate_slug(name: str) -> str:
    slug = _DISALLOWED.sub("", name.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
