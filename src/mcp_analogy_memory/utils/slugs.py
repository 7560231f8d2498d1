"""Deterministic identifiers derived from free text."""

import re

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9_]")


def slugify(text: str) -> str:
    """Lowercase, collapse whitespace runs to ``_``, drop everything else non-alphanumeric.

    ``"Session Storage"`` → ``"session_storage"``;
    ``"auth-middleware (v2)"`` → ``"authmiddleware_v2"``.
    """
    return _DISALLOWED.sub("", _WHITESPACE.sub("_", text.lower()))
