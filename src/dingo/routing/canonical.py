"""Canonical URL paths.

A canonical path starts with ``/``, has no ``.``/``..``/empty segments,
and ends with ``/``. Canonical routes redirect every other spelling of
their path to this one.
"""

import posixpath


def canonicalize(path: str) -> tuple[str, bool]:
    """Return ``(canonical_path, was_canonical)`` for *path*.

    Total over all strings: never raises. ``was_canonical`` is true only
    when the canonical form is identical to *path*.
    """
    if not path:
        return "/", False

    cleaned = posixpath.normpath(path if path.startswith("/") else "/" + path)
    # normpath keeps a POSIX-significant leading "//"; URL paths don't.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if not cleaned.endswith("/"):
        cleaned += "/"

    return cleaned, cleaned == path
