"""Naming helpers for package identifiers and generated class names."""

from __future__ import annotations

NSWAG_OPTION_PREFIX = "NSwag"


class ClassNameError(ValueError):
    """Raised when a dotted name cannot be turned into a class name."""


def sanitize_class_name(name: str) -> str:
    """Convert a dotted package id to a PascalCase class name.

    Each dot-separated segment gets its first character upper-cased and the
    segments are joined without a separator, e.g. ``"My.Package.Name"``
    becomes ``"MyPackageName"``.

    Args:
        name (str): Dotted package identifier.

    Returns:
        str: Class name built from the segments.

    Raises:
        ClassNameError: If any segment is empty.
    """
    segments = name.split(".")
    if any(not segment for segment in segments):
        raise ClassNameError(f"Cannot derive a class name from {name!r}: empty segment")
    return "".join(segment[0].upper() + segment[1:] for segment in segments)


def normalize_prefix(prefix: str, value: str) -> str:
    """Return ``value`` with ``prefix`` prepended unless already present.

    The check is case-insensitive and an existing prefix keeps its casing.
    """
    if value.lower().startswith(prefix.lower()):
        return value
    return prefix + value
