"""Shared presence checks for credential inputs."""

from __future__ import annotations


def is_missing(value: str | None) -> bool:
    """Return whether one credential input is absent.

    Only the literal absence of a value counts: whitespace-only strings are
    kept as supplied and are not treated as missing.
    """

    return value is None or value == ""


def any_missing(*values: str | None) -> bool:
    """Return whether any of the provided credential inputs is absent."""

    return any(is_missing(value) for value in values)
