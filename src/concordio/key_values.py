"""Parsing of ``key=value`` command line tokens."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .package_types import KeyValuePair


class KeyValueParseError(ValueError):
    """Raised when a token is not in ``key=value`` form."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid key=value format: '{token}'")
        self.token = token


def parse_key_value_pairs(tokens: Optional[Iterable[str]]) -> list[KeyValuePair]:
    """Parse ``key=value`` tokens into ordered pairs.

    Empty parts are dropped and both sides are trimmed; anything other than
    exactly one key and one value is rejected. Duplicate keys are kept in
    input order.

    Args:
        tokens (Optional[Iterable[str]]): Raw tokens, or ``None``.

    Returns:
        list[KeyValuePair]: Parsed pairs in input order.
    """
    if tokens is None:
        return []

    pairs: list[KeyValuePair] = []
    for token in tokens:
        parts = [part.strip() for part in token.split("=")]
        parts = [part for part in parts if part]
        if len(parts) != 2:
            raise KeyValueParseError(token)
        pairs.append((parts[0], parts[1]))
    return pairs
