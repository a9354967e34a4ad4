"""
Request encoder.

Turns a request struct into the ``key=value&...`` string that is sent (and signed).
Keys are the wire names of the struct fields, sorted lexicographically so that the
same request always produces the same bytes. Empty optional fields are skipped.

Sequence fields follow the convention of the endpoint they belong to:
- default: repeated pairs, ``orderIds=1&orderIds=2``
- fields named in ``Request.json_array_fields``: a single JSON array,
  ``symbols=%5B%22BTCUSDT%22%5D``
"""

from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Tuple
from urllib.parse import quote_plus

import msgspec

from binance_api.exceptions import EncodingError
from binance_api.structs.requests import Request


def _is_empty(value: Any) -> bool:
    # Zero is a valid value (e.g. fromId=0), only absent values are skipped
    return value is None or value == "" or (isinstance(value, (list, tuple)) and not value)


def stringify(value: Any) -> str:
    """Convert one scalar field value into its wire representation."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # Plain notation, never 1e-05
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal):
        return format(value, "f")
    raise EncodingError(f"Cannot encode value of type {type(value).__name__}: {value!r}")


def encode_pairs(request: Optional[Request]) -> List[Tuple[str, str]]:
    """Return the sorted, unquoted (key, value) pairs of a request."""
    if request is None:
        return []

    json_array_fields = getattr(request, "json_array_fields", frozenset())
    pairs: List[Tuple[str, str]] = []
    for field in msgspec.structs.fields(request):
        value = getattr(request, field.name)
        if _is_empty(value):
            continue

        key = field.encode_name
        if isinstance(value, (list, tuple)):
            items = [stringify(item) for item in value]
            if field.name in json_array_fields:
                pairs.append((key, msgspec.json.encode(items).decode()))
            else:
                pairs.extend((key, item) for item in items)
        else:
            pairs.append((key, stringify(value)))

    # Stable sort keeps repeated keys in their original order
    pairs.sort(key=lambda pair: pair[0])
    return pairs


def encode_request(request: Optional[Request]) -> str:
    """
    Encode a request into a URL-encoded parameter string.

    Args:
        request: Request struct, or None for parameterless endpoints

    Returns:
        ``key=value`` pairs joined by ``&``, empty string if nothing to send

    Raises:
        EncodingError: A field value cannot be converted to a string
    """
    return "&".join(f"{quote_plus(key)}={quote_plus(value)}" for key, value in encode_pairs(request))
