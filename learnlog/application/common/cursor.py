"""
Opaque pagination cursor codec.

A cursor is the base64 encoding of a compact JSON object holding the sort key
of the last item of a page. Clients must treat it as an opaque string.

Example:
    token = encode_cursor({"createdAt": "2025-01-15T10:00:00+00:00", "id": "..."})
    fields = decode_cursor(token, required_fields=("createdAt", "id"))
"""

import base64
import binascii
import json
from collections.abc import Iterable, Mapping

from learnlog.exceptions import InvalidCursorError


def encode_cursor(fields: Mapping[str, str]) -> str:
    """Encode cursor fields into an opaque URL-safe token."""
    payload = json.dumps(dict(fields), separators=(",", ":"), sort_keys=True)
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


def decode_cursor(raw: str, required_fields: Iterable[str]) -> dict[str, str]:
    """
    Decode an opaque cursor token.

    Accepts both the URL-safe and the standard base64 alphabet, with or
    without padding.

    Args:
        raw: Token received from the client
        required_fields: Keys the cursor must contain, each mapped to a string

    Returns:
        The decoded cursor fields

    Raises:
        InvalidCursorError: If the token is not valid base64, not JSON, not an
            object, or lacks one of the required string fields
    """
    try:
        padded = raw + "=" * (-len(raw) % 4)
        decoded = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        payload = json.loads(decoded.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidCursorError() from e

    if not isinstance(payload, dict):
        raise InvalidCursorError()

    fields: dict[str, str] = {}
    for name in required_fields:
        value = payload.get(name)
        if not isinstance(value, str) or not value:
            raise InvalidCursorError()
        fields[name] = value
    return fields
