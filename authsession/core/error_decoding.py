"""Error Decoding — extracts the backend's `message` field from an error body.

Invariants:
    - Never raises: any body (empty, non-JSON, non-object) yields a string
    - A message is used only if it is a non-empty str; otherwise the default wins
    - Parse failures are indistinguishable from a missing field to the caller

Design Decisions:
    - Fallback is explicit branching on the parse result, not exception
      suppression at call sites
"""

import json
from typing import Any


def parse_json_object(body: bytes | str) -> dict[str, Any] | None:
    """Parse body as a JSON object. Returns None for empty, invalid or non-object bodies."""
    if not body:
        return None
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return data


def extract_message(body: bytes | str) -> str | None:
    """Return the body's `message` field if it is a non-empty string."""
    data = parse_json_object(body)
    if data is None:
        return None
    message = data.get("message")
    if isinstance(message, str) and message:
        return message
    return None


def decode_error_message(body: bytes | str, default: str) -> str:
    """Backend message if present, else the operation's fixed default."""
    return extract_message(body) or default
