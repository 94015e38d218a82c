"""Error Decoding — message extraction with fixed fallback."""

import pytest

from authsession.core.error_decoding import (
    decode_error_message,
    extract_message,
    parse_json_object,
)


def test_message_field_is_used():
    assert decode_error_message(b'{"message": "bad credentials"}', "Login failed") == "bad credentials"


def test_str_body_is_accepted():
    assert extract_message('{"message": "taken"}') == "taken"


@pytest.mark.parametrize("body", [
    b"",
    b"not json",
    b"<html>502 Bad Gateway</html>",
    b'["message"]',
    b'"message"',
    b"null",
    b'{"error": "nope"}',
    b'{"message": ""}',
    b'{"message": null}',
    b'{"message": 42}',
    b"\xff\xfe\x00",
])
def test_unusable_bodies_fall_back_to_default(body):
    assert decode_error_message(body, "Registration failed") == "Registration failed"


def test_parse_json_object_returns_dict():
    assert parse_json_object(b'{"a": 1}') == {"a": 1}


def test_parse_json_object_rejects_arrays():
    assert parse_json_object(b"[1, 2]") is None
