"""Tests for identifier <-> slot name encoding."""

import pytest

from ondemand.naming import decode_slot_name, encode_identifier


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("requests", "requests"),
        ("@scope/name", "at__scope__slash__name"),
        ("scope/name", "scope__slash__name"),
        ("name@1", "nameat__1"),
    ],
)
def test_encode_identifier(identifier: str, expected: str) -> None:
    assert encode_identifier(identifier) == expected


def test_encoded_name_is_single_path_segment() -> None:
    assert "/" not in encode_identifier("@types/node")
    assert "@" not in encode_identifier("@types/node")


@pytest.mark.parametrize(
    "identifier",
    [
        "@types/node",
        "@a/b",
        "@babel/core",
        "@scope/cat",
        "cat@x/dog",
        "left-pad",
        "cat/dog",
        "zope.interface",
    ],
)
def test_round_trip_for_single_scope_and_slash(identifier: str) -> None:
    assert decode_slot_name(encode_identifier(identifier)) == identifier


def test_only_first_separator_is_substituted() -> None:
    """Multi-separator identifiers are outside the supported shape."""
    assert encode_identifier("a/b/c") == "a__slash__b/c"
    assert encode_identifier("@a@b") == "at__a@b"


def test_marker_text_without_scope_does_not_round_trip() -> None:
    """A bare "at__" in a name is read back as a scope marker."""
    assert encode_identifier("cat__dog") == "cat__dog"
    assert decode_slot_name("cat__dog") == "c@dog"
