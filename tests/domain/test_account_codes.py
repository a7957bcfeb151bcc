"""Tests for account code policies."""

import pytest

from src.domain.policies import matches_code_prefix


@pytest.mark.parametrize(
    ("code", "prefix", "expected"),
    [
        ("601", "6", True),
        ("221.001", "2", True),
        (" 710 ", "710", True),
        ("7101", "710", True),
        ("501", "6", False),
        ("", "6", False),
        (None, "6", False),
        ("601", "", False),
    ],
)
def test_matches_code_prefix(code, prefix, expected) -> None:
    assert matches_code_prefix(code, prefix) is expected
