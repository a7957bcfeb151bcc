"""Domain policies package."""

from .account_codes import (
    matches_code_prefix,
    normalize_account_code,
)

__all__ = [
    "matches_code_prefix",
    "normalize_account_code",
]
