"""Policies for hierarchical account codes."""


def normalize_account_code(code: str | None) -> str:
    """Strip surrounding whitespace from an account code.

    Args:
        code: Raw account code.

    Returns:
        str: Cleaned code, empty when missing.
    """
    if not code:
        return ""
    return code.strip()


def matches_code_prefix(code: str | None, prefix: str) -> bool:
    """Return True when the account code belongs to the prefix class.

    Args:
        code: Account code such as ``"221.001"``.
        prefix: Class prefix such as ``"6"`` or ``"710"``.

    Returns:
        bool: True when the code starts with the prefix.
    """
    cleaned = normalize_account_code(code)
    if not cleaned or not prefix:
        return False
    return cleaned.startswith(prefix)


__all__ = [
    "normalize_account_code",
    "matches_code_prefix",
]
