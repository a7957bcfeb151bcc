"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv


@dataclass(frozen=True)
class ClosingSettings:
    """Settings for the closing journal entries.

    Attributes:
        currency: Currency code stamped on closing lines.
        document_type: Document type tag of closing entries.
        numbering_series: Numbering series used to allocate entry numbers.
        fallback_prefix: Prefix of synthetic numbers used when the
            numbering series is unavailable.
    """

    currency: str = "EUR"
    document_type: str = "ID"
    numbering_series: str = "journal_entry_ID"
    fallback_prefix: str = "JE"

    @classmethod
    def from_env(cls) -> "ClosingSettings":
        """Build settings from environment variables.

        Returns:
            ClosingSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        defaults = cls()
        return cls(
            currency=cls._read("CLOSING_CURRENCY", defaults.currency).upper(),
            document_type=cls._read(
                "CLOSING_DOCUMENT_TYPE",
                defaults.document_type,
            ),
            numbering_series=cls._read(
                "CLOSING_NUMBERING_SERIES",
                defaults.numbering_series,
            ),
            fallback_prefix=cls._read(
                "CLOSING_FALLBACK_PREFIX",
                defaults.fallback_prefix,
            ),
        )

    @staticmethod
    def _read(name: str, default: str) -> str:
        value = os.getenv(name, "").strip()
        return value or default


__all__ = ["ClosingSettings"]
