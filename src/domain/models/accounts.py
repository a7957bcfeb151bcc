"""Domain models for chart-of-accounts entries and their balances."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Account:
    """Company-scoped chart-of-accounts entry."""

    id: str
    company_id: str
    code: str
    name: str
    nature: str
    active: bool = True


@dataclass(frozen=True)
class ControlAccount:
    """Well-known account used as counterpart of closing postings.

    Attributes:
        code: Account code looked up or created per company.
        name: Display name used when the account has to be created.
        nature: Account nature (active or passive) used on creation.
    """

    code: str
    name: str
    nature: str


@dataclass(frozen=True)
class AccountBalance:
    """Debit and credit totals of an account over a period.

    Attributes:
        account_id: Identifier of the account.
        code: Account code.
        name: Account display name.
        total_debit: Sum of posted debit amounts.
        total_credit: Sum of posted credit amounts.
    """

    account_id: str
    code: str
    name: str
    total_debit: Decimal
    total_credit: Decimal

    @property
    def net_balance(self) -> Decimal:
        """Return total_debit minus total_credit."""
        return self.total_debit - self.total_credit


__all__ = ["Account", "ControlAccount", "AccountBalance"]
