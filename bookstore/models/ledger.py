"""
Finance Ledger Models

DESIGN DECISION: The ledger is append-only. Entries are never modified or
deleted; summaries are always recomputed from the entries present.

Amounts are Decimal end to end. Floats are never used for money.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


CENT = Decimal("0.01")


def format_money(amount: Decimal) -> str:
    """
    Render a monetary amount with exactly two fraction digits.

    Ties round half up (2.665 -> "2.67").
    """
    return format(amount.quantize(CENT, rounding=ROUND_HALF_UP), "f")


class Transaction(BaseModel):
    """
    A single ledger entry.

    Income comes from `buy`, expenditure from `import`.
    """
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ...,
        ge=0,
        description="Transaction amount"
    )
    is_income: bool = Field(
        ...,
        description="True for a sale, False for a stock import"
    )


class FinanceSummary(BaseModel):
    """Income and expenditure totals over a run of ledger entries."""

    income: Decimal = Field(default=Decimal("0"))
    expenditure: Decimal = Field(default=Decimal("0"))
    entry_count: int = Field(default=0, ge=0)

    @property
    def net(self) -> Decimal:
        return self.income - self.expenditure

    @classmethod
    def of(cls, entries: Iterable[Transaction]) -> "FinanceSummary":
        income = Decimal("0")
        expenditure = Decimal("0")
        count = 0
        for entry in entries:
            if entry.is_income:
                income += entry.amount
            else:
                expenditure += entry.amount
            count += 1
        return cls(income=income, expenditure=expenditure, entry_count=count)

    def to_finance_line(self) -> str:
        """Format as the `show finance` line: `+ <income> - <expenditure>`."""
        return f"+ {format_money(self.income)} - {format_money(self.expenditure)}"
