"""
Report Execution Engine

DESIGN DECISION: Reports are DETERMINISTIC, read-only views computed
from the in-memory entity model every time they run. Nothing is cached,
so a report always matches the ledger and operation log as they are now.

Every report returns the output lines; the dispatcher writes them.
"""

from collections import Counter
from typing import Optional

from bookstore.context import BookstoreContext
from bookstore.models.ledger import FinanceSummary, format_money


class QueryExecutionError(Exception):
    """Error during report execution."""
    pass


class ReportExecutor:
    """
    Builds the finance, employee and system reports.

    GUARANTEES:
    - Totals are sums over the ledger entries currently present
    - Never mutates the context
    """

    def __init__(self, context: BookstoreContext):
        self._context = context

    def finance_summary(self, count: Optional[int] = None) -> FinanceSummary:
        """
        Summarize the last `count` ledger entries (all of them when None).

        Raises:
            QueryExecutionError: If `count` exceeds the ledger length
        """
        ledger = self._context.ledger
        if count is None:
            return FinanceSummary.of(ledger)
        if count < 0 or count > len(ledger):
            raise QueryExecutionError(
                f"Requested {count} entries but the ledger holds {len(ledger)}"
            )
        if count == 0:
            return FinanceSummary()
        return FinanceSummary.of(ledger[-count:])

    def financial_report(self) -> list[str]:
        summary = self.finance_summary()
        return [
            "=== Financial Report ===",
            f"Total Income: {format_money(summary.income)}",
            f"Total Expenditure: {format_money(summary.expenditure)}",
            f"Net Profit: {format_money(summary.net)}",
        ]

    def employee_report(self) -> list[str]:
        """
        Account count, then one line per staff account with its
        operation count from the operation log.
        """
        accounts = self._context.accounts
        done = Counter(record.actor for record in self._context.operations)

        lines = [
            "=== Employee Work Report ===",
            f"Total employees: {len(accounts)}",
        ]
        for user_id in sorted(accounts):
            account = accounts[user_id]
            if account.is_staff:
                lines.append(f"{user_id}\t{account.username}\t{done[user_id]}")
        return lines

    def system_log(self) -> list[str]:
        lines = [
            "=== System Log ===",
            f"Total transactions: {len(self._context.ledger)}",
        ]
        lines.extend(record.to_log_line() for record in self._context.operations)
        return lines
