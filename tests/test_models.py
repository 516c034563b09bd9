"""
Tests for Bookstore models

Test strategy:
1. Unit tests for individual components (models, validators, codecs)
2. Command tests through the dispatcher (in-memory storage)
3. End-to-end runs against real record files in a temp directory
"""

import pytest
from decimal import Decimal

from bookstore.models.account import Account, Privilege
from bookstore.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    OperationRecord,
)
from bookstore.models.book import Book
from bookstore.models.ledger import FinanceSummary, Transaction, format_money


class TestAccountModel:
    """Tests for the Account model."""

    def test_account_creation(self):
        """Test Account model creation with default privilege."""
        account = Account(user_id="alice", password="pass1", username="Alice")
        assert account.privilege == Privilege.CUSTOMER
        assert not account.is_staff

    def test_account_rejects_guest_privilege(self):
        """GUEST is an effective level, never an account's level."""
        with pytest.raises(ValueError):
            Account(user_id="x", password="y", username="z", privilege=Privilege.GUEST)

    def test_account_rejects_bad_user_id(self):
        """Test that identifiers outside [A-Za-z0-9_] are rejected."""
        with pytest.raises(ValueError):
            Account(user_id="bad-id", password="y", username="z")

    def test_privilege_ordering(self):
        """Privilege levels compare numerically."""
        assert Privilege.GUEST < Privilege.CUSTOMER < Privilege.STAFF < Privilege.OWNER
        assert Privilege(3) is Privilege.STAFF


class TestBookModel:
    """Tests for the Book model."""

    def test_blank_book(self):
        """A book created from an ISBN alone has every other field blank."""
        book = Book(isbn="978-0")
        assert book.name == ""
        assert book.keyword == ""
        assert book.price == Decimal("0")
        assert book.quantity == 0
        assert book.keywords == []

    def test_book_rejects_negative_quantity(self):
        """Test that stock can never be negative."""
        with pytest.raises(ValueError):
            Book(isbn="978-0", quantity=-1)

    def test_display_row(self):
        """Test the tab-separated `show` line."""
        book = Book(
            isbn="978-0",
            name="Two Words",
            author="Someone",
            keyword="a|b",
            price=Decimal("12.5"),
            quantity=7,
        )
        assert book.to_display_row() == "978-0\tTwo Words\tSomeone\ta|b\t12.50\t7"

    def test_keywords_split_on_delimiter(self):
        """The stored list splits on the keyword delimiter."""
        assert Book(isbn="1", keyword="a|b c").keywords == ["a", "b c"]

    def test_has_keyword_matches_whole_tokens(self):
        """Keyword matching is per token, not substring."""
        book = Book(isbn="1", keyword="python|programming")
        assert book.has_keyword("python")
        assert not book.has_keyword("pro")


class TestLedgerModels:
    """Tests for ledger models."""

    def test_transaction_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            Transaction(amount=Decimal("-1"), is_income=True)

    def test_finance_summary(self):
        """Summary splits income from expenditure."""
        summary = FinanceSummary.of([
            Transaction(amount=Decimal("37.50"), is_income=True),
            Transaction(amount=Decimal("100"), is_income=False),
            Transaction(amount=Decimal("2.5"), is_income=True),
        ])
        assert summary.income == Decimal("40.00")
        assert summary.expenditure == Decimal("100")
        assert summary.net == Decimal("-60.00")
        assert summary.entry_count == 3
        assert summary.to_finance_line() == "+ 40.00 - 100.00"

    def test_format_money_always_two_digits(self):
        """Monetary values always render with two fraction digits."""
        assert format_money(Decimal("0")) == "0.00"
        assert format_money(Decimal("3")) == "3.00"
        assert format_money(Decimal("1.234")) == "1.23"

    def test_format_money_rounds_half_up(self):
        """Ties at the third fraction digit round away from zero."""
        assert format_money(Decimal("2.665")) == "2.67"
        assert format_money(Decimal("2.675")) == "2.68"
        assert format_money(Decimal("-75.005")) == "-75.01"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.COMMAND_ACCEPTED,
            description="Command accepted: su",
        )
        assert event.event_type == AuditEventType.COMMAND_ACCEPTED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.command_rejected("buy", "insufficient stock", "alice")
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "command_rejected"
        assert log_dict["details"]["reason"] == "insufficient stock"

    def test_command_accepted_carries_operation(self):
        """Test AuditEventBuilder.command_accepted."""
        record = OperationRecord(actor="root", action="select", detail="978-0")
        event = AuditEventBuilder.command_accepted("select", "root", record)
        assert event.operation == record

    def test_operation_log_line(self):
        """Guests are shown as '-' in the log."""
        assert OperationRecord(action="register", detail="alice").to_log_line() == "-\tregister\talice"
        assert OperationRecord(actor="root", action="su", detail="alice").to_log_line() == "root\tsu\talice"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
