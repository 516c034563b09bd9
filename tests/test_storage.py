"""Tests for the fixed-width record files."""

from decimal import Decimal

import pytest

from bookstore.models.account import Account, Privilege
from bookstore.models.audit import OperationRecord
from bookstore.models.book import Book
from bookstore.models.ledger import Transaction
from bookstore.orchestrator import create_app_components
from bookstore.services.storage import (
    CorruptRecordError,
    FieldOverflowError,
    FileRecordStore,
)
from bookstore.services.storage import codec


@pytest.fixture
def file_store(settings):
    return FileRecordStore(settings)


class TestCodec:
    """Tests for record encoding."""

    def test_layout_sizes(self):
        """Record sizes are fixed by the layouts."""
        assert codec.ACCOUNT_LAYOUT.size == 31 * 3 + 4
        assert codec.BOOK_LAYOUT.size == 21 + 61 * 3 + 16 + 4
        assert codec.TRANSACTION_LAYOUT.size == 33
        assert codec.OPERATION_LAYOUT.size == 31 + 16 + 129

    def test_encoded_records_have_layout_size(self):
        """Every encoded record is exactly one layout wide."""
        account = Account(user_id="alice", password="pass1", username="Alice")
        book = Book(isbn="978-0", name="Name", price=Decimal("12.50"), quantity=3)
        assert len(codec.encode_account(account)) == codec.ACCOUNT_LAYOUT.size
        assert len(codec.encode_book(book)) == codec.BOOK_LAYOUT.size

    def test_text_field_overflow(self):
        """A value must leave room for its terminator."""
        assert codec.pack_text("x" * 30, 31, "user_id") == b"x" * 30
        with pytest.raises(FieldOverflowError):
            codec.pack_text("x" * 31, 31, "user_id")

    def test_non_ascii_text(self):
        """Only ASCII is storable."""
        with pytest.raises(FieldOverflowError):
            codec.pack_text("café", 31, "username")

    def test_decimal_is_stored_exactly(self):
        """Prices keep every stored digit."""
        book = Book(isbn="1", price=Decimal("0.125"))
        assert codec.decode_book(codec.encode_book(book)).price == Decimal("0.125")

    def test_invalid_record_is_corrupt(self):
        """A record that fails model validation is reported as corrupt."""
        raw = codec.ACCOUNT_LAYOUT.pack(b"alice", b"pass1", b"Alice", 5)
        with pytest.raises(CorruptRecordError):
            codec.decode_account(raw)


class TestFileRecordStore:
    """Tests for FileRecordStore."""

    def test_missing_files_are_empty(self, file_store):
        """A fresh data directory holds nothing."""
        assert file_store.load_accounts() == []
        assert file_store.load_books() == []
        assert file_store.load_transactions() == []
        assert file_store.load_operations() == []

    def test_save_replaces_whole_set(self, file_store, settings):
        """Saving rewrites the file rather than appending."""
        books = [Book(isbn="1"), Book(isbn="2")]
        file_store.save_books(books)
        file_store.save_books(books[:1])
        assert [b.isbn for b in file_store.load_books()] == ["1"]
        assert settings.book_path.stat().st_size == codec.BOOK_LAYOUT.size

    def test_entities_survive_reload(self, file_store):
        """What is saved loads back equal."""
        account = Account(user_id="bob", password="pw", username="Bob Smith", privilege=Privilege.STAFF)
        book = Book(
            isbn="978-7",
            name="Two Words",
            author="Someone",
            keyword="a|b",
            price=Decimal("12.50"),
            quantity=7,
        )
        entries = [
            Transaction(amount=Decimal("37.50"), is_income=True),
            Transaction(amount=Decimal("100"), is_income=False),
        ]
        file_store.save_accounts([account])
        file_store.save_books([book])
        file_store.save_transactions(entries)

        assert file_store.load_accounts() == [account]
        assert file_store.load_books() == [book]
        assert file_store.load_transactions() == entries

    def test_operations_are_appended(self, file_store):
        """The operation log grows one record per append."""
        first = OperationRecord(actor="root", action="su", detail="root")
        second = OperationRecord(action="register", detail="alice")
        file_store.append_operation(first)
        file_store.append_operation(second)
        assert file_store.load_operations() == [first, second]

    def test_partial_trailing_record_is_ignored(self, file_store, settings):
        """A truncated last record is dropped, earlier records survive."""
        file_store.save_accounts([Account(user_id="alice", password="p", username="A")])
        with open(settings.account_path, "ab") as f:
            f.write(b"\x00\x01\x02")
        assert [a.user_id for a in file_store.load_accounts()] == ["alice"]

    def test_corrupt_file_raises(self, file_store, settings):
        """Undecodable records surface as CorruptRecordError."""
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        settings.account_path.write_bytes(codec.ACCOUNT_LAYOUT.pack(b"a", b"b", b"c", 2))
        with pytest.raises(CorruptRecordError):
            file_store.load_accounts()


class TestBootstrap:
    """Tests for first-run bootstrap."""

    def test_first_run_writes_bootstrap_account(self, settings):
        """An empty data directory gets exactly the bootstrap account."""
        create_app_components(settings)
        assert settings.account_path.stat().st_size == codec.ACCOUNT_LAYOUT.size
        accounts = FileRecordStore(settings).load_accounts()
        assert accounts == [
            Account(user_id="root", password="sjtu", username="root", privilege=Privilege.OWNER)
        ]

    def test_bootstrap_is_not_duplicated(self, settings):
        """Restarting does not create a second bootstrap account."""
        create_app_components(settings)
        create_app_components(settings)
        assert len(FileRecordStore(settings).load_accounts()) == 1
