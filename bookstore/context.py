"""
Process-Scoped State

DESIGN DECISION: Accounts, books, the ledger, the operation log and the
login stack all live on one context object built at startup. Nothing is
module-level state, so tests can build as many independent bookstores as
they like.

Entity sets are written back wholesale: `persist_books()` rewrites the
whole book file, and so on. Callers only persist after every check for a
command has passed.
"""

from typing import Optional, Union

from bookstore.audit import AuditLogger
from bookstore.config import BookstoreSettings, get_settings
from bookstore.models.account import Account, Privilege
from bookstore.models.audit import OperationRecord
from bookstore.models.book import Book
from bookstore.models.ledger import Transaction
from bookstore.services.storage import (
    FileRecordStore,
    InMemoryRecordStore,
)
from bookstore.session import SessionStack


RecordStore = Union[FileRecordStore, InMemoryRecordStore]


class BookstoreContext:
    """In-memory entity model plus the store that persists it."""

    def __init__(
        self,
        store: RecordStore,
        settings: Optional[BookstoreSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.settings = settings or get_settings()
        self.store = store
        self.audit_logger = audit_logger or AuditLogger()

        self.accounts: dict[str, Account] = {}
        self.books: dict[str, Book] = {}
        self.ledger: list[Transaction] = []
        self.operations: list[OperationRecord] = []
        self.sessions = SessionStack()

    @classmethod
    def load(
        cls,
        store: RecordStore,
        settings: Optional[BookstoreSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ) -> "BookstoreContext":
        """
        Load every record set and make sure the bootstrap account exists.

        Later duplicates of a key in a file replace earlier ones.
        """
        context = cls(store, settings, audit_logger)
        context.accounts = {a.user_id: a for a in store.load_accounts()}
        context.books = {b.isbn: b for b in store.load_books()}
        context.ledger = store.load_transactions()
        context.operations = store.load_operations()

        context.audit_logger.log_data_loaded(
            accounts=len(context.accounts),
            books=len(context.books),
            transactions=len(context.ledger),
            operations=len(context.operations),
        )
        context.ensure_bootstrap_account()
        return context

    def ensure_bootstrap_account(self) -> None:
        """Create the bootstrap account on first run."""
        root_id = self.settings.root_user_id
        if root_id in self.accounts:
            return
        self.accounts[root_id] = Account(
            user_id=root_id,
            password=self.settings.root_password,
            username=self.settings.root_username,
            privilege=Privilege(self.settings.root_privilege),
        )
        self.persist_accounts()
        self.audit_logger.log_bootstrap_account_created(root_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def current_privilege(self) -> Privilege:
        return self.sessions.current_privilege(self.accounts)

    @property
    def current_actor(self) -> str:
        return self.sessions.current_user() or ""

    def sorted_books(self) -> list[Book]:
        return sorted(self.books.values(), key=lambda book: book.sort_key)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def persist_accounts(self) -> None:
        self.store.save_accounts(self.accounts[key] for key in sorted(self.accounts))

    def persist_books(self) -> None:
        self.store.save_books(self.sorted_books())

    def persist_ledger(self) -> None:
        self.store.save_transactions(self.ledger)
