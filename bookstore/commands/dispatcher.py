"""
Command Dispatcher

Routes one tokenized command to its handler.

For every command:
1. Check the minimum privilege of the current login (fail closed)
2. Validate argument count and syntax
3. Apply the mutation
4. Persist the affected entity sets
5. Return the output lines

CRITICAL: Handlers validate everything before they mutate anything.
A Rejected raised at any step leaves accounts, books, the ledger and the
login stack exactly as they were.
"""

from decimal import Decimal
from typing import Callable, NamedTuple, Optional

from pydantic import BaseModel, Field

from bookstore.commands.errors import Rejected
from bookstore.commands.options import parse_options
from bookstore.context import BookstoreContext
from bookstore.models.account import Account, Privilege
from bookstore.models.book import MAX_QUANTITY, Book
from bookstore.models.ledger import Transaction, format_money
from bookstore.queries import QueryExecutionError, ReportExecutor
from bookstore.validation import (
    is_valid_book_text,
    is_valid_isbn,
    is_valid_keyword_list,
    is_valid_keyword_query,
    is_valid_password,
    is_valid_price,
    is_valid_privilege,
    is_valid_user_id,
    is_valid_username,
    parse_count,
    parse_quantity,
)


SHOW_FILTERS = frozenset({"ISBN", "name", "author", "keyword"})
MODIFY_FIELDS = frozenset({"ISBN", "name", "author", "keyword", "price"})


class CommandOutcome(BaseModel):
    """What an accepted command produced."""

    lines: list[str] = Field(
        default_factory=list,
        description="Output lines (empty for commands that succeed silently)"
    )
    action: Optional[str] = Field(
        default=None,
        description="Operation-log action; None for read-only commands"
    )
    detail: str = Field(
        default="",
        description="Operation-log detail (never contains passwords)"
    )


class CommandSpec(NamedTuple):
    min_privilege: Privilege
    handler: Callable[[list[str]], CommandOutcome]


class CommandDispatcher:
    """
    Privilege-checked command routing over a BookstoreContext.

    `show finance` and `report finance|employee` are routed as commands
    of their own so that each carries its own privilege level.
    """

    def __init__(self, context: BookstoreContext):
        self._ctx = context
        self._reports = ReportExecutor(context)
        self._commands: dict[str, CommandSpec] = {
            "su": CommandSpec(Privilege.GUEST, self._su),
            "logout": CommandSpec(Privilege.CUSTOMER, self._logout),
            "register": CommandSpec(Privilege.GUEST, self._register),
            "passwd": CommandSpec(Privilege.CUSTOMER, self._passwd),
            "useradd": CommandSpec(Privilege.STAFF, self._useradd),
            "delete": CommandSpec(Privilege.OWNER, self._delete),
            "show": CommandSpec(Privilege.CUSTOMER, self._show),
            "show finance": CommandSpec(Privilege.OWNER, self._show_finance),
            "buy": CommandSpec(Privilege.CUSTOMER, self._buy),
            "select": CommandSpec(Privilege.STAFF, self._select),
            "modify": CommandSpec(Privilege.STAFF, self._modify),
            "import": CommandSpec(Privilege.STAFF, self._import),
            "report finance": CommandSpec(Privilege.OWNER, self._report_finance),
            "report employee": CommandSpec(Privilege.OWNER, self._report_employee),
            "log": CommandSpec(Privilege.OWNER, self._log),
        }

    def dispatch(self, name: str, args: list[str]) -> CommandOutcome:
        """
        Run one command.

        Raises:
            Rejected: For any failure; nothing has changed when it is raised
        """
        key, args = self._route(name, args)
        spec = self._commands.get(key)
        if spec is None:
            raise Rejected(f"unknown command: {name}")
        if self._ctx.current_privilege < spec.min_privilege:
            raise Rejected(f"{key} needs privilege {int(spec.min_privilege)}")
        return spec.handler(args)

    def _route(self, name: str, args: list[str]) -> tuple[str, list[str]]:
        if name == "show" and args and args[0] == "finance":
            return "show finance", args[1:]
        if name == "report":
            if len(args) == 1 and args[0] in ("finance", "employee"):
                return f"report {args[0]}", []
            raise Rejected("report expects 'finance' or 'employee'")
        return name, args

    # -------------------------------------------------------------------------
    # Shared checks
    # -------------------------------------------------------------------------

    @staticmethod
    def _expect(args: list[str], *counts: int) -> None:
        if len(args) not in counts:
            raise Rejected(f"expected {' or '.join(map(str, counts))} arguments, got {len(args)}")

    def _account(self, user_id: str) -> Account:
        account = self._ctx.accounts.get(user_id)
        if account is None:
            raise Rejected(f"no such user: {user_id}")
        return account

    def _selected_book(self) -> Book:
        isbn = self._ctx.sessions.current_selection()
        if isbn is None:
            raise Rejected("no book selected")
        book = self._ctx.books.get(isbn)
        if book is None:
            raise Rejected(f"selected book no longer exists: {isbn}")
        return book

    # -------------------------------------------------------------------------
    # Accounts and sessions
    # -------------------------------------------------------------------------

    def _su(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 1, 2)
        user_id = args[0]
        password = args[1] if len(args) == 2 else None
        if not is_valid_user_id(user_id):
            raise Rejected("malformed user id")
        if password is not None and not is_valid_password(password):
            raise Rejected("malformed password")

        account = self._account(user_id)
        # Stepping down in privilege needs no password
        if self._ctx.current_privilege <= account.privilege:
            if password is None or password != account.password:
                raise Rejected("password required and did not match")

        self._ctx.sessions.push(user_id)
        return CommandOutcome(action="su", detail=user_id)

    def _logout(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 0)
        frame = self._ctx.sessions.pop()
        if frame is None:
            raise Rejected("nobody is logged in")
        return CommandOutcome(action="logout", detail=frame.user_id)

    def _register(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 3)
        user_id, password, username = args
        self._check_new_account(user_id, password, username)

        self._ctx.accounts[user_id] = Account(
            user_id=user_id,
            password=password,
            username=username,
            privilege=Privilege.CUSTOMER,
        )
        self._ctx.persist_accounts()
        return CommandOutcome(action="register", detail=user_id)

    def _check_new_account(self, user_id: str, password: str, username: str) -> None:
        if not is_valid_user_id(user_id):
            raise Rejected("malformed user id")
        if not is_valid_password(password):
            raise Rejected("malformed password")
        if not is_valid_username(username):
            raise Rejected("malformed username")
        if user_id in self._ctx.accounts:
            raise Rejected(f"user already exists: {user_id}")

    def _passwd(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 2, 3)
        user_id = args[0]
        current_password = args[1] if len(args) == 3 else None
        new_password = args[-1]
        if not is_valid_user_id(user_id):
            raise Rejected("malformed user id")
        if not is_valid_password(new_password):
            raise Rejected("malformed new password")
        if current_password is not None and not is_valid_password(current_password):
            raise Rejected("malformed current password")

        account = self._account(user_id)
        if self._ctx.current_privilege != Privilege.OWNER:
            if current_password is None or current_password != account.password:
                raise Rejected("current password required and did not match")

        self._ctx.accounts[user_id] = account.model_copy(update={"password": new_password})
        self._ctx.persist_accounts()
        return CommandOutcome(action="passwd", detail=user_id)

    def _useradd(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 4)
        user_id, password, privilege_text, username = args
        if not is_valid_privilege(privilege_text):
            raise Rejected("malformed privilege")
        privilege = Privilege(int(privilege_text))
        if privilege >= self._ctx.current_privilege:
            raise Rejected("cannot create an account at or above own privilege")
        self._check_new_account(user_id, password, username)

        self._ctx.accounts[user_id] = Account(
            user_id=user_id,
            password=password,
            username=username,
            privilege=privilege,
        )
        self._ctx.persist_accounts()
        return CommandOutcome(action="useradd", detail=f"{user_id} level {int(privilege)}")

    def _delete(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 1)
        user_id = args[0]
        if not is_valid_user_id(user_id):
            raise Rejected("malformed user id")
        self._account(user_id)
        if self._ctx.sessions.contains(user_id):
            raise Rejected(f"user is logged in: {user_id}")

        del self._ctx.accounts[user_id]
        self._ctx.persist_accounts()
        return CommandOutcome(action="delete", detail=user_id)

    # -------------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------------

    def _show(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 0, 1)
        books = self._ctx.sorted_books()

        if args:
            option = parse_options(args, SHOW_FILTERS)
            key, value = next(iter(option.items()))
            if key == "ISBN":
                isbn = value.bare()
                if not is_valid_isbn(isbn):
                    raise Rejected("malformed ISBN")
                books = [b for b in books if b.isbn == isbn]
            elif key == "keyword":
                term = value.quoted_text()
                if not is_valid_keyword_query(term):
                    raise Rejected("keyword query must be one non-empty term")
                books = [b for b in books if b.has_keyword(term)]
            else:
                text = value.quoted_text()
                if not is_valid_book_text(text):
                    raise Rejected(f"malformed {key}")
                books = [b for b in books if getattr(b, key) == text]

        if not books:
            return CommandOutcome(lines=[""])
        return CommandOutcome(lines=[book.to_display_row() for book in books])

    def _buy(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 2)
        isbn, quantity_text = args
        if not is_valid_isbn(isbn):
            raise Rejected("malformed ISBN")
        quantity = parse_quantity(quantity_text)
        if quantity is None:
            raise Rejected("malformed quantity")
        book = self._ctx.books.get(isbn)
        if book is None:
            raise Rejected(f"no such book: {isbn}")
        if book.quantity < quantity:
            raise Rejected(f"insufficient stock: {book.quantity} < {quantity}")

        total = book.price * quantity
        self._ctx.books[isbn] = book.model_copy(update={"quantity": book.quantity - quantity})
        self._ctx.ledger.append(Transaction(amount=total, is_income=True))
        self._ctx.persist_books()
        self._ctx.persist_ledger()
        return CommandOutcome(
            lines=[format_money(total)],
            action="buy",
            detail=f"{isbn} x{quantity}",
        )

    def _select(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 1)
        isbn = args[0]
        if not is_valid_isbn(isbn):
            raise Rejected("malformed ISBN")

        if isbn not in self._ctx.books:
            self._ctx.books[isbn] = Book(isbn=isbn)
            self._ctx.persist_books()
        self._ctx.sessions.select(isbn)
        return CommandOutcome(action="select", detail=isbn)

    def _modify(self, args: list[str]) -> CommandOutcome:
        book = self._selected_book()
        if not args:
            raise Rejected("modify needs at least one option")
        options = parse_options(args, MODIFY_FIELDS)

        updates: dict[str, object] = {}
        new_isbn: Optional[str] = None
        for key, option in options.items():
            if key == "ISBN":
                new_isbn = option.bare()
                if not is_valid_isbn(new_isbn):
                    raise Rejected("malformed ISBN")
                if new_isbn == book.isbn:
                    raise Rejected("new ISBN equals the current one")
                if new_isbn in self._ctx.books:
                    raise Rejected(f"ISBN already exists: {new_isbn}")
            elif key == "price":
                price = option.bare()
                if not is_valid_price(price):
                    raise Rejected("malformed price")
                updates["price"] = Decimal(price)
            elif key == "keyword":
                keyword = option.quoted_text()
                if not is_valid_keyword_list(keyword):
                    raise Rejected("malformed keyword list")
                updates["keyword"] = keyword
            else:
                text = option.quoted_text()
                if not is_valid_book_text(text):
                    raise Rejected(f"malformed {key}")
                updates[key] = text

        # Everything validated: commit, applying the rename last
        working = book.model_copy(update=updates)
        detail = book.isbn
        if new_isbn is not None:
            del self._ctx.books[book.isbn]
            working = working.model_copy(update={"isbn": new_isbn})
            self._ctx.sessions.select(new_isbn)
            detail = f"{book.isbn} -> {new_isbn}"
        self._ctx.books[working.isbn] = working
        self._ctx.persist_books()
        return CommandOutcome(action="modify", detail=detail)

    def _import(self, args: list[str]) -> CommandOutcome:
        book = self._selected_book()
        self._expect(args, 2)
        quantity_text, total_text = args
        quantity = parse_quantity(quantity_text)
        if quantity is None:
            raise Rejected("malformed quantity")
        if not is_valid_price(total_text):
            raise Rejected("malformed total cost")
        total = Decimal(total_text)
        if total <= 0:
            raise Rejected("total cost must be positive")
        if book.quantity + quantity > MAX_QUANTITY:
            raise Rejected("stock would overflow")

        self._ctx.books[book.isbn] = book.model_copy(
            update={"quantity": book.quantity + quantity}
        )
        self._ctx.ledger.append(Transaction(amount=total, is_income=False))
        self._ctx.persist_books()
        self._ctx.persist_ledger()
        return CommandOutcome(
            action="import",
            detail=f"{book.isbn} x{quantity} {format_money(total)}",
        )

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def _show_finance(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 0, 1)
        count = None
        if args:
            count = parse_count(args[0])
            if count is None:
                raise Rejected("malformed count")
            if count == 0:
                return CommandOutcome(lines=[""])
        try:
            summary = self._reports.finance_summary(count)
        except QueryExecutionError as e:
            raise Rejected(str(e)) from e
        return CommandOutcome(lines=[summary.to_finance_line()])

    def _report_finance(self, args: list[str]) -> CommandOutcome:
        return CommandOutcome(lines=self._reports.financial_report())

    def _report_employee(self, args: list[str]) -> CommandOutcome:
        return CommandOutcome(lines=self._reports.employee_report())

    def _log(self, args: list[str]) -> CommandOutcome:
        self._expect(args, 0)
        return CommandOutcome(lines=self._reports.system_log())
