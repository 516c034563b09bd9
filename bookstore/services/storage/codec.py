"""
Fixed-Width Record Codecs

Each entity type serializes to a fixed-size binary record built with
`struct`. Layouts are little-endian with no alignment padding.

String fields are ASCII, NUL-padded, and one byte wider than the longest
value the field accepts, so every stored string is NUL-terminated.
Decimal amounts are stored as fixed-width ASCII text in plain notation
(never exponent form), which round-trips exactly.

Layouts:
    account     user_id[31] password[31] username[31] privilege:int32
    book        isbn[21] name[61] author[61] keyword[61] price[16] quantity:int32
    transaction amount[32] is_income:bool
    operation   actor[31] action[16] detail[129]
"""

import struct
from decimal import Decimal, InvalidOperation
from typing import Iterator

from pydantic import ValidationError

from bookstore.models.account import Account
from bookstore.models.audit import OperationRecord
from bookstore.models.book import Book
from bookstore.models.ledger import Transaction
from bookstore.services.storage.interface import CorruptRecordError, FieldOverflowError


ACCOUNT_LAYOUT = struct.Struct("<31s31s31si")
BOOK_LAYOUT = struct.Struct("<21s61s61s61s16si")
TRANSACTION_LAYOUT = struct.Struct("<32s?")
OPERATION_LAYOUT = struct.Struct("<31s16s129s")


def pack_text(value: str, width: int, field: str) -> bytes:
    """
    Encode a string field.

    Raises:
        FieldOverflowError: If the value (plus its terminator) exceeds `width`
    """
    try:
        raw = value.encode("ascii")
    except UnicodeEncodeError as e:
        raise FieldOverflowError(f"{field}: non-ASCII value") from e
    if len(raw) >= width:
        raise FieldOverflowError(f"{field}: {len(raw)} bytes does not fit {width - 1}")
    # struct pads the remainder with NUL bytes
    return raw


def unpack_text(raw: bytes) -> str:
    """Decode a NUL-terminated string field."""
    try:
        return raw.split(b"\x00", 1)[0].decode("ascii")
    except UnicodeDecodeError as e:
        raise CorruptRecordError(f"non-ASCII text field: {raw!r}") from e


def pack_decimal(value: Decimal, width: int, field: str) -> bytes:
    return pack_text(format(value, "f"), width, field)


def unpack_decimal(raw: bytes) -> Decimal:
    text = unpack_text(raw)
    try:
        return Decimal(text) if text else Decimal("0")
    except InvalidOperation as e:
        raise CorruptRecordError(f"bad decimal field: {text!r}") from e


# =============================================================================
# ENTITY CODECS
# =============================================================================

def encode_account(account: Account) -> bytes:
    return ACCOUNT_LAYOUT.pack(
        pack_text(account.user_id, 31, "user_id"),
        pack_text(account.password, 31, "password"),
        pack_text(account.username, 31, "username"),
        int(account.privilege),
    )


def decode_account(record: bytes) -> Account:
    user_id, password, username, privilege = ACCOUNT_LAYOUT.unpack(record)
    try:
        return Account(
            user_id=unpack_text(user_id),
            password=unpack_text(password),
            username=unpack_text(username),
            privilege=privilege,
        )
    except ValidationError as e:
        raise CorruptRecordError(f"invalid account record: {e}") from e


def encode_book(book: Book) -> bytes:
    return BOOK_LAYOUT.pack(
        pack_text(book.isbn, 21, "isbn"),
        pack_text(book.name, 61, "name"),
        pack_text(book.author, 61, "author"),
        pack_text(book.keyword, 61, "keyword"),
        pack_decimal(book.price, 16, "price"),
        book.quantity,
    )


def decode_book(record: bytes) -> Book:
    isbn, name, author, keyword, price, quantity = BOOK_LAYOUT.unpack(record)
    try:
        return Book(
            isbn=unpack_text(isbn),
            name=unpack_text(name),
            author=unpack_text(author),
            keyword=unpack_text(keyword),
            price=unpack_decimal(price),
            quantity=quantity,
        )
    except ValidationError as e:
        raise CorruptRecordError(f"invalid book record: {e}") from e


def encode_transaction(transaction: Transaction) -> bytes:
    return TRANSACTION_LAYOUT.pack(
        pack_decimal(transaction.amount, 32, "amount"),
        transaction.is_income,
    )


def decode_transaction(record: bytes) -> Transaction:
    amount, is_income = TRANSACTION_LAYOUT.unpack(record)
    try:
        return Transaction(amount=unpack_decimal(amount), is_income=is_income)
    except ValidationError as e:
        raise CorruptRecordError(f"invalid transaction record: {e}") from e


def encode_operation(record: OperationRecord) -> bytes:
    return OPERATION_LAYOUT.pack(
        pack_text(record.actor, 31, "actor"),
        pack_text(record.action, 16, "action"),
        pack_text(record.detail, 129, "detail"),
    )


def decode_operation(record: bytes) -> OperationRecord:
    actor, action, detail = OPERATION_LAYOUT.unpack(record)
    try:
        return OperationRecord(
            actor=unpack_text(actor),
            action=unpack_text(action),
            detail=unpack_text(detail),
        )
    except ValidationError as e:
        raise CorruptRecordError(f"invalid operation record: {e}") from e


def iter_records(data: bytes, layout: struct.Struct) -> Iterator[bytes]:
    """
    Split a file's contents into whole records.

    A trailing partial record is not yielded; callers compare
    `len(data) % layout.size` to detect it.
    """
    size = layout.size
    for offset in range(0, len(data) - size + 1, size):
        yield data[offset:offset + size]
