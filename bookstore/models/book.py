"""
Book Models for Bookstore

The inventory is keyed by ISBN. A book created by `select` has every
field blank except its ISBN; the other fields are filled in later with
`modify`.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from bookstore.models.ledger import format_money
from bookstore.validation import KEYWORD_DELIMITER


MAX_QUANTITY = 2147483647


class Book(BaseModel):
    """
    A book in the inventory.

    Quantity only moves through `buy` (down) and `import` (up).
    """

    isbn: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Unique ISBN (printable ASCII, no spaces)"
    )
    name: str = Field(
        default="",
        max_length=60,
        description="Book title"
    )
    author: str = Field(
        default="",
        max_length=60,
        description="Author name"
    )
    keyword: str = Field(
        default="",
        max_length=60,
        description="Pipe-delimited keyword list"
    )
    price: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Unit price"
    )
    quantity: int = Field(
        default=0,
        ge=0,
        le=MAX_QUANTITY,
        description="Units in stock"
    )

    @property
    def keywords(self) -> list[str]:
        """The keyword list split on the pipe delimiter."""
        if not self.keyword:
            return []
        return self.keyword.split(KEYWORD_DELIMITER)

    def has_keyword(self, term: str) -> bool:
        return term in self.keywords

    def to_display_row(self) -> str:
        """
        Format the book as one `show` output line.

        Columns: ISBN, name, author, keyword, price (2 decimals), quantity,
        separated by tabs.
        """
        return "\t".join([
            self.isbn,
            self.name,
            self.author,
            self.keyword,
            format_money(self.price),
            str(self.quantity),
        ])

    @property
    def sort_key(self) -> bytes:
        """Byte-wise ordering key used for listings."""
        return self.isbn.encode("ascii")
