"""Field validation package."""

from bookstore.validation.validator import (
    KEYWORD_DELIMITER,
    MAX_INT32,
    is_valid_book_text,
    is_valid_isbn,
    is_valid_keyword_list,
    is_valid_keyword_query,
    is_valid_password,
    is_valid_price,
    is_valid_privilege,
    is_valid_quantity,
    is_valid_user_id,
    is_valid_username,
    parse_count,
    parse_quantity,
)

__all__ = [
    "KEYWORD_DELIMITER",
    "MAX_INT32",
    "is_valid_book_text",
    "is_valid_isbn",
    "is_valid_keyword_list",
    "is_valid_keyword_query",
    "is_valid_password",
    "is_valid_price",
    "is_valid_privilege",
    "is_valid_quantity",
    "is_valid_user_id",
    "is_valid_username",
    "parse_count",
    "parse_quantity",
]
