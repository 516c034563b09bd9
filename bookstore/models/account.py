"""
Account Models for Bookstore

Staff and customer accounts, keyed by user ID.

DESIGN DECISION: Privilege is a closed set of levels rather than a free
integer. The login stack compares levels numerically, so the enum is an
IntEnum and ordering comparisons behave like the plain numbers.
"""

from enum import IntEnum

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Privilege(IntEnum):
    """
    Privilege levels.

    GUEST is never stored on an account: it is the effective level
    when nobody is logged in.
    """
    GUEST = 0
    CUSTOMER = 1
    STAFF = 3
    OWNER = 7


ACCOUNT_PRIVILEGES = frozenset({Privilege.CUSTOMER, Privilege.STAFF, Privilege.OWNER})


# =============================================================================
# ACCOUNT MODEL
# =============================================================================

class Account(BaseModel):
    """A registered account."""

    user_id: str = Field(
        ...,
        min_length=1,
        max_length=30,
        pattern=r"^[A-Za-z0-9_]+$",
        description="Unique login identifier"
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=30,
        pattern=r"^[A-Za-z0-9_]+$",
        description="Login password (stored as typed)"
    )
    username: str = Field(
        ...,
        min_length=1,
        max_length=30,
        description="Display name"
    )
    privilege: Privilege = Field(
        default=Privilege.CUSTOMER,
        description="Privilege level"
    )

    @field_validator('privilege')
    @classmethod
    def validate_privilege(cls, v: Privilege) -> Privilege:
        """Accounts always carry an assignable level, never GUEST."""
        if v not in ACCOUNT_PRIVILEGES:
            raise ValueError(f"Unassignable privilege: {int(v)}")
        return v

    @property
    def is_staff(self) -> bool:
        return self.privilege == Privilege.STAFF
