"""
Login Session Stack

DESIGN DECISION: Logins form a stack rather than a single "current user"
slot. `su` pushes a frame, `logout` pops one, so a higher-privileged
operator can act as someone else and then return to the previous login
exactly as it was.

Each frame carries its own book selection. A new frame starts with no
selection and popping a frame discards it; selections are never shared
between frames.

The stack only stores user IDs. Privilege is looked up in the account
table at query time, so a password change never leaves a stale copy of
an account inside the stack.
"""

from typing import Mapping, Optional

from pydantic import BaseModel

from bookstore.models.account import Account, Privilege


class LoginFrame(BaseModel):
    """One authenticated login."""
    user_id: str
    selected_isbn: Optional[str] = None


class SessionStack:
    """Ordered stack of active logins; the last frame is current."""

    def __init__(self):
        self._frames: list[LoginFrame] = []

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def top(self) -> Optional[LoginFrame]:
        return self._frames[-1] if self._frames else None

    def push(self, user_id: str) -> LoginFrame:
        """Push an authenticated login with an empty selection."""
        frame = LoginFrame(user_id=user_id)
        self._frames.append(frame)
        return frame

    def pop(self) -> Optional[LoginFrame]:
        """Pop the current login. Returns None when nobody is logged in."""
        if not self._frames:
            return None
        return self._frames.pop()

    def current_user(self) -> Optional[str]:
        frame = self.top
        return frame.user_id if frame else None

    def current_selection(self) -> Optional[str]:
        frame = self.top
        return frame.selected_isbn if frame else None

    def current_privilege(self, accounts: Mapping[str, Account]) -> Privilege:
        """
        Effective privilege of the current login.

        GUEST when the stack is empty, or when the top account no longer
        exists (which `delete` prevents).
        """
        frame = self.top
        if frame is None:
            return Privilege.GUEST
        account = accounts.get(frame.user_id)
        return account.privilege if account else Privilege.GUEST

    def select(self, isbn: str) -> None:
        """Set the current login's selection."""
        if self.top is None:
            raise LookupError("no active login to select for")
        self.top.selected_isbn = isbn

    def contains(self, user_id: str) -> bool:
        """Is `user_id` logged in anywhere in the stack?"""
        return any(frame.user_id == user_id for frame in self._frames)
