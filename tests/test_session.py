"""Tests for the login session stack."""

import pytest

from bookstore.models.account import Account, Privilege
from bookstore.session import SessionStack


@pytest.fixture
def accounts():
    return {
        "root": Account(user_id="root", password="sjtu", username="root", privilege=Privilege.OWNER),
        "alice": Account(user_id="alice", password="pass1", username="Alice"),
    }


class TestSessionStack:
    """Tests for SessionStack."""

    def test_empty_stack_is_guest(self, accounts):
        """Nobody logged in means GUEST privilege."""
        stack = SessionStack()
        assert stack.current_privilege(accounts) == Privilege.GUEST
        assert stack.current_user() is None
        assert stack.current_selection() is None

    def test_pop_empty(self):
        """Popping an empty stack reports nothing to pop."""
        assert SessionStack().pop() is None

    def test_top_frame_is_current(self, accounts):
        """Privilege always comes from the top frame."""
        stack = SessionStack()
        stack.push("root")
        stack.push("alice")
        assert stack.current_user() == "alice"
        assert stack.current_privilege(accounts) == Privilege.CUSTOMER
        stack.pop()
        assert stack.current_privilege(accounts) == Privilege.OWNER

    def test_selection_is_frame_local(self):
        """A new frame starts empty; popping it restores the old selection."""
        stack = SessionStack()
        stack.push("root")
        stack.select("978-0")
        stack.push("root")
        assert stack.current_selection() is None
        stack.select("978-1")
        stack.pop()
        assert stack.current_selection() == "978-0"

    def test_contains_searches_whole_stack(self):
        """Users below the top still count as logged in."""
        stack = SessionStack()
        stack.push("root")
        stack.push("alice")
        assert stack.contains("root")
        assert stack.contains("alice")
        assert not stack.contains("bob")

    def test_select_without_login(self):
        """Selecting needs a frame to hold the selection."""
        with pytest.raises(LookupError):
            SessionStack().select("978-0")
