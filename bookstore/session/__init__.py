"""Login session package."""

from bookstore.session.stack import LoginFrame, SessionStack

__all__ = ["LoginFrame", "SessionStack"]
