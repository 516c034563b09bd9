"""Command rejection."""


INVALID_MARKER = "Invalid"


class Rejected(Exception):
    """
    A command was refused.

    Covers bad syntax, missing privilege, unknown users or books,
    uniqueness violations and business-rule violations alike. The reason
    is for the audit log only; the user always sees INVALID_MARKER.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
