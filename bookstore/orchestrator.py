"""
Main Orchestrator for Bookstore

This module ties together all the components and defines the
end-to-end flow for one input line:

    line → tokenize → dispatch (validate, mutate, persist) → output lines

DESIGN DECISION: The orchestrator enforces the boundaries:
- A rejected command prints exactly one "Invalid" line and changes nothing
- Every command is audited, accepted or not
- `quit` / `exit` end the session without output

This is the "glue" that keeps the dispatcher free of I/O.
"""

from typing import Iterable, Optional, TextIO

from bookstore.audit import AuditLogger
from bookstore.commands import (
    INVALID_MARKER,
    CommandDispatcher,
    Rejected,
    tokenize,
)
from bookstore.config import BookstoreSettings, get_settings
from bookstore.context import BookstoreContext, RecordStore
from bookstore.models.audit import OperationRecord
from bookstore.services.storage import FileRecordStore


QUIT_COMMANDS = frozenset({"quit", "exit"})


class Interpreter:
    """
    Runs command lines against a BookstoreContext.

    Flow:
    1. Tokenize → blank lines are skipped silently
    2. quit/exit → stop
    3. Dispatch → output lines, or "Invalid" on rejection
    4. Audit → accepted mutating commands are recorded in the operation log
    """

    def __init__(
        self,
        context: BookstoreContext,
        dispatcher: Optional[CommandDispatcher] = None,
    ):
        self._context = context
        self._dispatcher = dispatcher or CommandDispatcher(context)
        self._audit_logger = context.audit_logger
        self.lines_read = 0
        self.stopped = False

    @property
    def context(self) -> BookstoreContext:
        return self._context

    def execute(self, line: str) -> list[str]:
        """
        Execute one input line.

        Returns:
            The output lines (possibly none). After quit/exit, `stopped`
            is set and nothing is returned.
        """
        self.lines_read += 1
        tokens = tokenize(line)
        if not tokens:
            return []

        name, args = tokens[0], tokens[1:]
        if name in QUIT_COMMANDS:
            self.stopped = True
            return []

        actor = self._context.current_actor
        try:
            outcome = self._dispatcher.dispatch(name, args)
        except Rejected as e:
            self._audit_logger.log_command_rejected(name, e.reason, actor)
            return [INVALID_MARKER]

        operation = None
        if outcome.action is not None:
            operation = OperationRecord(
                actor=actor,
                action=outcome.action,
                detail=outcome.detail,
            )
            self._context.operations.append(operation)
        self._audit_logger.log_command_accepted(name, actor, operation)
        return outcome.lines

    def run(self, lines: Iterable[str], output: TextIO) -> None:
        """
        Feed lines until quit/exit or end of input.

        Output is flushed after each command so interactive use sees
        results immediately.
        """
        for line in lines:
            for out in self.execute(line):
                output.write(out + "\n")
            output.flush()
            if self.stopped:
                break
        self._audit_logger.log_interpreter_stopped(self.lines_read)


def create_app_components(
    settings: Optional[BookstoreSettings] = None,
    store: Optional[RecordStore] = None,
) -> Interpreter:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to get_settings()).
        store: Storage backend (defaults to record files under
               settings.data_dir).

    Returns:
        An Interpreter over a freshly loaded context
    """
    settings = settings or get_settings()
    store = store or FileRecordStore(settings)

    audit_logger = AuditLogger(store if settings.operation_log_enabled else None)
    context = BookstoreContext.load(store, settings, audit_logger)
    return Interpreter(context)
