"""
Command-Line Entry Point for Bookstore

Reads one command per line from standard input and writes results to
standard output. Diagnostics go to standard error.

Configuration comes from BOOKSTORE_* environment variables (see
bookstore.config.settings); for example BOOKSTORE_DATA_DIR selects where
the record files live.
"""

import io
import sys
from typing import BinaryIO, Optional, TextIO

from bookstore.audit import AuditLogger, configure_logging
from bookstore.config import get_settings
from bookstore.orchestrator import create_app_components
from bookstore.services.storage import StorageError


def open_input(buffer: BinaryIO) -> TextIO:
    """
    Decode raw command bytes as ASCII.

    Bytes outside ASCII become lone surrogates instead of raising, so the
    field validators reject the line like any other malformed input.
    """
    return io.TextIOWrapper(buffer, encoding="ascii", errors="surrogateescape")


def main(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Run the interpreter until quit/exit or end of input."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    try:
        interpreter = create_app_components(settings)
        interpreter.run(stdin or open_input(sys.stdin.buffer), stdout or sys.stdout)
    except StorageError as e:
        AuditLogger().log_error("storage", str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
