"""Report execution package."""

from bookstore.queries.executor import QueryExecutionError, ReportExecutor

__all__ = ["QueryExecutionError", "ReportExecutor"]
