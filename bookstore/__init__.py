"""
Bookstore - Source Package

A line-oriented command interpreter for a small bookstore: staff accounts
with privilege levels, a book inventory keyed by ISBN, and a finance ledger,
all persisted to fixed-width record files between runs.

DESIGN PRINCIPLES:
1. Validate first, then commit
2. Every rejection looks the same to the caller
3. Privilege checks always use the top of the login stack
4. Every accepted operation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Bookstore Team"
