"""Command parsing and dispatch package."""

from bookstore.commands.dispatcher import CommandDispatcher, CommandOutcome
from bookstore.commands.errors import INVALID_MARKER, Rejected
from bookstore.commands.options import TaggedOption, parse_option, parse_options
from bookstore.commands.tokenizer import tokenize

__all__ = [
    "CommandDispatcher",
    "CommandOutcome",
    "INVALID_MARKER",
    "Rejected",
    "TaggedOption",
    "parse_option",
    "parse_options",
    "tokenize",
]
