"""
Tagged-Option Grammar

`show` and `modify` take options of the form `-<key>=<value>`, where the
value is either a bare token (`-ISBN=978-7`, `-price=12.50`) or a quoted
string whose inner spaces are preserved (`-name="The Book"`).

DESIGN DECISION: Options are parsed once per command into TaggedOption
objects. Handlers then ask for the form a field needs (bare or quoted)
instead of re-testing string prefixes.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict

from bookstore.commands.errors import Rejected


class TaggedOption(BaseModel):
    """One `-key=value` option."""
    model_config = ConfigDict(frozen=True)

    key: str
    raw: str

    @property
    def quoted(self) -> bool:
        return len(self.raw) >= 2 and self.raw[0] == '"' and self.raw[-1] == '"'

    def bare(self) -> str:
        """The value exactly as typed."""
        return self.raw

    def quoted_text(self) -> str:
        """
        The inner text of a quoted value.

        Raises:
            Rejected: If the value is not quoted
        """
        if not self.quoted:
            raise Rejected(f"-{self.key} expects a quoted value")
        return self.raw[1:-1]


def parse_option(token: str) -> TaggedOption:
    if not token.startswith("-") or "=" not in token:
        raise Rejected(f"not an option: {token}")
    key, _, raw = token[1:].partition("=")
    if not key:
        raise Rejected(f"option without a key: {token}")
    return TaggedOption(key=key, raw=raw)


def parse_options(tokens: Iterable[str], allowed: frozenset[str]) -> dict[str, TaggedOption]:
    """
    Parse a run of option tokens.

    Returns options keyed by name, in the order given.

    Raises:
        Rejected: On a malformed token, an unknown key or a repeated key
    """
    options: dict[str, TaggedOption] = {}
    for token in tokens:
        option = parse_option(token)
        if option.key not in allowed:
            raise Rejected(f"unknown option: -{option.key}")
        if option.key in options:
            raise Rejected(f"repeated option: -{option.key}")
        options[option.key] = option
    return options
