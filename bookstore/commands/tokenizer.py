"""
Command Line Tokenizer

Splits an input line on spaces, except inside double quotes. Quote
characters stay in the token (`-name="Two Words"` is one token); the
option grammar in `options` strips them where a field expects a quoted
value.
"""

LINE_TRIM = " \t\r\n"


def tokenize(line: str) -> list[str]:
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False

    for c in line.strip(LINE_TRIM):
        if c == '"':
            in_quotes = not in_quotes
            current.append(c)
        elif c == " " and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(c)

    if current:
        tokens.append("".join(current))
    return tokens
