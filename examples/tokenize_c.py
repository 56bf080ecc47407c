"""C-like Tokenizer Example - A hand-written lexer on top of Reader.

Demonstrates the consumer side of scanreader:

1. Anchored regex patterns for identifiers and integers
2. Single-character delimiters and multi-character operators as literals
3. Whitespace and newline skipping between tokens
4. Token positions via Reader.location()
5. Error reporting with source context

Python 3.13+.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from scanreader import Location, Reader, ScanSyntaxError
from scanreader.diagnostics import DiagnosticFormatter

IDENTIFIER = re.compile(r"[_a-zA-Z$][_a-zA-Z0-9]*")
INTEGER = re.compile(r"0|[1-9][0-9]*")
OPERATORS = ("==", "!=", "<=", ">=", "&&", "||", "=", "<", ">", "+", "-", "*", "/")
DELIMITERS = "(){}[];,"


class Token(NamedTuple):
    kind: str
    text: str
    location: Location


def tokenize(source: str) -> list[Token]:
    """Split source into identifier, number, operator and delimiter tokens."""
    reader = Reader(source)
    tokens: list[Token] = []

    while True:
        reader.consume(" \t\r\n")
        if reader.eof():
            return tokens

        location = reader.location()
        if (text := reader.match(IDENTIFIER)) is not None:
            tokens.append(Token("ident", text, location))
        elif (text := reader.match(INTEGER)) is not None:
            tokens.append(Token("number", text, location))
        elif reader.peek() in DELIMITERS:
            tokens.append(Token("delim", reader.read(), location))
        elif operator := next((op for op in OPERATORS if reader.match(op)), None):
            tokens.append(Token("op", operator, location))
        else:
            raise reader.syntax_error(
                f"Unexpected character {reader.peek()!r}",
                expected=("identifier", "number", "operator", "delimiter"),
            )


def main() -> None:
    source = """
int main() {
    int answer = 40 + 2;
    return answer;
}
"""
    print("=" * 60)
    print("Tokens")
    print("=" * 60)
    for token in tokenize(source):
        print(f"{token.location!s:>6}  {token.kind:<7} {token.text}")

    print()
    print("=" * 60)
    print("Error reporting")
    print("=" * 60)
    broken = "int main() {\n    return 4 @ 2;\n}\n"
    try:
        tokenize(broken)
    except ScanSyntaxError as error:
        assert error.diagnostic is not None
        print(DiagnosticFormatter().format_with_source(error.diagnostic, broken))


if __name__ == "__main__":
    main()
