"""Backtracking Example - Speculative parsing with checkpoints.

Parses a tiny expression grammar where two alternatives share a prefix:

    item    ::= call | index | name
    call    ::= name "(" args? ")"
    index   ::= name "[" number "]"
    args    ::= item ("," item)*

Each alternative is attempted inside a Checkpoint guard. A failed attempt
rolls the reader back automatically; a successful one is committed.

Python 3.13+.
"""

from __future__ import annotations

import re

from scanreader import CharSetPattern, Reader

NAME = re.compile(r"[a-z_][a-z0-9_]*")
NUMBER = CharSetPattern("0123456789")


def parse_item(reader: Reader[str]) -> object:
    for alternative in (parse_call, parse_index):
        with reader.checkpoint() as attempt:
            result = alternative(reader)
            if result is not None:
                attempt.commit()
                return result
    name = reader.match(NAME)
    if name is None:
        raise reader.syntax_error("Expected a name", expected=("name",))
    return name


def parse_call(reader: Reader[str]) -> object:
    name = reader.match(NAME)
    if name is None or not reader.match("("):
        return None
    args = []
    reader.consume_whitespace()
    if not reader.match(")"):
        args.append(parse_item(reader))
        reader.consume_whitespace()
        while reader.match(","):
            reader.consume_whitespace()
            args.append(parse_item(reader))
            reader.consume_whitespace()
        reader.expect(")")
    return ("call", name, args)


def parse_index(reader: Reader[str]) -> object:
    name = reader.match(NAME)
    if name is None or not reader.match("["):
        return None
    number = reader.match(NUMBER)
    if number is None or not reader.match("]"):
        return None
    return ("index", name, int(number))


def main() -> None:
    for source in ("f(x, g(y), a[3])", "total", "xs[12]", "h()"):
        reader = Reader(source)
        print(f"{source!r:>20} -> {parse_item(reader)!r}  (eof={reader.eof()})")


if __name__ == "__main__":
    main()
