"""
  Lisp Reader, Lexer and Parser

- The lexer yields (kind, text) tokens: lparen, rparen, string, atom.
- The parser builds frozen Expression nodes instead of bare Python lists:

    - numbers  -> Literal(Decimal)    e.g. 12, 3.5, 7.
    - strings  -> Literal(str)        quotes stripped, no escape processing
    - other    -> Identifier(name)    including true / false
    - ( ... )  -> Compound(children)

  A whole source unit parses to one Compound holding every top-level form.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Iterable, Iterator, Optional

from redlisp.types.errors import LispLexError, LispParseError
from redlisp.types.expression import Compound, Expression, Identifier, Literal


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r'|(?P<string>"[^"]*")'  # verbatim up to the next quote, no escapes
    r'|(?P<atom>[^\s()"][^\s()]*)'  # anything up to whitespace or a paren
    r")"
)

NUMBER_RE = re.compile(r"[0-9]\.?[0-9]*")

Token = tuple[str, str]


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields (token_kind, token_text) tuples.

    Raises LispLexError when the input ends inside a string or an atom.
    """
    pos = 0
    n = len(source)
    while pos < n:
        match = TOKEN_RE.match(source, pos)
        if match is None:
            rest = source[pos:]
            if rest.isspace():
                return
            start = pos + len(rest) - len(rest.lstrip())
            raise LispLexError(f"Unterminated string starting at offset {start}")
        kind = match.lastgroup
        text = match.group(kind)
        if kind == "atom" and match.end() == n:
            raise LispLexError(
                f"Unterminated atom {text!r} at offset {match.start(kind)}: "
                "input ended without a delimiter"
            )
        yield kind, text
        pos = match.end()


def categorize(text: str) -> Expression:
    """Classify an atom or string token as a Literal or an Identifier."""
    if NUMBER_RE.fullmatch(text):
        return Literal(Decimal(text))
    if text.startswith('"'):
        return Literal(text[1:-1])
    return Identifier(text)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[Expression]:
        """Parse one form, or return None at end of input."""
        tok_type, tok_val = self.advance()
        if tok_type is None:
            return None

        if tok_type == "lparen":
            items = []
            while True:
                next_type, _ = self.peek()
                if next_type is None:
                    raise LispParseError("Unmatched '('")
                if next_type == "rparen":
                    self.advance()
                    return Compound(tuple(items))
                items.append(self.parse_expr())

        if tok_type == "rparen":
            raise LispParseError("Unexpected ')'")

        return categorize(tok_val)

    def parse_all(self) -> Compound:
        """Parse every top-level form into a single Compound."""
        forms = []
        while (expr := self.parse_expr()) is not None:
            forms.append(expr)
        return Compound(tuple(forms))


def parse(source: str) -> Compound:
    return TokenStream(lex(source)).parse_all()
