"""Parsed expression tree for redlisp.

The reader produces three kinds of node and nothing else:

- Literal    -> a constant Decimal, str or bool
- Identifier -> a name looked up in an Environment when evaluated
- Compound   -> a parenthesised, ordered tuple of child expressions

Nodes are frozen after parsing. The same Compound serves as code and as
literal list data; which one it is depends on what its head evaluates to.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from redlisp import LispValue
from redlisp.types.nil import Nil


@dataclass(frozen=True, slots=True)
class Literal:
    value: Decimal | str | bool

    def display(self) -> str:
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return display(self.value)


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str

    def display(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Compound:
    children: tuple[Expression, ...] = ()

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self):
        return iter(self.children)

    def display(self) -> str:
        return "(" + " ".join(child.display() for child in self.children) + ")"


Expression = Literal | Identifier | Compound


def display(value: LispValue, quote_strings: bool = False) -> str:
    """Render a runtime value the way `print` shows it.

    Strings are written raw at the top level and quoted inside lists so that
    ("a b") and ("a" "b") stay distinguishable.
    """
    match value:
        case bool():
            return "true" if value else "false"
        case Decimal():
            return str(value)
        case str():
            return f'"{value}"' if quote_strings else value
        case list():
            return "(" + " ".join(display(v, True) for v in value) + ")"
        case Literal() | Identifier() | Compound():
            return value.display()
        case _ if value is Nil:
            return "nil"
    return str(value)
