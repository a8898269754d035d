"""Callable runtime values for redlisp.

Two user-level closures (Function and Macro) share one representation and
differ only in how the evaluator feeds them: a Function receives evaluated
values, a Macro receives the raw argument expressions. Builtins are wrapped
in Primitive (eager) and SpecialForm (unevaluated) so the evaluator can
dispatch on an explicit tag instead of probing for `callable`.
"""

from __future__ import annotations

from io import StringIO
from typing import Callable

from redlisp import LispValue, SExpression
from redlisp.types.environment import Environment


class Lambda:
    """A closure: parameter names, a body expression and its defining env."""

    __slots__ = ("formals", "body", "env")

    kind = "λ"

    def __init__(self, formals: list[str], body: SExpression, env: Environment):
        self.formals: tuple[str, ...] = tuple(formals)
        self.body: SExpression = body
        self.env: Environment = env

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"({self.kind} (")
            buffer.write(" ".join(self.formals))
            buffer.write(") ")
            buffer.write(self.body.display())
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)

    def extend_env(self, args: list[LispValue]) -> Environment:
        """
        Bind arguments to formals positionally in a fresh scope under the
        captured environment.

        Only min(len(formals), len(args)) pairs are bound: surplus arguments
        are dropped and unmatched formals stay unbound.
        """
        local_env = Environment(outer=self.env)
        for name, value in zip(self.formals, args):
            local_env.define(name, value)
        return local_env


class Function(Lambda):
    __slots__ = ()
    kind = "fn"


class Macro(Lambda):
    __slots__ = ()
    kind = "macro"


class Builtin:
    """A named Python implementation installed in the library scope."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable[..., LispValue]):
        self.name = name
        self.fn = fn

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class Primitive(Builtin):
    """Builtin called with evaluated arguments: fn(env, args, runtime)."""
    __slots__ = ()


class SpecialForm(Builtin):
    """Builtin called with raw expressions: fn(tail, env, runtime, evaluate_fn)."""
    __slots__ = ()
