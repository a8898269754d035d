from __future__ import annotations

from typing import TYPE_CHECKING

from redlisp import EvaluatorFn
from redlisp import SExpression, LispValue
from redlisp.types.errors import LispArityError, LispTypeError
from redlisp.types.environment import Environment
from redlisp.types.expression import Identifier

if TYPE_CHECKING:
    from redlisp.package_registry import PackageRegistry


def let_form(
    tail: list[SExpression],
    env: Environment,
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (let id val id val ... body)
    Every val is evaluated in the outer env, so later bindings cannot see
    earlier ones. The body runs in a single new scope holding all of them.
    """
    if len(tail) < 3:
        raise LispArityError(f"let requires at least three arguments, found: {len(tail)}")
    if len(tail) % 2 == 0:
        raise LispArityError(
            "let requires an odd number of arguments, pairs of names and values "
            f"followed by a final expression. Found: {len(tail)}"
        )

    *pairs, body = tail
    inner = Environment(outer=env)
    for position in range(0, len(pairs), 2):
        name, val_expr = pairs[position], pairs[position + 1]
        if not isinstance(name, Identifier):
            raise LispTypeError(
                f"let expected an Identifier at argument {position + 1}, found: {name.display()}"
            )
        inner.define(name.name, evaluate_fn(val_expr, env, runtime))

    return evaluate_fn(body, inner, runtime)
