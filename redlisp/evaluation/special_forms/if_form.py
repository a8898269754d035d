from __future__ import annotations

from typing import TYPE_CHECKING

from redlisp import EvaluatorFn
from redlisp import SExpression, LispValue
from redlisp.types.errors import LispArityError, LispTypeError
from redlisp.types.expression import display
from redlisp.types.nil import Nil
from redlisp.types.environment import Environment

if TYPE_CHECKING:
    from redlisp.package_registry import PackageRegistry


def if_form(
    tail: list[SExpression],
    env: Environment,
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise LispArityError(f"if requires two or three arguments, found: {len(tail)}")

    cond = evaluate_fn(tail[0], env, runtime)
    # Only booleans decide; there is no truthiness
    if not isinstance(cond, bool):
        raise LispTypeError(
            f"if condition {tail[0].display()} must be a Boolean, found: {display(cond, True)}"
        )

    if cond:
        return evaluate_fn(tail[1], env, runtime)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env, runtime)
    else:
        return Nil
