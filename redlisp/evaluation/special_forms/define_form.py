"""Special forms: def and defn.

Both write into the nearest package scope, however deeply the form is nested
inside fn, macro or let scopes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from redlisp import EvaluatorFn
from redlisp import SExpression, LispValue
from redlisp.evaluation.special_forms.lambda_form import formal_names
from redlisp.types.errors import LispArityError, LispTypeError
from redlisp.types.environment import Environment
from redlisp.types.expression import Identifier
from redlisp.types.lambda_fn import Function
from redlisp.types.nil import Nil

if TYPE_CHECKING:
    from redlisp.package_registry import PackageRegistry


def define_form(
    tail: list[SExpression],
    env: Environment,
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def name value name value ...)
    Each binding is written before the next value is evaluated.
    """
    if len(tail) < 2:
        raise LispArityError(f"def requires at least two arguments, found: {len(tail)}")
    if len(tail) % 2 == 1:
        raise LispArityError(
            f"def requires an even number of arguments, pairs of names and values. Found: {len(tail)}"
        )

    target = env.package_scope()
    for position in range(0, len(tail), 2):
        name, val_expr = tail[position], tail[position + 1]
        if not isinstance(name, Identifier):
            raise LispTypeError(
                f"def expected an Identifier at argument {position + 1}, found: {name.display()}"
            )
        target.define(name.name, evaluate_fn(val_expr, env, runtime))
    return Nil


def defn_form(
    tail: list[SExpression],
    env: Environment,
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(defn name param... body)"""
    if len(tail) < 2:
        raise LispArityError(f"defn requires at least two arguments, found: {len(tail)}")

    *names, body = tail
    name, *params = formal_names("defn", names)
    env.package_scope().define(name, Function(params, body, env))
    return Nil
