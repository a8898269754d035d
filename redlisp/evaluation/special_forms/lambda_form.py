"""Special forms: fn and macro.

Both capture the environment they are evaluated in. The last argument is the
body; every argument before it must be an Identifier naming a parameter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from redlisp import EvaluatorFn
from redlisp import SExpression, LispValue
from redlisp.types.errors import LispArityError, LispTypeError
from redlisp.types.environment import Environment
from redlisp.types.expression import Compound, Identifier
from redlisp.types.lambda_fn import Function, Macro

if TYPE_CHECKING:
    from redlisp.package_registry import PackageRegistry


def formal_names(form: str, params: list[SExpression]) -> list[str]:
    """Names of the parameter Identifiers; anything else is a type error."""
    names = []
    for param in params:
        if not isinstance(param, Identifier):
            raise LispTypeError(
                f"{form} expects all arguments except the last one to be Identifiers, "
                f"found: {param.display()}"
            )
        names.append(param.name)
    return names


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(fn param... body)"""
    if not tail:
        raise LispArityError("fn requires at least one argument")

    *params, body = tail
    return Function(formal_names("fn", params), body, env)


def macro_form(
    tail: list[SExpression],
    env: Environment,
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(macro param... body), where body must be a compound form."""
    if not tail:
        raise LispArityError("macro requires at least one argument")

    *params, body = tail
    if not isinstance(body, Compound):
        raise LispTypeError(f"Last argument to macro must be a compound form, found: {body.display()}")
    return Macro(formal_names("macro", params), body, env)
