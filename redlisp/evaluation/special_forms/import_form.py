from __future__ import annotations

from typing import TYPE_CHECKING

from redlisp import SExpression, LispValue, EvaluatorFn
from redlisp.types.environment import Environment, ImportEnvironment
from redlisp.types.errors import LispArityError, LispTypeError
from redlisp.types.expression import display

if TYPE_CHECKING:
    from redlisp.package_registry import PackageRegistry


def import_form(
    tail: list[SExpression],
    env: Environment,
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    Usage:
        (import "math" "strings" (body ...))
    Each package name is evaluated and must be a String. The body runs in a
    scope that falls back to the imported packages, in the order given.
    """
    if len(tail) < 2:
        raise LispArityError(
            "import requires at least two arguments, a series of Strings of packages "
            "to import and one expression to execute with the imports"
        )

    *pkg_exprs, body = tail
    current_id = env.package_scope().package_id
    imports = []
    for pkg_expr in pkg_exprs:
        name = evaluate_fn(pkg_expr, env, runtime)
        if not isinstance(name, str):
            raise LispTypeError(f"import expects package names as Strings, found: {display(name, True)}")
        imports.append(runtime.import_package(name, current_id).env)

    return evaluate_fn(body, ImportEnvironment(env, imports), runtime)
