"""Application engine for redlisp.

Centralizes how callables are invoked so the evaluator, the `apply`
primitive and special forms share one set of binding rules:

- Function: arguments are values; body runs in a fresh scope under the
  closure's captured environment (lexical, not the caller's).
- Macro: same scope construction, but arguments are the unevaluated
  expressions and the result is returned without further evaluation.
- Primitive: the Python implementation receives the caller's env, the
  argument list and the runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from redlisp import LispValue, EvaluatorFn, SExpression
from redlisp.types.environment import Environment
from redlisp.types.errors import LispTypeError
from redlisp.types.expression import display
from redlisp.types.lambda_fn import Function, Macro, Primitive

if TYPE_CHECKING:
    from redlisp.package_registry import PackageRegistry


def apply_lambda(
    fn: Function | Macro,
    args: list[LispValue],
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    new_env = fn.extend_env(args)
    return evaluate_fn(fn.body, new_env, runtime)


def apply_macro(
    macro: Macro,
    tail: list[SExpression],
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    return apply_lambda(macro, list(tail), runtime, evaluate_fn)


def apply(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    runtime: PackageRegistry,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply a Function or a Primitive to already-evaluated arguments."""
    match head:
        case Function():
            return apply_lambda(head, args, runtime, evaluate_fn)
        case Primitive():
            return head.fn(env, args, runtime)
    raise LispTypeError(f"Cannot apply non-function {display(head, True)}")
