"""Core evaluator for the redlisp interpreter.

Reduces an Expression to a value in an Environment. A Compound form is
dispatched on what its head evaluates to:

- SpecialForm / Macro -> called with the raw argument expressions
- Function / Primitive -> called with arguments evaluated left to right
- anything else        -> the form is data: [head, *evaluated arguments]

The `runtime` argument is the PackageRegistry of the running interpreter; it
is threaded through every call so that `import` can reach the package cache
and source provider without global state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from redlisp import SExpression, LispValue
from redlisp.evaluation.apply import apply, apply_macro
from redlisp.types.environment import Environment
from redlisp.types.errors import LispTypeError
from redlisp.types.expression import Compound, Identifier, Literal
from redlisp.types.lambda_fn import Function, Macro, Primitive, SpecialForm

if TYPE_CHECKING:
    from redlisp.package_registry import PackageRegistry


def evaluate(expr: SExpression, env: Environment, runtime: PackageRegistry) -> LispValue:
    match expr:
        case Literal(value):
            return value
        case Identifier(name):
            return env.lookup(name)
        case Compound(()):
            return []
        case Compound((head_expr, *tail)):
            head = evaluate(head_expr, env, runtime)
            match head:
                case SpecialForm():
                    return head.fn(tail, env, runtime, evaluate)
                case Macro():
                    return apply_macro(head, tail, runtime, evaluate)
                case Function() | Primitive():
                    # Order matters: a `def` in one argument is visible to the next.
                    args = [evaluate(arg, env, runtime) for arg in tail]
                    return apply(head, args, env, runtime, evaluate)
                case _:
                    return [head] + [evaluate(arg, env, runtime) for arg in tail]

    raise LispTypeError(f"Cannot evaluate non-expression {expr!r}")
