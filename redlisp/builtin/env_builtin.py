"""Built-in functions for the redlisp runtime environment.

This module defines the primitive functions (arithmetic, equality, list
deconstruction, printing, reflection and application helpers) and the
`register` entry point that installs them, together with the special forms,
into the library scope.

Every primitive takes (env, args, runtime): the calling environment, the
already-evaluated arguments and the interpreter's PackageRegistry.
"""
from __future__ import annotations

import logging
from decimal import Context, Decimal, InvalidOperation, MAX_EMAX, MAX_PREC, MIN_EMIN
from functools import reduce
from typing import TYPE_CHECKING, Callable

from redlisp import LispValue
from redlisp.config import get_division_precision
from redlisp.evaluation.apply import apply as apply_engine
from redlisp.evaluation.evaluator import evaluate
from redlisp.evaluation.special_forms import SPECIAL_FORMS
from redlisp.types.environment import Environment
from redlisp.types.errors import LispArithmeticError, LispArityError, LispTypeError
from redlisp.types.expression import Compound, Identifier, Literal, display
from redlisp.types.lambda_fn import Function, Macro, Primitive, SpecialForm
from redlisp.types.nil import Nil

if TYPE_CHECKING:
    from redlisp.package_registry import PackageRegistry

logger = logging.getLogger(__name__)

# + - * never round; / rounds to the configured number of digits
EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def _division_context() -> Context:
    return Context(prec=get_division_precision())


# -------------------------------
# Evaluation and application
# -------------------------------
def eval_builtin(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> LispValue:
    """Evaluate each expression argument in the calling env; one result or a list."""
    if not args:
        raise LispArityError("eval requires at least one argument")
    results = []
    for expr in args:
        if not isinstance(expr, (Literal, Identifier, Compound)):
            raise LispTypeError(f"eval expects expressions, found: {display(expr, True)}")
        results.append(evaluate(expr, env, runtime))
    return results[0] if len(results) == 1 else results


def apply_builtin(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> LispValue:
    """(apply f arg...) calls f with the remaining arguments."""
    if not args:
        raise LispArityError("apply requires at least one argument")
    func, *rest = args
    if not isinstance(func, (Function, Primitive)):
        raise LispTypeError(f"apply requires its first argument to be a function, found: {display(func, True)}")
    return apply_engine(func, rest, env, runtime, evaluate)


# -------------------------------
# Lists
# -------------------------------
def _single_list(name: str, args: list[LispValue]) -> list[LispValue]:
    if len(args) != 1:
        raise LispArityError(f"{name} requires one argument, found: {len(args)}")
    xs = args[0]
    if not isinstance(xs, list):
        raise LispTypeError(f"{name} requires a List, found: {display(xs, True)}")
    if not xs:
        raise LispTypeError(f"{name} of an empty List")
    return xs


def head(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> LispValue:
    """First element of a non-empty list."""
    return _single_list("head", args)[0]


def tail(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> list[LispValue]:
    """Drop the first element in place and return the same list."""
    xs = _single_list("tail", args)
    del xs[0]
    return xs


def list_builtin(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> list[LispValue]:
    """Construct a list from the provided arguments."""
    return list(args)


# -------------------------------
# Output and reflection
# -------------------------------
def print_builtin(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> LispValue:
    """Print the concatenated display forms of args; return the single arg or all of them."""
    text = "".join(display(a) for a in args)
    logger.debug("Print: %s", text)
    print(text)
    return args[0] if len(args) == 1 else list(args)


def type_name(value: LispValue) -> str:
    match value:
        case bool():
            return "Boolean"
        case Decimal():
            return "Number"
        case str():
            return "String"
        case list():
            return "List"
        case Function():
            return "Function"
        case Macro():
            return "Macro"
        case Primitive():
            return "Primitive"
        case SpecialForm():
            return "SpecialForm"
        case Literal() | Identifier() | Compound():
            return "Expression"
        case _ if value is Nil:
            return "Nil"
    return type(value).__name__


def typeof(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> list[str]:
    """List of type names, one per argument."""
    return [type_name(a) for a in args]


# -------------------------------
# Equality
# -------------------------------
def is_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality; numbers compare with trailing zeros stripped."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, Decimal) and isinstance(b, Decimal):
        return a.normalize(EXACT) == b.normalize(EXACT)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(is_equal(x, y) for x, y in zip(a, b))
    if type(a) != type(b):
        return False
    return a == b


def equals(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> bool:
    """True if all arguments are pairwise equal (or zero/one arg)."""
    return all(is_equal(args[0], other) for other in args[1:])


# -------------------------------
# Arithmetic
# -------------------------------
def _numbers(name: str, args: list[LispValue]) -> list[Decimal]:
    if not args:
        raise LispTypeError(f"{name} requires at least one argument")
    for x in args:
        if not isinstance(x, Decimal):
            raise LispTypeError(f"All arguments to {name} must be numbers, found: {display(x, True)}")
    return args


def _fold(name: str, method: str, args: list[LispValue], ctx: Context) -> Decimal:
    numbers = _numbers(name, args)
    step: Callable[[Decimal, Decimal], Decimal] = getattr(ctx, method)
    try:
        return reduce(step, numbers[1:], numbers[0])
    except (ZeroDivisionError, InvalidOperation) as e:
        raise LispArithmeticError(f"{name} failed on {display(list(args))}: {e!r}") from e


def add(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> LispValue:
    """Sum the arguments; with a String first argument, concatenate them instead."""
    if args and isinstance(args[0], str):
        return "".join(display(a) for a in args)
    return _fold("+", "add", args, EXACT)


def sub(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> Decimal:
    """Subtract all subsequent numbers from the first."""
    return _fold("-", "subtract", args, EXACT)


def mul(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> Decimal:
    return _fold("*", "multiply", args, EXACT)


def div(env: Environment, args: list[LispValue], runtime: PackageRegistry) -> Decimal:
    """Divide left to right, rounding to the division precision."""
    return _fold("/", "divide", args, _division_context())


PRIMITIVES = {
    "eval": eval_builtin,
    "apply": apply_builtin,
    "head": head,
    "tail": tail,
    "list": list_builtin,
    "print": print_builtin,
    "typeof": typeof,
    "=": equals,
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
}


def register(env: Environment) -> None:
    """Register all builtin functions, special forms and constants into the given environment."""
    env.update({name: Primitive(name, fn) for name, fn in PRIMITIVES.items()})
    env.update({name: SpecialForm(name, fn) for name, fn in SPECIAL_FORMS.items()})
    env.define("true", True)
    env.define("false", False)
