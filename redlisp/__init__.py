# Core type aliases for redlisp's data model.
# Code is parsed into Expression objects (Literal / Identifier / Compound) and
# runtime values are plain Python objects (Decimal, str, bool, list) plus the
# callable variants from redlisp.types.lambda_fn.
#
# Naming guidance:
# - SExpression: use in reader/parser/special-form code for parsed forms.
# - LispValue:  use in evaluator/runtime code for evaluated values.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Parsed forms are values too: macros receive them unevaluated
SExpression = LispValue

# Evaluator function type, passed into special forms to avoid import cycles
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.1.0"
