from redlisp.types.environment import Environment, LibraryEnvironment, ImportEnvironment
from redlisp.types.expression import Compound, Identifier, Literal, Expression, display
from redlisp.types.lambda_fn import Function, Macro, Primitive, SpecialForm
from redlisp.types.nil import Nil
