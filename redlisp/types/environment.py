"""Runtime environments for redlisp.

An Environment stores bindings of names to evaluated values and links to an
`outer` scope. Three variants form every lookup chain:

- LibraryEnvironment: the root. Holds the builtins, has no outer scope and is
  read-only once the interpreter has populated it.
- Environment: an ordinary scope. Package top-level scopes carry
  `is_package=True`; function, macro and let scopes do not.
- ImportEnvironment: a scope created by `import`. After its own bindings and
  its outer chain, it consults each imported package scope in order.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Optional

from redlisp import LispValue
from redlisp.types.errors import LispTypeError, LispUnboundIdentifier


class Environment:
    """Hierarchical mapping from names to Lisp values."""

    __slots__ = ("vars", "outer", "is_package", "package_id")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        is_package: bool = False,
        package_id: str | None = None,
    ):
        self.vars: dict[str, LispValue] = {}
        self.outer: Environment | None = outer
        self.is_package = is_package
        # canonical id of the source unit, set on package scopes only
        self.package_id = package_id

    def define(self, name: str, value: LispValue) -> None:
        """Bind `name` to `value` in this frame, shadowing any outer binding."""
        if not isinstance(name, str):
            raise LispTypeError(f"Cannot define {name!r} as a name")
        self.vars[name] = value

    def update(self, mapping: dict[str, LispValue]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def contains(self, name: str) -> bool:
        if name in self.vars:
            return True
        return self.outer is not None and self.outer.contains(name)

    def lookup(self, name: str) -> LispValue:
        """Look up the value bound to `name`: this frame first, then outward.

        Raises LispUnboundIdentifier if no scope in the chain binds it.
        """
        if name in self.vars:
            return self.vars[name]
        if self.outer is None:
            raise LispUnboundIdentifier(name)
        return self.outer.lookup(name)

    def package_scope(self) -> Environment:
        """Nearest enclosing scope (this one included) that is a package boundary."""
        if self.is_package or self.outer is None:
            return self
        return self.outer.package_scope()

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Single-frame view with an indicator for the parent."""
        with StringIO() as buffer:
            if self.is_package:
                buffer.write("package ")
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class LibraryEnvironment(Environment):
    """Root scope holding the builtins. It is its own package scope."""

    __slots__ = ("_frozen",)

    def __init__(self):
        super().__init__(outer=None, is_package=False)
        self._frozen = False

    def freeze(self) -> None:
        self._frozen = True

    def define(self, name: str, value: LispValue) -> None:
        if self._frozen:
            raise LispTypeError(f"Cannot define {name} in the read-only library scope")
        super().define(name, value)

    def contains(self, name: str) -> bool:
        return name in self.vars

    def lookup(self, name: str) -> LispValue:
        try:
            return self.vars[name]
        except KeyError:
            raise LispUnboundIdentifier(name) from None

    def package_scope(self) -> Environment:
        return self

    def __str__(self) -> str:
        return f"<library: {len(self.vars)} builtins>"


class ImportEnvironment(Environment):
    """Scope whose lookups fall back to a list of imported package scopes."""

    __slots__ = ("imports",)

    def __init__(self, outer: Environment, imports: Iterable[Environment]):
        super().__init__(outer=outer, is_package=False)
        self.imports: tuple[Environment, ...] = tuple(imports)

    def contains(self, name: str) -> bool:
        return (
            name in self.vars
            or self.outer.contains(name)
            or any(pkg.contains(name) for pkg in self.imports)
        )

    def lookup(self, name: str) -> LispValue:
        """Own frame, then the outer chain, then the first import binding `name`."""
        if name in self.vars:
            return self.vars[name]
        if self.outer.contains(name):
            return self.outer.lookup(name)
        for pkg in self.imports:
            if pkg.contains(name):
                return pkg.lookup(name)
        raise LispUnboundIdentifier(name)

    def package_scope(self) -> Environment:
        return self.outer.package_scope()
