from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from redlisp import LispValue
from redlisp.builtin.env_builtin import register
from redlisp.modules.package_loader import FileSourceProvider, SourceProvider
from redlisp.package_registry import Package, PackageRegistry
from redlisp.types.environment import Environment, LibraryEnvironment
from redlisp.types.errors import LispRecursionError

logger = logging.getLogger(__name__)


@contextmanager
def recursion_guard() -> Iterator[None]:
    """Report Python stack exhaustion as a LispRecursionError."""
    try:
        yield
    except RecursionError as e:
        raise LispRecursionError(
            f"Maximum recursion depth exceeded (Python limit {sys.getrecursionlimit()})"
        ) from e


class Interpreter:
    """
    Host facade: owns the library scope, the source provider and the package
    cache, and runs programs against them.
    """

    def __init__(self, provider: SourceProvider | None = None):
        self.env: LibraryEnvironment = LibraryEnvironment()
        register(self.env)
        self.env.freeze()

        self.provider: SourceProvider = provider if provider is not None else FileSourceProvider()
        self.registry: PackageRegistry = PackageRegistry(self.env, self.provider)

    def run_program(self, code: str) -> LispValue:
        """Evaluate `code` in a fresh package scope; return the last top-level value."""
        with recursion_guard():
            return self.registry.load_source(code).result

    def import_package(self, name: str) -> Environment:
        """Load (at most once) the package `name` and return its top-level scope."""
        with recursion_guard():
            return self.registry.import_package(name).env

    def run_file(self, path: str | Path) -> LispValue:
        """Run an entry file through the package cache so later imports of it reuse it."""
        logger.info("Running %s", path)
        with recursion_guard():
            pkg: Package = self.registry.import_package(str(path))
        return pkg.result
