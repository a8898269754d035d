from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from redlisp import LispValue
from redlisp.evaluation.evaluator import evaluate
from redlisp.modules.package_loader import SourceProvider
from redlisp.reader.parser import parse
from redlisp.types.environment import Environment, LibraryEnvironment
from redlisp.types.errors import LispCircularImport
from redlisp.types.nil import Nil

logger = logging.getLogger(__name__)


@dataclass
class Package:
    id: Optional[str]
    env: Environment
    result: LispValue = Nil  # value of the last top-level form


class PackageRegistry:
    """Process-wide package cache plus the handle evaluation threads around.

    Every package is evaluated at most once per canonical id. Later imports of
    the same id return the cached scope without re-running its top-level forms.
    """

    def __init__(self, library: LibraryEnvironment, provider: SourceProvider):
        self.library = library
        self.provider = provider
        self._packages: Dict[str, Package] = {}
        # ids whose top level is currently being evaluated, outermost first
        self._loading: List[str] = []

    def get(self, package_id: str) -> Optional[Package]:
        return self._packages.get(package_id)

    def all(self) -> Dict[str, Package]:
        return self._packages

    def new_package_scope(self, package_id: Optional[str] = None) -> Environment:
        return Environment(outer=self.library, is_package=True, package_id=package_id)

    def load_source(self, source: str, package_id: Optional[str] = None) -> Package:
        """Evaluate a source unit's top-level forms, in order, in a fresh package scope.

        The result is not cached; use import_package for memoized loading.
        """
        program = parse(source)
        env = self.new_package_scope(package_id)
        result: LispValue = Nil
        for form in program:
            result = evaluate(form, env, self)
        return Package(package_id, env, result)

    def import_package(self, name: str, current_id: Optional[str] = None) -> Package:
        """Resolve `name` from the package `current_id` and return its evaluated Package.

        Raises LispCircularImport if the package is still being evaluated further
        up the stack, and LispImportError if the provider cannot resolve it.
        """
        package_id = self.provider.locate(current_id, name)
        pkg = self._packages.get(package_id)
        if pkg is not None:
            logger.debug("Package %s already loaded", package_id)
            return pkg

        if package_id in self._loading:
            cycle = " -> ".join(self._loading[self._loading.index(package_id):] + [package_id])
            raise LispCircularImport(f"Circular import: {cycle}")

        source = self.provider.read(package_id)
        logger.debug("Evaluating package %s", package_id)
        self._loading.append(package_id)
        try:
            pkg = self.load_source(source, package_id)
        finally:
            self._loading.pop()

        self._packages[package_id] = pkg
        logger.debug("Package %s loaded with %d definitions", package_id, len(pkg.env.vars))
        return pkg
