"""Source providers: the only I/O boundary of the interpreter.

A provider turns an import request into a canonical package id and, on a
cache miss, the raw source text for that id. The registry only calls `read`
for ids it has not evaluated yet, so each package's text is fetched once.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional

from redlisp.config import get_packages_roots
from redlisp.types.errors import LispImportError

logger = logging.getLogger(__name__)

SUFFIX = '.lisp'


class SourceProvider:
    """Base provider. Subclasses implement `locate` and `read`."""

    def locate(self, current_id: Optional[str], name: str) -> str:
        raise NotImplementedError

    def read(self, canonical_id: str) -> str:
        raise NotImplementedError

    def resolve(self, current_id: Optional[str], name: str) -> tuple[str, str]:
        """Return (canonical_id, source_text) for `name` requested from `current_id`."""
        canonical_id = self.locate(current_id, name)
        return canonical_id, self.read(canonical_id)


def _name_to_relpath(name: str) -> Path:
    rel = Path(name)
    return rel if rel.suffix == SUFFIX else rel.with_name(rel.name + SUFFIX)


class FileSourceProvider(SourceProvider):
    """Resolve package names to `.lisp` files.

    A name is tried relative to the directory of the importing package (the
    working directory for the entry program), then under each root in order.
    """

    def __init__(self, roots: Iterable[Path] | None = None):
        self.roots: list[Path] = [Path(r) for r in (roots if roots is not None else get_packages_roots())]

    def _candidates(self, current_id: Optional[str], name: str) -> list[Path]:
        rel = _name_to_relpath(name)
        if rel.is_absolute():
            return [rel]
        base = Path(current_id).parent if current_id else Path.cwd()
        return [base / rel] + [root / rel for root in self.roots]

    def locate(self, current_id: Optional[str], name: str) -> str:
        for candidate in self._candidates(current_id, name):
            if candidate.is_file():
                canonical = str(candidate.resolve())
                logger.debug("Resolved package %r to %s", name, canonical)
                return canonical
        raise LispImportError(f"Cannot find package '{name}' (searched from {current_id or Path.cwd()})")

    def read(self, canonical_id: str) -> str:
        try:
            return Path(canonical_id).read_text(encoding='utf-8')
        except OSError as e:
            raise LispImportError(f"Failed to import file: {canonical_id}") from e


class MemorySourceProvider(SourceProvider):
    """In-memory packages keyed by name, for embedding and tests."""

    def __init__(self, sources: Mapping[str, str] | None = None):
        self.sources: dict[str, str] = dict(sources or {})
        self.reads: list[str] = []

    def add(self, name: str, source: str) -> None:
        self.sources[name] = source

    def locate(self, current_id: Optional[str], name: str) -> str:
        if name not in self.sources:
            raise LispImportError(f"Cannot find package '{name}'")
        return name

    def read(self, canonical_id: str) -> str:
        self.reads.append(canonical_id)
        return self.sources[canonical_id]
