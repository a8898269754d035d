from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)

# Resolve installation dir (redlisp package directory)
_REDLISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PACKAGES_DIRS = [_REDLISP_DIR / 'packages']
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_DIVISION_PRECISION = 28
_DEFAULT_RECURSION_LIMIT = 10000


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def positive_int_from_env(var: str, default: int) -> int:
    """Read a positive integer setting; unset or invalid values fall back to `default`."""
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        value = None
    if value is None or value < 1:
        logger.warning("Ignoring %s=%r, expected a positive integer; using %d", var, raw, default)
        return default
    return value


def get_packages_roots() -> List[Path]:
    """Directories searched for packages after the importing package's own directory."""
    return paths_from_env('REDLISP_PACKAGES_PATH', _DEFAULT_PACKAGES_DIRS)


def get_log_level() -> str:
    return os.environ.get('REDLISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_division_precision() -> int:
    """Significant digits kept by `/`; + - * are exact."""
    return positive_int_from_env('REDLISP_DIVISION_PRECISION', _DEFAULT_DIVISION_PRECISION)


def get_recursion_limit() -> int:
    """Python stack depth the command line host allows; each Lisp call takes several frames."""
    return positive_int_from_env('REDLISP_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)
