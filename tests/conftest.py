import pytest

from redlisp.interpreter import Interpreter
from redlisp.modules.package_loader import MemorySourceProvider


# Every test gets its own interpreter, and so its own package cache. Packages
# are served from memory; tests add sources with `provider.add(name, code)`.


@pytest.fixture
def provider():
    return MemorySourceProvider()


@pytest.fixture
def itp(provider):
    return Interpreter(provider)


@pytest.fixture
def run(itp):
    """Run a program and return the value of its last top-level form."""
    return itp.run_program
