from decimal import Decimal

import pytest

from redlisp.interpreter import Interpreter
from redlisp.modules.package_loader import FileSourceProvider, MemorySourceProvider
from redlisp.types.errors import LispArityError, LispCircularImport, LispImportError, LispTypeError, LispUnboundIdentifier


MATH = """
(defn square x (* x x))
(def pi 3.14)
(print "loading math")
"""


def test_import_makes_package_definitions_visible(run, provider):
    provider.add("math", MATH)
    assert run('(import "math" (square 4))') == 16


def test_imports_are_not_visible_outside_the_body(run, provider):
    provider.add("math", MATH)
    with pytest.raises(LispUnboundIdentifier):
        run('(import "math" (square 4)) (square 2)')


def test_package_is_evaluated_once(run, provider, capsys):
    provider.add("math", MATH)
    code = """
    (import "math" (square 2))
    (import "math" (import "math" (square 3)))
    """
    assert run(code) == 9
    assert capsys.readouterr().out == "loading math\n"
    assert provider.reads == ["math"]


def test_package_cache_outlives_a_program(itp, provider, capsys):
    provider.add("math", MATH)
    itp.run_program('(import "math" pi)')
    itp.run_program('(import "math" pi)')
    assert capsys.readouterr().out == "loading math\n"
    assert list(itp.registry.all()) == ["math"]


def test_interpreters_do_not_share_packages(provider, capsys):
    provider.add("math", MATH)
    Interpreter(provider).run_program('(import "math" pi)')
    Interpreter(provider).run_program('(import "math" pi)')
    assert capsys.readouterr().out == "loading math\nloading math\n"


def test_first_import_wins(run, provider):
    provider.add("a", '(def name "a")')
    provider.add("b", '(def name "b" only-b 2)')
    assert run('(import "a" "b" (list name only-b))') == ["a", Decimal(2)]
    assert run('(import "b" "a" name)') == "b"


def test_local_bindings_shadow_imports(run, provider):
    provider.add("a", '(def name "a")')
    assert run('(def name "main") (import "a" name)') == "main"


def test_package_does_not_see_importer(run, provider):
    provider.add("peek", "(defn peek secret)")
    with pytest.raises(LispUnboundIdentifier, match="secret"):
        run('(def secret 1) (import "peek" (peek))')


def test_def_inside_import_body_writes_to_importing_package(run, provider):
    provider.add("math", MATH)
    assert run('(import "math" (def sq9 (square 3))) (+ sq9 0)') == 9


def test_functions_close_over_their_package(run, provider):
    provider.add("counter", "(def step 10) (defn bump x (+ x step))")
    assert run('(def step 1) (import "counter" (bump 1))') == 11


def test_import_name_is_evaluated(run, provider):
    provider.add("math", MATH)
    assert run('(def which "math") (import which (square 5))') == 25


def test_import_name_must_be_a_string(run):
    with pytest.raises(LispTypeError):
        run("(import 1 (list))")


def test_import_arity(run):
    with pytest.raises(LispArityError):
        run('(import "math")')


def test_unknown_package(run):
    with pytest.raises(LispImportError, match="nowhere"):
        run('(import "nowhere" 1)')


def test_circular_import_fails_fast(run, provider):
    provider.add("a", '(import "b" (list))')
    provider.add("b", '(import "a" (list))')
    with pytest.raises(LispCircularImport, match="a -> b -> a"):
        run('(import "a" 1)')


def test_failed_package_is_not_cached(itp, provider):
    provider.add("broken", "(def x (+ 1 true))")
    with pytest.raises(LispTypeError):
        itp.run_program('(import "broken" x)')
    assert itp.registry.get("broken") is None


def test_import_package_from_host(itp, provider):
    provider.add("math", MATH)
    env = itp.import_package("math")
    assert env.lookup("pi") == Decimal("3.14")
    assert env.is_package and env.package_id == "math"
    assert itp.import_package("math") is env


def test_memory_provider_resolve():
    provider = MemorySourceProvider({"math": MATH})
    assert provider.resolve(None, "math") == ("math", MATH)
    assert provider.reads == ["math"]
    with pytest.raises(LispImportError, match="nowhere"):
        provider.resolve("math", "nowhere")


# -------------------------------
# Files
# -------------------------------
@pytest.fixture
def project(tmp_path):
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "util.lisp").write_text('(import "helpers" (defn twice x (double (double x))))\n')
    (tmp_path / "lib" / "helpers.lisp").write_text("(defn double x (* x 2))\n")
    (tmp_path / "main.lisp").write_text('(import "lib/util" (twice 5))\n')
    return tmp_path


def test_run_file_resolves_relative_to_importing_package(project):
    itp = Interpreter(FileSourceProvider(roots=[]))
    assert itp.run_file(project / "main.lisp") == 20
    ids = sorted(itp.registry.all())
    assert ids == sorted(str((project / p).resolve()) for p in ["main.lisp", "lib/util.lisp", "lib/helpers.lisp"])


def test_file_provider_searches_roots(project, tmp_path_factory, monkeypatch):
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    (elsewhere / "app.lisp").write_text('(import "util" (twice 1))\n')
    monkeypatch.setenv("REDLISP_PACKAGES_PATH", str(project / "lib"))
    itp = Interpreter(FileSourceProvider())
    assert itp.run_file(elsewhere / "app.lisp") == 4


def test_file_provider_unknown_package(project):
    itp = Interpreter(FileSourceProvider(roots=[]))
    with pytest.raises(LispImportError):
        itp.run_file(project / "missing.lisp")


def test_entry_program_imports_from_working_directory(project, monkeypatch):
    monkeypatch.chdir(project)
    itp = Interpreter(FileSourceProvider(roots=[]))
    assert itp.run_program('(import "lib/helpers" (double 21))') == 42


def test_bundled_std_package(monkeypatch):
    monkeypatch.delenv("REDLISP_PACKAGES_PATH", raising=False)
    itp = Interpreter(FileSourceProvider())
    code = '(import "std" (list (not false) (and true false) (empty? (list)) ((compose inc inc) 1)))'
    assert itp.run_program(code) == [True, False, True, Decimal(3)]


def test_file_provider_resolve(project):
    provider = FileSourceProvider(roots=[])
    importer = str((project / "lib" / "util.lisp").resolve())
    canonical_id, text = provider.resolve(importer, "helpers")
    assert canonical_id == str((project / "lib" / "helpers.lisp").resolve())
    assert text == "(defn double x (* x 2))\n"
    with pytest.raises(LispImportError, match="Cannot find package 'nowhere'"):
        provider.resolve(importer, "nowhere")


@pytest.mark.parametrize("name", ["my.utils", "my.utils.lisp"])
def test_file_provider_appends_suffix_to_dotted_names(tmp_path, name):
    (tmp_path / "my.utils.lisp").write_text("(def answer 42)\n")
    provider = FileSourceProvider(roots=[tmp_path])
    assert provider.locate(None, name) == str((tmp_path / "my.utils.lisp").resolve())
