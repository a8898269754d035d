from decimal import Decimal

import pytest
from hypothesis import given, strategies as st

from redlisp.reader.parser import lex, parse, TokenStream, categorize
from redlisp.types.errors import LispLexError, LispParseError
from redlisp.types.expression import Compound, Identifier, Literal


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a ", [("atom", "a")]),
        ("(a b c)", [("lparen", "("), ("atom", "a"), ("atom", "b"), ("atom", "c"), ("rparen", ")")]),
        ('"hello"', [("string", '"hello"')]),
        ('"a b  c"', [("string", '"a b  c"')]),
        ('"a\\"', [("string", '"a\\"')]),  # no escape processing
        ("(+(f)x)", [("lparen", "("), ("atom", "+"), ("lparen", "("), ("atom", "f"), ("rparen", ")"),
                     ("atom", "x"), ("rparen", ")")]),
        ("  \n\t(\n)\n", [("lparen", "("), ("rparen", ")")]),
        ('ab"c ', [("atom", 'ab"c')]),
        ("", []),
    ]
)
def test_lexer_basic(source, expected):
    tokens = list(lex(source))
    assert tokens == expected


@pytest.mark.parametrize("source", ['"abc', '(print "abc)', "abc", "(a b) c"])
def test_lexer_unterminated(source):
    with pytest.raises(LispLexError):
        list(lex(source))


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", Literal(Decimal("1"))),
        ("123", Literal(Decimal("123"))),
        ("3.14", Literal(Decimal("3.14"))),
        ("7.", Literal(Decimal("7"))),
        ('"hi there"', Literal("hi there")),
        ('""', Literal("")),
        ("12.5", Identifier("12.5")),  # only one digit may precede the point
        ("-1", Identifier("-1")),
        (".5", Identifier(".5")),
        ("true", Identifier("true")),
        ("head", Identifier("head")),
    ]
)
def test_categorize(text, expected):
    assert categorize(text) == expected


def test_parse_top_level_forms():
    program = parse('(def x 1) (print "a" x)\n')
    assert program == Compound((
        Compound((Identifier("def"), Identifier("x"), Literal(Decimal(1)))),
        Compound((Identifier("print"), Literal("a"), Identifier("x"))),
    ))


def test_nested_lists():
    program = parse("((a b) (c d))")
    expected = Compound((Identifier("a"), Identifier("b"))), Compound((Identifier("c"), Identifier("d")))
    assert program.children[0].children == expected


def test_empty_compound():
    assert parse("()") == Compound((Compound(()),))


def test_parse_expr_one_at_a_time():
    stream = TokenStream(lex("(a) b "))
    assert stream.parse_expr() == Compound((Identifier("a"),))
    assert stream.parse_expr() == Identifier("b")
    assert stream.parse_expr() is None


@pytest.mark.parametrize("source, message", [("(a (b)", "Unmatched"), ("(a))", "Unexpected"), (")", "Unexpected")])
def test_unbalanced_parens(source, message):
    with pytest.raises(LispParseError, match=message):
        parse(source)


def test_display_roundtrips_source():
    source = '(defn f a b (+ a "x" (g 1.5)))'
    assert parse(source).children[0].display() == source


# -------------------------------
# Hypothesis tests
# -------------------------------
atom_strat = st.text(
    st.characters(whitelist_categories=("Ll", "Lu", "Nd", "Pc", "Sm"), whitelist_characters="-_*/"),
    min_size=1, max_size=10,
)
string_strat = st.text(st.characters(blacklist_characters='"'), max_size=20).map(lambda s: f'"{s}"')
form_strat = st.recursive(
    st.one_of(atom_strat, string_strat),
    lambda children: st.lists(children, max_size=4).map(lambda xs: "(" + " ".join(xs) + ")"),
    max_leaves=12,
)


@given(st.lists(form_strat, max_size=4))
def test_parser_no_crash(forms):
    source = " ".join(forms) + "\n"
    program = parse(source)
    assert len(program) == len(forms)


@given(string_strat)
def test_strings_are_read_verbatim(token):
    assert parse(token).children[0] == Literal(token[1:-1])
