"""Test lexer tokenization and the lookahead token stream"""
import pytest

from model.compilador import lex_spl
from model.compilador.token_stream import END_OF_FILE, TokenStream

test_code = """a, b;
{
    a = 12;
    while a <> b { output a; }
}
3 4
"""


def token_types(code):
    return [t[0] for t in lex_spl.tokenize(code)]


def test_keywords_and_punctuation():
    types = token_types(test_code)
    assert types[:4] == ['ID', 'COMMA', 'ID', 'SEMICOLON']
    assert 'WHILE' in types
    assert 'OUTPUT' in types
    assert types.count('NUM') == 3
    assert 'NOTEQUAL' in types


def test_number_values_and_lines():
    toks = lex_spl.tokenize(test_code)
    nums = [(v, line) for kind, v, line in toks if kind == 'NUM']
    assert nums == [(12, 3), (3, 6), (4, 6)]


def test_relational_operators():
    assert token_types("a > b < c != d <> e") == [
        'ID', 'GREATER', 'ID', 'LESS', 'ID', 'NOTEQUAL', 'ID', 'NOTEQUAL', 'ID']


def test_keyword_prefix_is_identifier():
    assert token_types("whilex iff output") == ['ID', 'ID', 'OUTPUT']


def test_illegal_character():
    with pytest.raises(SyntaxError):
        lex_spl.tokenize("a = b % c;")


def test_stream_peek_does_not_consume():
    stream = TokenStream.from_text("x = 1 ;")
    assert stream.peek(1).type == 'ID'
    assert stream.peek(3).type == 'NUM'
    assert stream.next().value == 'x'
    assert stream.peek(1).type == 'EQUAL'


def test_stream_end_of_file_repeats():
    stream = TokenStream.from_text("7")
    assert stream.next().value == 7
    assert stream.next().type == END_OF_FILE
    assert stream.peek(2).type == END_OF_FILE
    assert stream.next().type == END_OF_FILE


def test_stream_lookahead_is_bounded():
    stream = TokenStream.from_text("a b c d")
    with pytest.raises(ValueError):
        stream.peek(4)


def test_expect_mismatch():
    stream = TokenStream.from_text("{ }")
    with pytest.raises(SyntaxError):
        stream.expect('RBRACE')
