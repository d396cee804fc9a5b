"""
Lookahead dispatch tables.

Each table is an ordered list of ``(pattern, alternative)`` rows. A pattern
is a tuple with one set of token types per lookahead position; a row
matches when peek(i+1).type is in pattern[i] for every position. The first
matching row wins; no match is a syntax error.
"""
from __future__ import annotations

from .token_stream import END_OF_FILE, TokenStream

PRIMARY = frozenset({'ID', 'NUM'})
ARITH_OPS = frozenset({'PLUS', 'MINUS', 'MULT', 'DIV'})
REL_OPS = frozenset({'GREATER', 'LESS', 'NOTEQUAL'})


def _one(*types):
    return frozenset(types)


STMT = [
    ((_one('ID'), _one('EQUAL')), 'assign'),
    ((_one('WHILE'),), 'while'),
    ((_one('IF'),), 'if'),
    ((_one('SWITCH'),), 'switch'),
    ((_one('FOR'),), 'for'),
    ((_one('OUTPUT'),), 'output'),
    ((_one('INPUT'),), 'input'),
]

# what may follow a statement inside a statement list
STMT_LIST_TAIL = [(pattern, 'more') for pattern, _ in STMT] + [
    ((_one('RBRACE'),), 'done'),
]

ASSIGN_RHS = [
    ((PRIMARY, ARITH_OPS), 'expr'),
    ((PRIMARY, _one('SEMICOLON')), 'primary'),
]

ID_LIST_TAIL = [
    ((_one('ID'), _one('COMMA')), 'more'),
    ((_one('ID'), _one('SEMICOLON')), 'last'),
]

CONDITION = [
    ((_one('LPAREN'),), 'parenthesized'),
    ((PRIMARY, REL_OPS), 'bare'),
]

CASE_LIST_TAIL = [
    ((_one('CASE'),), 'more'),
    ((_one('DEFAULT'),), 'done'),
    ((_one('RBRACE'),), 'done'),
]

SWITCH_TAIL = [
    ((_one('DEFAULT'),), 'default'),
    ((_one('RBRACE'),), 'none'),
]

INPUT_LIST = [
    ((_one('NUM'),), 'more'),
    ((_one(END_OF_FILE),), 'done'),
]


def matches(pattern, stream: TokenStream) -> bool:
    for i, allowed in enumerate(pattern, 1):
        if stream.peek(i).type not in allowed:
            return False
    return True


def choose(table, stream: TokenStream, rule: str) -> str:
    for pattern, alternative in table:
        if matches(pattern, stream):
            return alternative
    tok = stream.peek(1)
    raise SyntaxError(
        f"Syntax error in {rule} at token {tok.type} ({tok.value}) line {tok.lineno}")
