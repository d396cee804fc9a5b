"""
Lexer for the small imperative language, using PLY (lex).
Produces ID/NUM/keyword/punctuation tokens; END_OF_FILE is synthesized by
the token stream, not by the lexer.
"""
from __future__ import annotations

try:
    import ply.lex as lex
except Exception as e:
    raise ImportError("PLY is required for model/compilador/lex_spl.py. Install it with `pip install ply`. Original error: %s" % e)

import constants

# Largest literal a signed memory word can hold
MAX_LITERAL = (1 << (constants.WORDS_SIZE_BITS - 1)) - 1

reserved = {
    'while': 'WHILE',
    'if': 'IF',
    'switch': 'SWITCH',
    'case': 'CASE',
    'default': 'DEFAULT',
    'for': 'FOR',
    'output': 'OUTPUT',
    'input': 'INPUT',
}

# Token names
tokens = (
    'ID',
    'NUM',
    'EQUAL',
    'SEMICOLON',
    'COMMA',
    'COLON',
    'LBRACE',
    'RBRACE',
    'LPAREN',
    'RPAREN',
    'PLUS',
    'MINUS',
    'MULT',
    'DIV',
    'GREATER',
    'LESS',
    'NOTEQUAL',
) + tuple(reserved.values())

# Simple tokens
t_EQUAL = r'='
t_SEMICOLON = r';'
t_COMMA = r','
t_COLON = r':'
t_LBRACE = r'\{'
t_RBRACE = r'\}'
t_LPAREN = r'\('
t_RPAREN = r'\)'
t_PLUS = r'\+'
t_MINUS = r'-'
t_MULT = r'\*'
t_DIV = r'/'
t_GREATER = r'>'
t_LESS = r'<'

# Function rules go first, so '<>' wins over '<' here.

def t_NOTEQUAL(t):
    r"!=|<>"
    return t


def t_NUM(t):
    r"[0-9]+"
    t.value = int(t.value)
    if t.value > MAX_LITERAL:
        raise SyntaxError(f"Literal {t.value} does not fit in a memory word at line {t.lexer.lineno}")
    return t


def t_ID(t):
    r"[A-Za-z_][A-Za-z_0-9]*"
    t.type = reserved.get(t.value, 'ID')
    return t


t_ignore = ' \t\r'


def t_newline(t):
    r"\n+"
    t.lexer.lineno += len(t.value)


def t_error(t):
    raise SyntaxError(f"Illegal character '{t.value[0]}' at line {t.lexer.lineno}")


def build_lexer(**kwargs):
    return lex.lex(**kwargs)


def tokenize(text: str):
    lexer = build_lexer()
    lexer.input(text)
    out = []
    while True:
        tok = lexer.token()
        if not tok:
            break
        out.append((tok.type, tok.value, tok.lineno))
    return out


if __name__ == '__main__':
    sample = """
    a, b;
    {
        a = 1;
        while a < 3 { output a; a = a + 1; }
    }
    4 5
    """
    for t in tokenize(sample):
        print(t)
