"""
Token source consumed by the parser: bounded lookahead over a PLY lexer.
"""
from __future__ import annotations

from collections import namedtuple
from typing import List

import constants
from . import lex_spl

END_OF_FILE = 'END_OF_FILE'

Token = namedtuple('Token', ['type', 'value', 'lineno'])


class TokenStream:
    """Wraps a lexer with ``peek(k)`` / ``next()`` / ``expect(kind)``.

    The stream never backtracks. Once the lexer is exhausted every further
    request yields an END_OF_FILE token.
    """

    def __init__(self, lexer, max_lookahead: int = constants.MAX_LOOKAHEAD):
        self.lexer = lexer
        self.max_lookahead = max_lookahead
        self._buffer: List[Token] = []

    @classmethod
    def from_text(cls, text: str) -> 'TokenStream':
        lexer = lex_spl.build_lexer()
        lexer.input(text)
        return cls(lexer)

    def _fill(self, k: int):
        while len(self._buffer) < k:
            tok = self.lexer.token()
            if tok is None:
                self._buffer.append(Token(END_OF_FILE, None, self.lexer.lineno))
            else:
                self._buffer.append(Token(tok.type, tok.value, tok.lineno))

    def peek(self, k: int = 1) -> Token:
        if not 1 <= k <= self.max_lookahead:
            raise ValueError(f"Lookahead {k} outside 1..{self.max_lookahead}")
        self._fill(k)
        return self._buffer[k - 1]

    def next(self) -> Token:
        self._fill(1)
        return self._buffer.pop(0)

    def expect(self, kind: str) -> Token:
        tok = self.next()
        if tok.type != kind:
            raise SyntaxError(
                f"Expected {kind} but found {tok.type} ({tok.value}) line {tok.lineno}")
        return tok
