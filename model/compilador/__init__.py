"""Compilador package: lexer, token stream and IR-building parser"""

from .parser_spl import compile_program, CompiledProgram, Parser, ParserContext
from .token_stream import TokenStream, Token, END_OF_FILE

__all__ = [
    "compile_program", "CompiledProgram", "Parser", "ParserContext",
    "TokenStream", "Token", "END_OF_FILE",
]
