"""
Recursive-descent parser that builds the instruction graph in one pass.

Every statement builder returns a ``Fragment(entry, exit)``; callers chain
fragments by linking an exit to the next entry, never by walking ``next``
pointers. Dispatch between grammar alternatives goes through the tables in
``lookahead``.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from model.procesador.memory import Memory
from . import lookahead as la
from .allocator import SymbolAllocator
from .ir import ArithOp, Fragment, InstructionArena, RelOp, dump
from .token_stream import END_OF_FILE, TokenStream

ARITH_TOKENS = {
    'PLUS': ArithOp.PLUS,
    'MINUS': ArithOp.MINUS,
    'MULT': ArithOp.MULT,
    'DIV': ArithOp.DIV,
}

REL_TOKENS = {
    'GREATER': RelOp.GREATER,
    'LESS': RelOp.LESS,
    'NOTEQUAL': RelOp.NOTEQUAL,
}


class ParserContext:
    """State owned by one parse session: allocator, node arena, inputs."""

    def __init__(self, memory: Optional[Memory] = None):
        self.memory = memory if memory is not None else Memory()
        self.allocator = SymbolAllocator(self.memory)
        self.allocator.reset()
        self.arena = InstructionArena()
        self.inputs: List[int] = []


class CompiledProgram:
    """IR root plus everything the execution engine needs."""

    def __init__(self, root: int, arena: InstructionArena, allocator: SymbolAllocator, inputs: List[int]):
        self.root = root
        self.arena = arena
        self.allocator = allocator
        self.inputs = inputs
        # variables at 0, literals at their value, as left by parsing
        self.initial_image = allocator.memory.snapshot(allocator.next_available)

    @property
    def memory(self) -> Memory:
        return self.allocator.memory

    def reset_memory(self):
        """Put the memory image back to its state right after parsing."""
        mem = self.memory
        mem.set_up()
        for address, value in enumerate(self.initial_image):
            mem.write(address, value)

    def symbol_table(self) -> dict:
        return self.allocator.symbol_table()

    def dump(self) -> str:
        return dump(self.arena, self.root, self.allocator.names())


class Parser:

    def __init__(self, stream: TokenStream, ctx: ParserContext):
        self.stream = stream
        self.ctx = ctx

    @property
    def arena(self) -> InstructionArena:
        return self.ctx.arena

    # -----------------------
    # Program level
    # -----------------------

    def parse_program(self) -> CompiledProgram:
        self.parse_var_section()
        body = self.parse_body()
        end = self.arena.new_noop()
        self.arena.link(body.exit, end)
        self.parse_inputs()
        self.stream.expect(END_OF_FILE)
        return CompiledProgram(body.entry, self.arena, self.ctx.allocator, self.ctx.inputs)

    def parse_var_section(self):
        self.parse_id_list()
        self.stream.expect('SEMICOLON')

    def parse_id_list(self):
        while True:
            alt = la.choose(la.ID_LIST_TAIL, self.stream, 'id_list')
            tok = self.stream.expect('ID')
            self.ctx.allocator.resolve_identifier(tok.value)
            if alt == 'last':
                return
            self.stream.expect('COMMA')

    def parse_inputs(self):
        while la.choose(la.INPUT_LIST, self.stream, 'input_list') == 'more':
            self.ctx.inputs.append(self.stream.expect('NUM').value)

    # -----------------------
    # Blocks and statement lists
    # -----------------------

    def parse_body(self) -> Fragment:
        self.stream.expect('LBRACE')
        frag = self.parse_stmt_list()
        self.stream.expect('RBRACE')
        return frag

    def parse_stmt_list(self) -> Fragment:
        first = self.parse_stmt()
        last = first
        while la.choose(la.STMT_LIST_TAIL, self.stream, 'stmt_list') == 'more':
            frag = self.parse_stmt()
            self.arena.link(last.exit, frag.entry)
            last = frag
        return Fragment(first.entry, last.exit)

    def parse_stmt(self) -> Fragment:
        alt = la.choose(la.STMT, self.stream, 'stmt')
        if alt == 'assign':
            h = self.parse_assign_stmt()
            return Fragment(h, h)
        if alt == 'output':
            h = self.parse_output_stmt()
            return Fragment(h, h)
        if alt == 'input':
            h = self.parse_input_stmt()
            return Fragment(h, h)
        if alt == 'while':
            return self.parse_while_stmt()
        if alt == 'if':
            return self.parse_if_stmt()
        if alt == 'for':
            return self.parse_for_stmt()
        return self.parse_switch_stmt()

    # -----------------------
    # Simple statements
    # -----------------------

    def parse_assign_stmt(self) -> int:
        tok = self.stream.expect('ID')
        dest = self.ctx.allocator.resolve_identifier(tok.value)
        self.stream.expect('EQUAL')
        if la.choose(la.ASSIGN_RHS, self.stream, 'assign') == 'expr':
            op1, op, op2 = self.parse_expr()
            h = self.arena.new_assign(dest, op1, op, op2)
        else:
            h = self.arena.new_assign(dest, self.parse_primary())
        self.stream.expect('SEMICOLON')
        return h

    def parse_output_stmt(self) -> int:
        self.stream.expect('OUTPUT')
        tok = self.stream.expect('ID')
        h = self.arena.new_out(self.ctx.allocator.resolve_identifier(tok.value))
        self.stream.expect('SEMICOLON')
        return h

    def parse_input_stmt(self) -> int:
        self.stream.expect('INPUT')
        tok = self.stream.expect('ID')
        h = self.arena.new_in(self.ctx.allocator.resolve_identifier(tok.value))
        self.stream.expect('SEMICOLON')
        return h

    # -----------------------
    # Expressions and conditions
    # -----------------------

    def parse_expr(self) -> Tuple[int, ArithOp, int]:
        op1 = self.parse_primary()
        op = self.parse_op()
        op2 = self.parse_primary()
        return op1, op, op2

    def parse_primary(self) -> int:
        tok = self.stream.next()
        if tok.type == 'ID':
            return self.ctx.allocator.resolve_identifier(tok.value)
        if tok.type == 'NUM':
            return self.ctx.allocator.resolve_literal(tok.value)
        raise SyntaxError(f"Expected ID or NUM but found {tok.type} ({tok.value}) line {tok.lineno}")

    def parse_op(self) -> ArithOp:
        tok = self.stream.next()
        if tok.type not in ARITH_TOKENS:
            raise SyntaxError(f"Expected arithmetic operator but found {tok.type} line {tok.lineno}")
        return ARITH_TOKENS[tok.type]

    def parse_relop(self) -> RelOp:
        tok = self.stream.next()
        if tok.type not in REL_TOKENS:
            raise SyntaxError(f"Expected relational operator but found {tok.type} line {tok.lineno}")
        return REL_TOKENS[tok.type]

    def parse_condition(self) -> int:
        """CJMP with next/target unset; the caller wires both branches."""
        op1 = self.parse_primary()
        relop = self.parse_relop()
        op2 = self.parse_primary()
        return self.arena.new_cjmp(op1, relop, op2)

    def parse_guard(self) -> int:
        # while/if conditions may be wrapped in one pair of parentheses
        if la.choose(la.CONDITION, self.stream, 'condition') == 'parenthesized':
            self.stream.expect('LPAREN')
            cjmp = self.parse_condition()
            self.stream.expect('RPAREN')
            return cjmp
        return self.parse_condition()

    # -----------------------
    # Control flow
    # -----------------------

    def parse_while_stmt(self) -> Fragment:
        self.stream.expect('WHILE')
        cond = self.parse_guard()
        body = self.parse_body()
        return self._close_loop(cond, body)

    def _close_loop(self, cond: int, body: Fragment) -> Fragment:
        # cond -> body ... -> jmp(cond); false branch and jmp.next both -> end
        arena = self.arena
        end = arena.new_noop()
        back = arena.new_jmp(cond)
        arena.link(cond, body.entry)
        arena.link(body.exit, back)
        arena.link(back, end)
        arena.set_target(cond, end)
        return Fragment(cond, end)

    def parse_if_stmt(self) -> Fragment:
        self.stream.expect('IF')
        cond = self.parse_guard()
        body = self.parse_body()
        end = self.arena.new_noop()
        self.arena.link(cond, body.entry)
        self.arena.link(body.exit, end)
        self.arena.set_target(cond, end)
        return Fragment(cond, end)

    def parse_for_stmt(self) -> Fragment:
        self.stream.expect('FOR')
        self.stream.expect('LPAREN')
        init = self.parse_assign_stmt()
        cond = self.parse_condition()
        self.stream.expect('SEMICOLON')
        step = self.parse_assign_stmt()
        self.stream.expect('RPAREN')
        body = self.parse_body()
        # the increment becomes the tail of the loop body
        self.arena.link(body.exit, step)
        loop = self._close_loop(cond, Fragment(body.entry, step))
        self.arena.link(init, loop.entry)
        return Fragment(init, loop.exit)

    def parse_switch_stmt(self) -> Fragment:
        arena = self.arena
        self.stream.expect('SWITCH')
        tok = self.stream.expect('ID')
        var_loc = self.ctx.allocator.resolve_identifier(tok.value)
        self.stream.expect('LBRACE')
        end = arena.new_noop()

        cases = self.parse_case_list(var_loc)
        for test, body in cases:
            arena.link(body.exit, end)
        for (test, _), (following, _) in zip(cases, cases[1:]):
            arena.link(test, following)

        last_test = cases[-1][0]
        if la.choose(la.SWITCH_TAIL, self.stream, 'switch') == 'default':
            jmp, body = self.parse_default_case()
            arena.link(body.exit, end)
            arena.link(jmp, end)
            arena.link(last_test, jmp)
        else:
            arena.link(last_test, end)
        self.stream.expect('RBRACE')
        return Fragment(cases[0][0], end)

    def parse_case_list(self, var_loc: int) -> List[Tuple[int, Fragment]]:
        cases = [self.parse_case(var_loc)]
        while la.choose(la.CASE_LIST_TAIL, self.stream, 'case_list') == 'more':
            cases.append(self.parse_case(var_loc))
        return cases

    def parse_case(self, var_loc: int) -> Tuple[int, Fragment]:
        """``var != literal`` test; a match fails the test and takes ``target`` into the body."""
        self.stream.expect('CASE')
        lit = self.ctx.allocator.resolve_literal(self.stream.expect('NUM').value)
        self.stream.expect('COLON')
        test = self.arena.new_cjmp(var_loc, RelOp.NOTEQUAL, lit)
        body = self.parse_body()
        self.arena.set_target(test, body.entry)
        return test, body

    def parse_default_case(self) -> Tuple[int, Fragment]:
        self.stream.expect('DEFAULT')
        self.stream.expect('COLON')
        jmp = self.arena.new_jmp()
        body = self.parse_body()
        self.arena.set_target(jmp, body.entry)
        return jmp, body


def compile_program(text: str, memory: Optional[Memory] = None) -> CompiledProgram:
    """Lex and parse ``text`` in a fresh session."""
    ctx = ParserContext(memory)
    parser = Parser(TokenStream.from_text(text), ctx)
    return parser.parse_program()


if __name__ == '__main__':
    import sys
    data = sys.stdin.read()
    program = compile_program(data)
    sys.stdout.write(program.dump() + '\n')
    sys.stdout.write(f"symbols: {program.symbol_table()}\n")
    sys.stdout.write(f"inputs: {program.inputs}\n")
