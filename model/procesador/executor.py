"""
Reference execution engine: walks the instruction graph against the memory
image, consuming the program's input list and collecting output values.
"""
from __future__ import annotations

from typing import List, Optional

import constants
from model.compilador.ir import ArithOp, Kind, RelOp


class InputNeeded(Exception):
    """Raised when an IN instruction runs and the input list is exhausted."""
    pass


def _divide(a: int, b: int) -> int:
    # integer division truncating toward zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _wrap(value: int) -> int:
    """Two's complement wrap-around to one signed memory word."""
    bits = constants.WORDS_SIZE_BITS
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _arith(op: ArithOp, a: int, b: int) -> int:
    if op is ArithOp.PLUS:
        return _wrap(a + b)
    if op is ArithOp.MINUS:
        return _wrap(a - b)
    if op is ArithOp.MULT:
        return _wrap(a * b)
    if op is ArithOp.DIV:
        return _wrap(_divide(a, b))
    raise ValueError(f"Unknown arithmetic operator: {op}")


def _compare(relop: RelOp, a: int, b: int) -> bool:
    if relop is RelOp.GREATER:
        return a > b
    if relop is RelOp.LESS:
        return a < b
    if relop is RelOp.NOTEQUAL:
        return a != b
    raise ValueError(f"Unknown relational operator: {relop}")


class Executor:

    def __init__(self, program, max_steps: Optional[int] = None):
        self.arena = program.arena
        self.memory = program.memory
        self.inputs: List[int] = list(program.inputs)
        self.input_index = 0
        self.output: List[int] = []
        self.pc: Optional[int] = program.root
        self.steps = 0
        self.max_steps = constants.MAX_STEPS if max_steps is None else max_steps

    @property
    def halted(self) -> bool:
        return self.pc is None

    def step(self) -> Optional[int]:
        """Execute one node; returns its handle, or None if already halted."""
        if self.pc is None:
            return None
        if self.steps >= self.max_steps:
            raise RuntimeError(f"Step limit of {self.max_steps} exceeded")
        handle = self.pc
        node = self.arena[handle]
        mem = self.memory
        nxt = node.next

        if node.kind is Kind.ASSIGN:
            value = mem.read(node.op1)
            if node.op is not ArithOp.NONE:
                value = _arith(node.op, value, mem.read(node.op2))
            mem.write(node.dest, value)
        elif node.kind is Kind.CJMP:
            if not _compare(node.relop, mem.read(node.op1), mem.read(node.op2)):
                nxt = node.target
        elif node.kind is Kind.JMP:
            nxt = node.target
        elif node.kind is Kind.IN:
            if self.input_index >= len(self.inputs):
                raise InputNeeded(f"No input left for IN at node #{handle}")
            mem.write(node.dest, self.inputs[self.input_index])
            self.input_index += 1
        elif node.kind is Kind.OUT:
            self.output.append(mem.read(node.op1))

        self.pc = nxt
        self.steps += 1
        return handle

    def run(self) -> List[int]:
        while self.pc is not None:
            self.step()
        return self.output
