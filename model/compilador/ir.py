"""
Instruction graph produced by the parser.

Nodes live in an ``InstructionArena`` and are addressed by integer handles
(their index in the arena). ``next`` and ``target`` hold handles or None, so
loop back-edges are just handle values pointing at earlier nodes.

For CJMP nodes ``next`` is taken when the condition holds and ``target``
when it does not.
"""
from __future__ import annotations

from collections import deque, namedtuple
from enum import Enum
from typing import Dict, Iterator, List, Optional


class Kind(Enum):
    ASSIGN = 'ASSIGN'
    CJMP = 'CJMP'
    JMP = 'JMP'
    NOOP = 'NOOP'
    IN = 'IN'
    OUT = 'OUT'


class ArithOp(Enum):
    NONE = 'NONE'
    PLUS = '+'
    MINUS = '-'
    MULT = '*'
    DIV = '/'


class RelOp(Enum):
    GREATER = '>'
    LESS = '<'
    NOTEQUAL = '!='


# entry/exit handles of a parsed statement (or statement list)
Fragment = namedtuple('Fragment', ['entry', 'exit'])


class InstructionNode:
    __slots__ = ('handle', 'kind', 'next', 'target', 'dest', 'op1', 'op', 'op2', 'relop')

    def __init__(self, handle: int, kind: Kind):
        self.handle = handle
        self.kind = kind
        self.next: Optional[int] = None
        self.target: Optional[int] = None
        # ASSIGN / IN use dest; OUT uses op1 as its source
        self.dest: Optional[int] = None
        self.op1: Optional[int] = None
        self.op: ArithOp = ArithOp.NONE
        self.op2: Optional[int] = None
        self.relop: Optional[RelOp] = None

    def successors(self) -> List[int]:
        out = []
        if self.next is not None:
            out.append(self.next)
        if self.target is not None and self.target != self.next:
            out.append(self.target)
        return out

    def __repr__(self):
        return f"<{self.kind.value} #{self.handle} next={self.next} target={self.target}>"


class InstructionArena:
    """Owns every node of one program."""

    def __init__(self):
        self.nodes: List[InstructionNode] = []

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, handle: int) -> InstructionNode:
        return self.nodes[handle]

    def __iter__(self) -> Iterator[InstructionNode]:
        return iter(self.nodes)

    def _new(self, kind: Kind) -> InstructionNode:
        node = InstructionNode(len(self.nodes), kind)
        self.nodes.append(node)
        return node

    def new_assign(self, dest: int, op1: int, op: ArithOp = ArithOp.NONE, op2: Optional[int] = None) -> int:
        node = self._new(Kind.ASSIGN)
        node.dest = dest
        node.op1 = op1
        node.op = op
        node.op2 = op2 if op is not ArithOp.NONE else None
        return node.handle

    def new_cjmp(self, op1: int, relop: RelOp, op2: int) -> int:
        node = self._new(Kind.CJMP)
        node.op1 = op1
        node.relop = relop
        node.op2 = op2
        return node.handle

    def new_jmp(self, target: Optional[int] = None) -> int:
        node = self._new(Kind.JMP)
        node.target = target
        return node.handle

    def new_noop(self) -> int:
        return self._new(Kind.NOOP).handle

    def new_in(self, dest: int) -> int:
        node = self._new(Kind.IN)
        node.dest = dest
        return node.handle

    def new_out(self, source: int) -> int:
        node = self._new(Kind.OUT)
        node.op1 = source
        return node.handle

    def link(self, handle: int, successor: Optional[int]):
        self.nodes[handle].next = successor

    def set_target(self, handle: int, target: Optional[int]):
        self.nodes[handle].target = target

    def reachable(self, root: int) -> List[int]:
        """Handles reachable from ``root`` in breadth-first order."""
        seen = {root}
        order = []
        queue = deque([root])
        while queue:
            h = queue.popleft()
            order.append(h)
            for s in self.nodes[h].successors():
                if s not in seen:
                    seen.add(s)
                    queue.append(s)
        return order

    def validate(self, root: int):
        """Check that every successor of a reachable node is a valid handle."""
        for h in self.reachable(root):
            node = self.nodes[h]
            for s in (node.next, node.target):
                if s is not None and not 0 <= s < len(self.nodes):
                    raise ValueError(f"Node #{h} points at missing node #{s}")
            if node.kind in (Kind.CJMP, Kind.JMP) and node.target is None:
                raise ValueError(f"{node.kind.value} node #{h} has no target")


def _operand(loc, names: Optional[Dict[int, str]]) -> str:
    if names and loc in names:
        return names[loc]
    return f"M[{loc}]"


def format_node(node: InstructionNode, names: Optional[Dict[int, str]] = None) -> str:
    """One-line rendering of a node, e.g. ``ASSIGN a = a + 1``."""
    k = node.kind
    if k is Kind.ASSIGN:
        rhs = _operand(node.op1, names)
        if node.op is not ArithOp.NONE:
            rhs = f"{rhs} {node.op.value} {_operand(node.op2, names)}"
        return f"ASSIGN {_operand(node.dest, names)} = {rhs}"
    if k is Kind.CJMP:
        return (f"CJMP {_operand(node.op1, names)} {node.relop.value} "
                f"{_operand(node.op2, names)} else #{node.target}")
    if k is Kind.JMP:
        return f"JMP #{node.target}"
    if k is Kind.IN:
        return f"IN {_operand(node.dest, names)}"
    if k is Kind.OUT:
        return f"OUT {_operand(node.op1, names)}"
    return "NOOP"


def dump(arena: InstructionArena, root: int, names: Optional[Dict[int, str]] = None) -> str:
    lines = []
    for h in sorted(arena.reachable(root)):
        node = arena[h]
        nxt = '-' if node.next is None else f"#{node.next}"
        lines.append(f"#{h:<4} {format_node(node, names):<36} -> {nxt}")
    return '\n'.join(lines)
