"""
Storage allocation for program symbols and literal constants.
"""
from __future__ import annotations

from typing import Dict

from model.procesador.memory import Memory


class SymbolAllocator:
    """Deduplicating name -> location and literal -> location tables.

    Both tables draw from one counter, so a location is never shared
    between a variable and a constant. Allocating a cell also initializes
    it in the memory image: 0 for a variable, the value for a constant.
    """

    def __init__(self, memory: Memory):
        self.memory = memory
        self.next_available = 0
        self.var_map: Dict[str, int] = {}
        self.const_map: Dict[int, int] = {}

    def reset(self):
        self.next_available = 0
        self.var_map.clear()
        self.const_map.clear()
        self.memory.set_up()

    def _allocate(self, initial: int) -> int:
        loc = self.next_available
        self.memory.write(loc, initial)
        self.next_available += 1
        return loc

    def resolve_identifier(self, name: str) -> int:
        if name in self.var_map:
            return self.var_map[name]
        loc = self._allocate(0)
        self.var_map[name] = loc
        return loc

    def resolve_literal(self, value: int) -> int:
        if value in self.const_map:
            return self.const_map[value]
        loc = self._allocate(value)
        self.const_map[value] = loc
        return loc

    def names(self) -> Dict[int, str]:
        """location -> display name, for IR dumps."""
        out = {loc: str(value) for value, loc in self.const_map.items()}
        out.update({loc: name for name, loc in self.var_map.items()})
        return out

    def symbol_table(self) -> dict:
        return {
            'variables': dict(self.var_map),
            'constants': dict(self.const_map),
        }
