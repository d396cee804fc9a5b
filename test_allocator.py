"""Test symbol/constant allocation and the memory image"""
import pytest

from model.compilador import compile_program
from model.compilador.allocator import SymbolAllocator
from model.procesador.memory import Memory


def test_identifier_resolution_is_idempotent():
    alloc = SymbolAllocator(Memory(16))
    a = alloc.resolve_identifier('a')
    b = alloc.resolve_identifier('b')
    assert alloc.resolve_identifier('a') == a
    assert (a, b) == (0, 1)
    assert alloc.next_available == 2


def test_literals_share_the_counter():
    mem = Memory(16)
    alloc = SymbolAllocator(mem)
    x = alloc.resolve_identifier('x')
    five = alloc.resolve_literal(5)
    assert alloc.resolve_literal(5) == five
    assert five == x + 1
    assert mem.read(x) == 0
    assert mem.read(five) == 5


def test_reset_clears_tables_and_memory():
    mem = Memory(8)
    alloc = SymbolAllocator(mem)
    alloc.resolve_literal(9)
    alloc.reset()
    assert alloc.next_available == 0
    assert alloc.symbol_table() == {'variables': {}, 'constants': {}}
    assert mem.read(0) == 0


def test_memory_out_of_range():
    alloc = SymbolAllocator(Memory(1))
    alloc.resolve_identifier('a')
    with pytest.raises(ValueError):
        alloc.resolve_identifier('b')


def test_first_occurrence_order_across_program():
    program = compile_program("""
        a, b, a;
        {
            c = 3 + b;
            output a;
            d = 3;
        }
    """)
    table = program.symbol_table()
    assert table['variables'] == {'a': 0, 'b': 1, 'c': 2, 'd': 4}
    assert table['constants'] == {3: 3}
    assert program.memory.snapshot(5) == [0, 0, 0, 3, 0]


def test_names_for_dumps():
    alloc = SymbolAllocator(Memory(8))
    alloc.resolve_identifier('n')
    alloc.resolve_literal(42)
    assert alloc.names() == {0: 'n', 1: '42'}
