"""Command-line front: compile a program, run it and print its output.

Usage: ir-front [--dump] [--save-memory PATH] [--mode MODE] [FILE]
Reads FILE, or stdin when FILE is omitted.
"""
import argparse
import sys
from pathlib import Path

import constants
from controller.computer import Computer, Data
from model.procesador.executor import InputNeeded


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog='ir-front', description=__doc__.splitlines()[0])
    ap.add_argument('file', nargs='?', help='program source (default: stdin)')
    ap.add_argument('--dump', action='store_true', help='print the instruction graph instead of running')
    ap.add_argument('--save-memory', metavar='PATH',
                    help='write memory after the run (.csv or .xlsx)')
    ap.add_argument('--mode', default='decimal', choices=constants.VALID_MEMORY_MODES)
    return ap


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.file:
        source = Path(args.file).read_text(encoding='utf-8')
    else:
        source = sys.stdin.read()

    computer = Computer()
    try:
        program = computer.load_program(source)
    except SyntaxError:
        print("SYNTAX ERROR")
        return 1

    if args.dump:
        print(program.dump())
        return 0

    try:
        output = computer.execute_program()
    except (InputNeeded, ZeroDivisionError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    print(' '.join(str(v) for v in output))

    if args.save_memory:
        if args.save_memory.endswith('.xlsx'):
            Data.save_modified_memory(program, args.save_memory, args.mode)
        else:
            Data.save_memory_fast(program, args.save_memory, args.mode)
    return 0


if __name__ == '__main__':
    sys.exit(main())
