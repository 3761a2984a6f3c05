"""CLI entry point for the lambdaimp interpreter.

Usage:
    python -m lambdaimp [-v|-vv|-vvv] <program_json>
    python -m lambdaimp --analyze <program_json>
    python -m lambdaimp [-v...] --check <program_json>
    python -m lambdaimp --emit-ast <sample_name>

Options:
  -v            Increase debug verbosity (can be repeated)
  --analyze     Only run the static analyzer and print its report
  --check       Print the analyzer report, then run the program
  --emit-ast    Print one of the bundled sample programs as AST JSON

Programs are read from AST JSON files (see lambdaimp.ast_json). Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .analyzer import analyze_program
from .ast_json import load_program, dump_program
from .interpreter import run_program
from .samples import SAMPLES


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="lambdaimp interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--analyze', action='store_true', help='only run the static analyzer')
    group.add_argument('--check', action='store_true', help='run the static analyzer before executing')
    group.add_argument('--emit-ast', metavar='SAMPLE', choices=sorted(SAMPLES), help='print a bundled sample program as AST JSON')
    parser.add_argument('program', nargs='?', help='program file (AST JSON) to execute')
    args = parser.parse_args(argv)

    if args.emit_ast:
        print(dump_program(SAMPLES[args.emit_ast]()))
        return

    if not args.program:
        parser.error('missing program file; or use --emit-ast')
    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    try:
        program = load_program(program_file)
    except (ValueError, TypeError, KeyError) as e:
        print(f"Error: cannot load {program_file}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.analyze or args.check:
        analyze_program(program)
        if args.analyze:
            return

    if run_program(program, debug_level=args.v) is None:
        sys.exit(1)


if __name__ == '__main__':
    main()
