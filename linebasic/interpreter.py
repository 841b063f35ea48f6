"""
Main BASIC interpreter.

Coordinates parsing and execution, and provides the command-line front end.
"""

import sys
from typing import Iterable, List, Optional, TextIO

from .parser import Parser, ParseError, Program
from .runtime import ExecutionContext, Executor, InterpreterError


class BasicInterpreter:
    """Main BASIC interpreter class."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.program: Optional[Program] = None

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[linebasic] {message}", file=sys.stderr)

    def get_errors(self) -> List[ParseError]:
        """Get the parse errors of the last parsed program."""
        if self.program is None:
            return []
        return list(self.program.errors)

    def parse_lines(self, lines: Iterable[str], filename: str = "<input>") -> Program:
        """Parse source lines into a Program and remember it."""
        self.program = Parser(lines, filename).parse()
        self.log(f"Parsed {filename}: {len(self.program.statements)} statements, "
                 f"{len(self.program.labels)} labels, {len(self.program.errors)} errors")
        return self.program

    def parse_string(self, source: str, filename: str = "<input>") -> Program:
        return self.parse_lines(source.splitlines(), filename)

    def parse_file(self, input_path: str) -> Program:
        self.log(f"Reading {input_path}...")
        with open(input_path, 'r', encoding='utf-8') as f:
            return self.parse_lines(f.read().splitlines(), str(input_path))

    def run(self, program: Optional[Program] = None, output: Optional[TextIO] = None,
            canvas=None) -> ExecutionContext:
        """
        Run a parsed program in a fresh execution context.

        Args:
            program: Program to run (defaults to the last parsed one)
            output: Text stream PRINT writes to (defaults to stdout)
            canvas: Drawing surface for SCREEN/PLOT (defaults to a RasterCanvas)

        Returns:
            The finished execution context

        Raises:
            ProgramHasErrors: if the program has parse errors
            InterpreterError: if a runtime error stops the program
        """
        if program is None:
            program = self.program
        if program is None:
            raise ValueError("No program to run")
        context = ExecutionContext(program, output if output is not None else sys.stdout, canvas)
        self.log(f"Running {len(program.statements)} statements...")
        Executor(log=self.log).run(context)
        self.log("Program finished")
        return context

    def run_file(self, input_path: str, canvas_path: Optional[str] = None) -> bool:
        """
        Parse and run a BASIC source file.

        Args:
            input_path: Path to the program
            canvas_path: Where to save the drawing surface as PGM, if one was used

        Returns:
            True if the program parsed and ran to completion, False otherwise
        """
        try:
            program = self.parse_file(input_path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: Unable to read file {input_path}: {e}", file=sys.stderr)
            return False

        if program.errors:
            for error in program.errors:
                print(error, file=sys.stderr)
            print("Interpretation failed.", file=sys.stderr)
            return False

        try:
            context = self.run(program)
        except InterpreterError as e:
            print(f"Runtime error: {e}", file=sys.stderr)
            return False

        if canvas_path is not None:
            if context.surface is None:
                self.log("No SCREEN was opened, canvas not saved")
            else:
                self.log(f"Writing {canvas_path}...")
                context.surface.save_pgm(canvas_path)
        return True


def main(argv: Optional[List[str]] = None):
    """Command-line interface for the interpreter."""
    import argparse

    parser = argparse.ArgumentParser(
        description='linebasic - Run a line-oriented BASIC program'
    )
    parser.add_argument('input', help='BASIC source file')
    parser.add_argument('--canvas', metavar='PATH',
                        help='Save the SCREEN 13 canvas as a PGM image after the run')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)

    interpreter = BasicInterpreter(verbose=args.verbose)
    success = interpreter.run_file(args.input, args.canvas)

    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
