"""
Test helpers for the BASIC interpreter tests.

This module provides:
- parse(): parse program text and return the Program
- run_source(): parse and run program text, returning what PRINT wrote
- run_program(): run a parsed Program, returning (output, context)
"""

import io
from typing import Tuple

import pytest

from linebasic.parser import Program, parse_source
from linebasic.runtime import ExecutionContext, Executor, RasterCanvas


def parse(source: str) -> Program:
    """Parse program text."""
    return parse_source(source)


def run_program(program: Program, canvas=None) -> Tuple[str, ExecutionContext]:
    """Run a parsed program with a captured output stream."""
    output = io.StringIO()
    context = ExecutionContext(program, output, canvas)
    Executor().run(context)
    return output.getvalue(), context


def run_source(source: str) -> str:
    """Parse and run program text, returning its output."""
    program = parse(source)
    assert program.errors == (), [str(e) for e in program.errors]
    return run_program(program)[0]


@pytest.fixture
def canvas():
    return RasterCanvas()
