"""
Per-run execution state.

A fresh ExecutionContext is created for every run, so nothing a run does to
variables, the program counter or loop progress can leak into the next run
of the same Program.
"""

from dataclasses import dataclass
from typing import Dict, Optional, TextIO

from ..parser.ast_nodes import Program
from .errors import UndefinedVariable
from .graphics import RasterCanvas


@dataclass
class LoopState:
    """Progress of one FOR loop, keyed by the FOR statement's index."""
    value: float


class ExecutionContext:
    """Mutable runtime state for one run of a Program."""

    def __init__(self, program: Program, output: TextIO, canvas=None):
        self.program = program
        self.output = output
        self.canvas = canvas if canvas is not None else RasterCanvas()
        self.surface = None  # Set by SCREEN 13
        self.variables: Dict[str, float] = {}
        self.counter = 0
        self.loops: Dict[int, LoopState] = {}

    def lookup(self, name: str) -> float:
        try:
            return self.variables[name]
        except KeyError:
            raise UndefinedVariable(name) from None

    def assign(self, name: str, value: float):
        self.variables[name] = value

    def unbind(self, name: str):
        self.variables.pop(name, None)

    def resolve_label(self, label: str) -> Optional[int]:
        return self.program.labels.get(label)

    def write_line(self, text: str):
        self.output.write(text + "\n")
