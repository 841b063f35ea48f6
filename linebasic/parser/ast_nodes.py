"""
Abstract Syntax Tree node definitions for BASIC.

Expressions and statements are closed sets of frozen dataclasses. Nodes are
never mutated once the parser has produced them, which lets one Program be
run any number of times.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import ClassVar, Mapping, Optional, Tuple, Union

from .errors import ParseError


class NodeType(Enum):
    """AST node types."""
    # Expressions
    LITERAL = auto()
    VARIABLE = auto()
    BINARY = auto()
    CALL = auto()

    # Statements
    LET = auto()
    PRINT = auto()
    GOTO = auto()
    FOR = auto()
    IF = auto()
    SCREEN = auto()
    PLOT = auto()
    END = auto()
    NOOP = auto()       # REM, label-only lines, placeholders for bad lines


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LiteralNode:
    """Numeric literal."""
    value: float
    node_type: ClassVar[NodeType] = NodeType.LITERAL

    def __repr__(self):
        return f"Literal({self.value})"


@dataclass(frozen=True)
class VariableNode:
    """Variable reference."""
    name: str
    node_type: ClassVar[NodeType] = NodeType.VARIABLE

    def __repr__(self):
        return f"Variable({self.name})"


@dataclass(frozen=True)
class BinaryNode:
    """Binary operation. Chains always nest on the left."""
    op: str
    left: 'Expression'
    right: 'Expression'
    node_type: ClassVar[NodeType] = NodeType.BINARY

    def __repr__(self):
        return f"Binary({self.left!r} {self.op} {self.right!r})"


@dataclass(frozen=True)
class CallNode:
    """Builtin function call with a single argument."""
    func_name: str
    arg: 'Expression'
    node_type: ClassVar[NodeType] = NodeType.CALL

    def __repr__(self):
        return f"Call({self.func_name}({self.arg!r}))"


Expression = Union[LiteralNode, VariableNode, BinaryNode, CallNode]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LetNode:
    """LET name = expr"""
    name: str
    expr: Expression
    node_type: ClassVar[NodeType] = NodeType.LET


@dataclass(frozen=True)
class PrintNode:
    """PRINT expr [, expr ...]"""
    exprs: Tuple[Expression, ...]
    node_type: ClassVar[NodeType] = NodeType.PRINT


@dataclass(frozen=True)
class GotoNode:
    """Jump to a label (resolved at run time) or a fixed statement index.

    Exactly one of ``label`` and ``index`` is set. ``index`` is only used for
    the loop-back jump that NEXT compiles to.
    """
    label: Optional[str] = None
    index: Optional[int] = None
    node_type: ClassVar[NodeType] = NodeType.GOTO

    def __repr__(self):
        if self.index is not None:
            return f"Goto(#{self.index})"
        return f"Goto({self.label})"


@dataclass(frozen=True)
class ForNode:
    """FOR var = start TO end

    exit_index is filled in when the matching NEXT is parsed.
    """
    var_name: str
    start: Expression
    end: Expression
    exit_index: Optional[int] = None
    node_type: ClassVar[NodeType] = NodeType.FOR


@dataclass(frozen=True)
class IfNode:
    """IF condition THEN statement"""
    condition: Expression
    then: 'Statement'
    node_type: ClassVar[NodeType] = NodeType.IF


@dataclass(frozen=True)
class ScreenNode:
    """SCREEN mode"""
    mode: Expression
    node_type: ClassVar[NodeType] = NodeType.SCREEN


@dataclass(frozen=True)
class PlotNode:
    """PLOT x , y , color"""
    x: Expression
    y: Expression
    color: Expression
    node_type: ClassVar[NodeType] = NodeType.PLOT


@dataclass(frozen=True)
class EndNode:
    """END - stop the program."""
    node_type: ClassVar[NodeType] = NodeType.END


@dataclass(frozen=True)
class NoOpNode:
    """Statement that does nothing."""
    node_type: ClassVar[NodeType] = NodeType.NOOP


Statement = Union[LetNode, PrintNode, GotoNode, ForNode, IfNode,
                  ScreenNode, PlotNode, EndNode, NoOpNode]


@dataclass(frozen=True)
class Program:
    """Parsed program: statements in execution order plus the label table."""
    statements: Tuple[Statement, ...] = ()
    labels: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    source_lines: Tuple[str, ...] = ()  # Source text of each statement
    errors: Tuple[ParseError, ...] = ()

    def __len__(self):
        return len(self.statements)

    @property
    def ok(self) -> bool:
        """True when the program parsed without errors."""
        return not self.errors

    def __repr__(self):
        return (f"Program({len(self.statements)} statements, "
                f"{len(self.labels)} labels, {len(self.errors)} errors)")
