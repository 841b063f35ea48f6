"""
Executor - runs a parsed Program against an ExecutionContext.

The loop fetches the statement under the program counter, advances the
counter, then executes the statement, which may move the counter again.
The program stops when the counter leaves the statement range. There is
no iteration limit, so a GOTO loop runs until the process is stopped.
"""

import math
from typing import Callable, Optional

from ..parser.ast_nodes import *
from .builtins import apply_operator, format_value, lookup_function
from .context import ExecutionContext, LoopState
from .errors import GraphicsNotInitialized, InterpreterError, ProgramHasErrors, UndefinedLabel
from .graphics import MODE_13, MODE_13_HEIGHT, MODE_13_SCALE, MODE_13_WIDTH, color_intensity


class Executor:
    """Evaluates expressions and executes statements."""

    def __init__(self, log: Optional[Callable[[str], None]] = None):
        self.log = log or (lambda message: None)

    def run(self, context: ExecutionContext) -> ExecutionContext:
        """Run until the program counter leaves the program."""
        program = context.program
        if program.errors:
            raise ProgramHasErrors(program.errors)

        statements = program.statements
        while 0 <= context.counter < len(statements):
            index = context.counter
            statement = statements[index]
            context.counter += 1
            try:
                self.execute(statement, index, context)
            except InterpreterError as e:
                e.locate(index, statement.node_type.name)
                raise

        return context

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, node: Statement, index: int, context: ExecutionContext):
        """Execute one statement. ``index`` is its position in the program."""
        if isinstance(node, LetNode):
            context.assign(node.name, self.evaluate(node.expr, context))
        elif isinstance(node, PrintNode):
            for expr in node.exprs:
                context.write_line(format_value(self.evaluate(expr, context)))
        elif isinstance(node, GotoNode):
            context.counter = self.resolve_target(node, context)
        elif isinstance(node, ForNode):
            self.execute_for(node, index, context)
        elif isinstance(node, IfNode):
            # Only exactly 1.0 is true
            if self.evaluate(node.condition, context) == 1.0:
                self.execute(node.then, index, context)
        elif isinstance(node, ScreenNode):
            self.execute_screen(node, context)
        elif isinstance(node, PlotNode):
            self.execute_plot(node, context)
        elif isinstance(node, EndNode):
            context.counter = len(context.program.statements)
        elif isinstance(node, NoOpNode):
            pass
        else:
            raise TypeError(f"Unknown statement node {node!r}")

    def resolve_target(self, node: GotoNode, context: ExecutionContext) -> int:
        if node.index is not None:
            return node.index
        target = context.resolve_label(node.label)
        if target is None:
            raise UndefinedLabel(node.label)
        return target

    def execute_for(self, node: ForNode, index: int, context: ExecutionContext):
        """First visit starts the loop; every later visit comes from NEXT.

        The end bound is evaluated on each later visit, so the body can
        change the number of iterations.
        """
        state = context.loops.get(index)
        if state is None:
            start = self.evaluate(node.start, context)
            context.loops[index] = LoopState(start)
            context.assign(node.var_name, start)
            return

        state.value += 1
        context.assign(node.var_name, state.value)
        if state.value > self.evaluate(node.end, context):
            context.unbind(node.var_name)
            del context.loops[index]
            context.counter = node.exit_index

    def execute_screen(self, node: ScreenNode, context: ExecutionContext):
        mode = self.evaluate(node.mode, context)
        if mode != MODE_13:
            return
        context.canvas.initialize(MODE_13_WIDTH, MODE_13_HEIGHT, MODE_13_SCALE)
        context.surface = context.canvas
        self.log(f"SCREEN 13: {MODE_13_WIDTH}x{MODE_13_HEIGHT} at {MODE_13_SCALE}x")

    def execute_plot(self, node: PlotNode, context: ExecutionContext):
        if context.surface is None:
            raise GraphicsNotInitialized()
        x = self.evaluate(node.x, context)
        y = self.evaluate(node.y, context)
        intensity = color_intensity(self.evaluate(node.color, context))
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        context.surface.set_pixel(int(x), int(y), intensity)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def evaluate(self, node: Expression, context: ExecutionContext) -> float:
        if isinstance(node, LiteralNode):
            return node.value
        elif isinstance(node, VariableNode):
            return context.lookup(node.name)
        elif isinstance(node, BinaryNode):
            # Chains nest on the left and can be arbitrarily long, so walk
            # the left spine with a loop
            spine = []
            while isinstance(node, BinaryNode):
                spine.append(node)
                node = node.left
            value = self.evaluate(node, context)
            for binary in reversed(spine):
                value = apply_operator(binary.op, value, self.evaluate(binary.right, context))
            return value
        elif isinstance(node, CallNode):
            func = lookup_function(node.func_name)
            return func(self.evaluate(node.arg, context))
        raise TypeError(f"Unknown expression node {node!r}")
