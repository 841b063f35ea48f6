"""
BASIC Parser - Builds the Abstract Syntax Tree from source lines.

Each source line holds one statement, optionally preceded by a numeric label
(``10 PRINT X``) or a named label (``loop: PRINT X``). Expressions have no
operator precedence: binary chains are folded strictly left to right and
only parentheses change the grouping.
"""

import re
from dataclasses import replace
from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple

from ..lexer import Lexer
from .ast_nodes import *
from .errors import ParseError


# Binary operators, all of equal precedence
OPERATORS = frozenset(['+', '-', '*', '/', '^', '=', '<', '>', '<=', '>='])

NUMBER_RE = re.compile(r'^[+-]?(NaN|Infinity|(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)$')

# Tokens that can never be a variable name
PUNCTUATION = frozenset(['(', ')', ','])


def is_name(token: str) -> bool:
    """Anything that is not a number, an operator or punctuation names a variable."""
    return not (token in OPERATORS or token in PUNCTUATION or NUMBER_RE.match(token))


class Parser:
    """Parses BASIC source lines into a Program.

    Errors never abort the parse. They are collected in ``errors`` and copied
    onto the returned Program; a line that cannot be parsed at all is replaced
    by a NoOp so the statement indices of later lines stay put.
    """

    def __init__(self, lines: Iterable[str], filename: str = "<input>"):
        self.lines = list(lines)
        self.filename = filename
        self.lexer = Lexer(filename)
        self.errors: List[ParseError] = []

        # Per-line state
        self.tokens: List[str] = []
        self.pos = 0
        self.line_text = ""
        self.line_index = 0

        # Per-parse state
        self.statements: List[Statement] = []
        self._open_loops: Optional[List[Tuple[int, str, int]]] = None

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def make_error(self, message: str) -> ParseError:
        return ParseError(message, self.line_text, self.line_index)

    def error(self, message: str):
        """Record an error and keep going."""
        self.errors.append(self.make_error(message))

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at token at current position + offset."""
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def advance(self, expected: str = "a token") -> str:
        """Consume and return the current token.

        Running out of tokens abandons the rest of the line.
        """
        token = self.peek()
        if token is None:
            raise self.make_error(f"Expecting {expected} but got end of line")
        self.pos += 1
        return token

    def expect(self, expected: str) -> str:
        """Consume a required token, recording an error if it is different.

        Keywords match case-insensitively, symbols exactly.
        """
        token = self.advance(expected)
        if token.upper() != expected.upper():
            self.error(f"Expecting {expected} but got {token}")
        return token

    def expect_name(self, what: str = "variable name") -> str:
        token = self.advance(what)
        if not is_name(token):
            self.error(f"Invalid {what} {token}")
        return token

    # ------------------------------------------------------------------
    # Program
    # ------------------------------------------------------------------

    def parse(self) -> Program:
        """Parse every line and return the resulting Program."""
        self.statements = []
        self._open_loops = []
        labels = {}
        source_lines = []
        counter = 0

        for raw_line in self.lines:
            tokens = self.lexer.tokenize(raw_line)
            if not tokens:
                continue

            self.tokens = tokens
            self.line_text = raw_line.strip()
            self.line_index = counter

            if tokens[0][0].isdigit():
                label = tokens[0]
                self.pos = 1
            elif tokens[0].endswith(':'):
                label = tokens[0][:-1]
                self.pos = 1
            else:
                label = str(counter)
                self.pos = 0

            self.statements.append(self.parse_line())
            source_lines.append(self.line_text)
            labels[label] = len(self.statements) - 1
            counter += 1

        for for_index, line_text, line_index in self._open_loops:
            self.errors.append(ParseError("FOR without NEXT", line_text, line_index))
        self._open_loops = None

        return Program(
            statements=tuple(self.statements),
            labels=MappingProxyType(labels),
            source_lines=tuple(source_lines),
            errors=tuple(self.errors),
        )

    def parse_line(self) -> Statement:
        """Parse the statement that follows the label, if any."""
        if self.peek() is None:
            # Label on its own
            return NoOpNode()

        try:
            statement = self.parse_statement(self.advance())
        except ParseError as e:
            self.errors.append(e)
            return NoOpNode()
        except RecursionError:
            self.error("Expression nested too deeply")
            return NoOpNode()

        if self.peek() is not None:
            self.error(f"Unexpected {self.peek()} after end of statement")
        return statement

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_statement(self, verb: str) -> Statement:
        """Dispatch on the (case-insensitive) verb."""
        name = verb.upper()

        if name == 'LET':
            return self.parse_let()
        elif name == 'PRINT':
            return self.parse_print()
        elif name == 'GOTO':
            return self.parse_goto()
        elif name == 'FOR':
            return self.parse_for()
        elif name == 'NEXT':
            return self.parse_next()
        elif name == 'IF':
            return self.parse_if()
        elif name == 'SCREEN':
            return ScreenNode(self.parse_expression())
        elif name == 'PLOT':
            return self.parse_plot()
        elif name == 'END':
            return EndNode()
        elif name == 'REM':
            self.pos = len(self.tokens)
            return NoOpNode()

        raise self.make_error(f"Unknown statement {verb}")

    def parse_let(self) -> LetNode:
        name = self.expect_name()
        self.expect('=')
        return LetNode(name, self.parse_expression())

    def parse_print(self) -> PrintNode:
        exprs = [self.parse_expression()]
        while self.peek() == ',':
            self.advance()
            exprs.append(self.parse_expression())
        return PrintNode(tuple(exprs))

    def parse_goto(self) -> GotoNode:
        return GotoNode(label=self.advance("label"))

    def parse_for(self) -> ForNode:
        var_name = self.expect_name()
        self.expect('=')
        start = self.parse_expression()
        self.expect('TO')
        end = self.parse_expression()
        self._open_loops.append((len(self.statements), self.line_text, self.line_index))
        return ForNode(var_name, start, end)

    def parse_next(self) -> Statement:
        """NEXT [var] compiles to a jump back to its FOR."""
        var_name = self.expect_name() if self.peek() is not None else None

        if not self._open_loops:
            self.error("NEXT without FOR")
            return NoOpNode()

        for_index = self._open_loops.pop()[0]
        for_node = self._find_for(self.statements[for_index])
        if var_name is not None and for_node.var_name.upper() != var_name.upper():
            self.error(f"Invalid variable for the for loop, Expecting {for_node.var_name}, "
                       f"found {var_name}")

        # NEXT will be appended at len(statements); the loop exits just past it
        exit_index = len(self.statements) + 1
        self.statements[for_index] = self._with_exit(self.statements[for_index], exit_index)
        return GotoNode(index=for_index)

    def parse_if(self) -> IfNode:
        condition = self.parse_expression()
        self.expect('THEN')
        verb = self.advance("statement")
        if verb[0].isdigit():
            # IF ... THEN 100 is shorthand for THEN GOTO 100
            return IfNode(condition, GotoNode(label=verb))
        return IfNode(condition, self.parse_statement(verb))

    def parse_plot(self) -> PlotNode:
        x = self.parse_expression()
        self.expect(',')
        y = self.parse_expression()
        self.expect(',')
        color = self.parse_expression()
        return PlotNode(x, y, color)

    def _find_for(self, node: Statement) -> ForNode:
        """Locate the FOR statement, which may sit behind IF ... THEN."""
        while isinstance(node, IfNode):
            node = node.then
        return node

    def _with_exit(self, node: Statement, exit_index: int) -> Statement:
        if isinstance(node, IfNode):
            return replace(node, then=self._with_exit(node.then, exit_index))
        return replace(node, exit_index=exit_index)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> Expression:
        """atom (op atom)*, folded to the left."""
        result = self.parse_atom()
        while self.peek() in OPERATORS:
            op = self.advance()
            result = BinaryNode(op, result, self.parse_atom())
        return result

    def parse_atom(self) -> Expression:
        """Literal, parenthesized expression, function call or variable."""
        token = self.advance("expression")

        if NUMBER_RE.match(token):
            return LiteralNode(float(token))

        if token == '(':
            expr = self.parse_expression()
            self.expect(')')
            return expr

        if not is_name(token):
            raise self.make_error(f"Expecting expression but got {token}")

        if self.peek() == '(':
            self.advance()
            arg = self.parse_expression()
            self.expect(')')
            return CallNode(token.upper(), arg)

        return VariableNode(token)


def parse_lines(lines: Iterable[str], filename: str = "<input>") -> Program:
    """Parse an iterable of source lines."""
    return Parser(lines, filename).parse()


def parse_source(source: str, filename: str = "<input>") -> Program:
    """Parse program text."""
    return Parser(source.splitlines(), filename).parse()
