"""Errors raised while a program runs."""

from typing import Optional


class InterpreterError(Exception):
    """Base exception for runtime errors.

    The fetch-execute loop records which statement was running via
    ``locate()`` before the error reaches the caller.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.index: Optional[int] = None
        self.kind: Optional[str] = None

    def locate(self, index: int, kind: str) -> 'InterpreterError':
        if self.index is None:
            self.index = index
            self.kind = kind
        return self

    def __str__(self):
        if self.index is None:
            return self.message
        return f"{self.message} (statement {self.index}, {self.kind})"


class UndefinedVariable(InterpreterError):
    """Variable read before it was assigned."""

    def __init__(self, name: str):
        super().__init__(f"Undefined variable {name}")
        self.name = name


class UndefinedLabel(InterpreterError):
    """GOTO to a label that no statement carries."""

    def __init__(self, label: str):
        super().__init__(f"Undefined label {label}")
        self.label = label


class UnknownFunction(InterpreterError):
    """Call to a function outside the builtin table."""

    def __init__(self, name: str):
        super().__init__(f"Unknown function {name}")
        self.name = name


class GraphicsNotInitialized(InterpreterError):
    """PLOT before a successful SCREEN 13."""

    def __init__(self):
        super().__init__("Graphics not initialized, use SCREEN 13 first")


class ProgramHasErrors(InterpreterError):
    """Attempt to run a program that failed to parse."""

    def __init__(self, errors):
        super().__init__(f"Program has {len(errors)} parse error(s)")
        self.errors = list(errors)
