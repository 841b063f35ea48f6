"""BASIC runtime - execution context, builtins, graphics and the executor."""

from .context import ExecutionContext, LoopState
from .errors import (
    InterpreterError, UndefinedVariable, UndefinedLabel, UnknownFunction,
    GraphicsNotInitialized, ProgramHasErrors,
)
from .executor import Executor
from .graphics import RasterCanvas

__all__ = [
    'ExecutionContext', 'LoopState',
    'InterpreterError', 'UndefinedVariable', 'UndefinedLabel', 'UnknownFunction',
    'GraphicsNotInitialized', 'ProgramHasErrors',
    'Executor',
    'RasterCanvas',
]
