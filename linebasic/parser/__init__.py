"""BASIC Parser - Builds Abstract Syntax Tree from source lines."""

from .parser import Parser, parse_lines, parse_source
from .errors import ParseError
from .ast_nodes import *

__all__ = ['Parser', 'ParseError', 'parse_lines', 'parse_source']
