"""
linebasic - A line-oriented interpreter for a minimal BASIC dialect.

This package provides the language pipeline: tokenizing source lines,
recursive-descent parsing into an AST, label resolution, and a
fetch-execute loop that runs the parsed program.
"""

__version__ = "0.1.0"
__author__ = "linebasic Project"
