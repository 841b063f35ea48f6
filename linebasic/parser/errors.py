"""Parse-time diagnostics."""


class ParseError(Exception):
    """A problem found while building a program.

    Parse errors are collected rather than raised to the caller, so that
    every line of a program can be checked in one pass.
    """

    def __init__(self, message: str, line_text: str = "", line_index: int = 0):
        super().__init__(message)
        self.message = message
        self.line_text = line_text
        self.line_index = line_index

    def __str__(self):
        return f"{self.line_text}\nError [Line {self.line_index}]: {self.message}"

    def __repr__(self):
        return f"ParseError(line {self.line_index}: {self.message!r})"
