# errors.py
"""Exception hierarchy shared by the lexer, parser, pipeline and collaborators."""

from typing import Optional


class CalculatorError(Exception):
    """Base class for calculator errors."""
    pass


class ParseError(CalculatorError):
    """Raised for parsing errors, with the offset where the error was detected.

    ``position`` is the 0-based character offset of the offending token, or
    ``None`` when the parser ran out of tokens ("end of input").
    """

    def __init__(self, message: str, position: Optional[int] = None):
        self.message = message
        self.position = position
        super().__init__(self.render())

    def render(self) -> str:
        if self.position is None:
            return f"At end of input: {self.message}"
        # Offsets are reported 1-based to the user.
        return f"At position {self.position + 1}: {self.message}"


class InputTooLongError(ParseError):
    """Raised when the input exceeds the configured length bound."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Input longer than {limit} characters", limit)


class ConfigError(CalculatorError):
    """Raised for unreadable or invalid settings."""
    pass
