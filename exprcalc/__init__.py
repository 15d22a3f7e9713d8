"""Arithmetic expression calculator: lexer, parser, evaluator and front ends."""

from .errors import CalculatorError, ConfigError, InputTooLongError, ParseError
from .pipeline import Empty, Failure, Result, Success, evaluate, format_result, parse
from .registry import AngleMode

__all__ = [
    "AngleMode",
    "CalculatorError",
    "ConfigError",
    "Empty",
    "Failure",
    "InputTooLongError",
    "ParseError",
    "Result",
    "Success",
    "evaluate",
    "format_result",
    "parse",
]

__version__ = "1.0.0"
