# pipeline.py
"""Text in, number out.

``evaluate`` runs the lexer, the parser and the evaluator and reports one of
three outcomes:

- Success(value): the expression parsed and was evaluated. ``value`` may be
  inf or nan.
- Empty(): there was no expression (blank input).
- Failure(error): the input did not parse; ``error`` is a ParseError.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .errors import InputTooLongError, ParseError
from .evaluator import evaluate_tree
from .lexer import Lexer
from .nodes import Node
from .parser import Parser
from .registry import AngleMode

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 1024


@dataclass(frozen=True)
class Success:
    value: float


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Failure:
    error: ParseError

    @property
    def message(self) -> str:
        return str(self.error)


Result = Union[Success, Empty, Failure]


def parse(text: str, max_length: Optional[int] = DEFAULT_MAX_LENGTH,
          strict: bool = False) -> Optional[Node]:
    """Parse ``text`` into a tree, or None if it holds no expression.

    Raises ParseError (InputTooLongError for input over ``max_length``).
    """
    if max_length is not None and len(text) > max_length:
        raise InputTooLongError(max_length)
    tokens = Lexer(text).tokenize()
    return Parser(tokens, strict=strict).parse()


def evaluate(text: str, angle_mode: AngleMode = AngleMode.RADIANS, *,
             max_length: Optional[int] = DEFAULT_MAX_LENGTH,
             strict: bool = False) -> Result:
    """Evaluate ``text`` with trigonometric functions in ``angle_mode``."""
    mode = AngleMode(angle_mode)
    try:
        tree = parse(text, max_length=max_length, strict=strict)
    except ParseError as e:
        logger.debug(f"Parse of {text!r} failed: {e}")
        return Failure(e)
    if tree is None:
        return Empty()
    return Success(evaluate_tree(tree, mode))


def format_result(value: float, precision: int = 16) -> str:
    """Render ``value`` like printf's %.<precision>g.

    The decimal point is always '.', whatever the locale.
    """
    return f"{value:.{precision}g}"
