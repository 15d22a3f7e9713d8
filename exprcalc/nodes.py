# nodes.py
"""AST node types produced by the parser and walked by the evaluator."""

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .registry import Func


class OpType(enum.Enum):
    PLUS = '+'
    MINUS = '-'
    UMINUS = 'neg'
    TIMES = '*'
    DIV = '/'
    POW = '^'


@dataclass
class Number:
    """Numeric literal, or a constant resolved at parse time."""
    value: float


@dataclass
class Operator:
    """Binary operator, or unary minus (which has no left child)."""
    op: OpType
    left: Optional['Node']
    right: 'Node'


@dataclass
class Function:
    """Registered unary function applied to one argument."""
    func: Func
    arg: 'Node'


Node = Union[Number, Operator, Function]
