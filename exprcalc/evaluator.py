# evaluator.py
"""Tree evaluator.

Evaluation never fails for numeric reasons. All arithmetic is done on
numpy.float64 with floating point errors ignored, so division by zero,
domain errors and overflow show up as inf or nan in the result, exactly as
the C math library would produce them.
"""

from typing import List, Tuple

import numpy as np

from . import registry
from .nodes import Function, Node, Number, Operator, OpType
from .registry import AngleMode

_BINARY = {
    OpType.PLUS: np.add,
    OpType.MINUS: np.subtract,
    OpType.TIMES: np.multiply,
    OpType.DIV: np.divide,
    OpType.POW: np.power,
}


def evaluate_tree(node: Node, mode: AngleMode = AngleMode.RADIANS) -> float:
    """Evaluate ``node`` with trigonometric functions working in ``mode``."""
    with np.errstate(all='ignore'):
        return float(_eval(node, mode))


def _eval(root: Node, mode: AngleMode) -> np.float64:
    # Post-order walk with an explicit stack: operator chains build
    # left-leaning trees as deep as the chain is long.
    values: List[np.float64] = []
    pending: List[Tuple[Node, bool]] = [(root, False)]
    while pending:
        node, children_done = pending.pop()
        if isinstance(node, Number):
            values.append(np.float64(node.value))
        elif isinstance(node, Operator):
            if not children_done:
                pending.append((node, True))
                pending.append((node.right, False))
                if node.op is not OpType.UMINUS:
                    pending.append((node.left, False))
            elif node.op is OpType.UMINUS:
                values.append(np.negative(values.pop()))
            else:
                right = values.pop()
                left = values.pop()
                values.append(_BINARY[node.op](left, right))
        elif isinstance(node, Function):
            if not children_done:
                pending.append((node, True))
                pending.append((node.arg, False))
            else:
                values.append(registry.apply(node.func, values.pop(), mode))
        else:
            raise TypeError(f"Unsupported AST node: {type(node).__name__}")
    return values.pop()
