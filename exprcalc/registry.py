# registry.py
"""Named constants and unary functions known to the parser.

Both tables are read-only. Functions are identified by the closed ``Func``
enumeration; ``apply`` dispatches a member to its numpy implementation, with
the degree/radian conversion decided by the mode passed in.
"""

import enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

import numpy as np


class AngleMode(str, enum.Enum):
    """Unit used by the trigonometric functions."""
    DEGREES = 'degrees'
    RADIANS = 'radians'


class Func(enum.Enum):
    SQRT = 'sqrt'
    LOG = 'log'
    EXP = 'exp'
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    ASIN = 'asin'
    ACOS = 'acos'
    ATAN = 'atan'
    LOG2 = 'log2'
    LOG10 = 'log10'
    ABS = 'abs'
    CBRT = 'cbrt'


CONSTANTS: Mapping[str, float] = MappingProxyType({
    'pi': float(np.pi),
})

FUNCTIONS: Mapping[str, Func] = MappingProxyType({
    'sqrt': Func.SQRT,
    'log': Func.LOG,
    'ln': Func.LOG,
    'exp': Func.EXP,
    'sin': Func.SIN,
    'cos': Func.COS,
    'tan': Func.TAN,
    'asin': Func.ASIN,
    'arcsin': Func.ASIN,
    'acos': Func.ACOS,
    'arccos': Func.ACOS,
    'atan': Func.ATAN,
    'arctan': Func.ATAN,
    'log2': Func.LOG2,
    'log10': Func.LOG10,
    'lg': Func.LOG10,
    'abs': Func.ABS,
    'cbrt': Func.CBRT,
})

# numpy ufuncs follow libm: domain errors give nan and overflow gives inf.
_IMPLEMENTATIONS: Dict[Func, Callable] = {
    Func.SQRT: np.sqrt,
    Func.LOG: np.log,
    Func.EXP: np.exp,
    Func.SIN: np.sin,
    Func.COS: np.cos,
    Func.TAN: np.tan,
    Func.ASIN: np.arcsin,
    Func.ACOS: np.arccos,
    Func.ATAN: np.arctan,
    Func.LOG2: np.log2,
    Func.LOG10: np.log10,
    Func.ABS: np.abs,
    Func.CBRT: np.cbrt,
}

# Argument is an angle.
_TRIG = frozenset({Func.SIN, Func.COS, Func.TAN})
# Result is an angle.
_INVERSE_TRIG = frozenset({Func.ASIN, Func.ACOS, Func.ATAN})


def find_constant(name: str) -> Optional[float]:
    """Return the value of constant ``name``, or None if there is none."""
    return CONSTANTS.get(name)


def find_function(name: str) -> Optional[Func]:
    """Return the function registered as ``name``, or None if there is none."""
    return FUNCTIONS.get(name)


def names() -> List[str]:
    """All identifiers the parser accepts, sorted."""
    return sorted(list(CONSTANTS) + list(FUNCTIONS))


def apply(func: Func, x: np.float64, mode: AngleMode) -> np.float64:
    """Apply ``func`` to ``x``, converting angles when ``mode`` is DEGREES.

    Callers are expected to run inside ``np.errstate(all='ignore')``; the
    evaluator does.
    """
    impl = _IMPLEMENTATIONS[func]
    if mode == AngleMode.DEGREES:
        if func in _TRIG:
            return impl(np.deg2rad(x))
        if func in _INVERSE_TRIG:
            return np.rad2deg(impl(x))
    return impl(x)
