"""Operator and function table shared by the tokenizer, the converter and the runtime.

Every symbol that may label an interior tree node is a member of :class:`Operator`,
carrying its arity class. Evaluation functions are registered per member in
``UNARY_IMPLS`` / ``BINARY_IMPLS`` and operate on ``numpy.float64`` so that
IEEE-754 special values propagate instead of raising.
"""

import enum
import math
from typing import Callable, Optional

import numpy as np

from exprtree.utils import PrintableEnum


class Arity(PrintableEnum):
    UNARY = enum.auto()
    BINARY = enum.auto()
    BOTH = enum.auto()
    NOOP = enum.auto()


class Assoc(PrintableEnum):
    LEFT = enum.auto()
    RIGHT = enum.auto()


class Operator(PrintableEnum):
    ADD = ("+", Arity.BINARY)
    SUB = ("-", Arity.BOTH)
    MUL = ("*", Arity.BINARY)
    DIV = ("/", Arity.BINARY)
    POW = ("^", Arity.BINARY)
    NEG = ("neg", Arity.UNARY)
    SGN = ("sgn", Arity.UNARY)
    LN = ("ln", Arity.UNARY)
    LG = ("lg", Arity.UNARY)
    LOG = ("log", Arity.UNARY)
    SIN = ("sin", Arity.UNARY)
    COS = ("cos", Arity.UNARY)
    TAN = ("tan", Arity.UNARY)
    CSC = ("csc", Arity.UNARY)
    SEC = ("sec", Arity.UNARY)
    COT = ("cot", Arity.UNARY)

    def __init__(self, symbol: str, arity: Arity) -> None:
        self.symbol = symbol
        self.arity = arity

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Operator"]:
        return _BY_SYMBOL.get(symbol)


_BY_SYMBOL: dict[str, Operator] = {op.symbol: op for op in Operator}


def classify(symbol: str) -> Arity:
    op = Operator.from_symbol(symbol)
    return op.arity if op is not None else Arity.NOOP


OPERATOR_CHARS = "+-*/%^"

# precedence of a prefix minus: binds tighter than * and /, as tight as ^
UNARY_MINUS_PRECEDENCE = 4


def operator_precedence(symbol: str) -> int:
    if symbol == "^":
        return 4
    elif symbol in ("*", "/"):
        return 3
    elif symbol in ("+", "-"):
        return 2
    else:
        return 1


def operator_assoc(symbol: str, unary: bool = False) -> Assoc:
    if unary or symbol == "^":
        return Assoc.RIGHT
    return Assoc.LEFT


CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}


UnaryImpl = Callable[[np.float64], np.float64]
BinaryImpl = Callable[[np.float64, np.float64], np.float64]

UNARY_IMPLS: dict[Operator, UnaryImpl] = dict()


def register_unary(*ops: Operator):
    def decorator(fn: UnaryImpl) -> UnaryImpl:
        for op in ops:
            if op.arity not in (Arity.UNARY, Arity.BOTH):
                raise TypeError(f"{op} can not be applied to a single operand")
            UNARY_IMPLS[op] = fn
        return fn

    return decorator


@register_unary(Operator.SUB, Operator.NEG)
def neg_(x: np.float64) -> np.float64:
    return np.negative(x)


@register_unary(Operator.SGN)
def sgn_(x: np.float64) -> np.float64:
    # sign bit decides, so sgn(-0.0) is -1.0
    if np.isnan(x):
        return x
    return np.copysign(np.float64(1.0), x)


@register_unary(Operator.LN)
def ln_(x: np.float64) -> np.float64:
    return np.log(x)


@register_unary(Operator.LG)
def lg_(x: np.float64) -> np.float64:
    return np.log2(x)


@register_unary(Operator.LOG)
def log_(x: np.float64) -> np.float64:
    return np.log10(x)


@register_unary(Operator.SIN)
def sin_(x: np.float64) -> np.float64:
    return np.sin(x)


@register_unary(Operator.COS)
def cos_(x: np.float64) -> np.float64:
    return np.cos(x)


@register_unary(Operator.TAN)
def tan_(x: np.float64) -> np.float64:
    return np.tan(x)


@register_unary(Operator.CSC)
def csc_(x: np.float64) -> np.float64:
    return np.float64(1.0) / np.sin(x)


@register_unary(Operator.SEC)
def sec_(x: np.float64) -> np.float64:
    return np.float64(1.0) / np.cos(x)


@register_unary(Operator.COT)
def cot_(x: np.float64) -> np.float64:
    return np.float64(1.0) / np.tan(x)


BINARY_IMPLS: dict[Operator, BinaryImpl] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: lambda a, b: a / b,
    Operator.POW: np.power,
}
