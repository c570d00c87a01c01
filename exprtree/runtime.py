from dataclasses import dataclass
from typing import Optional

import numpy as np

from exprtree.operators import BINARY_IMPLS, UNARY_IMPLS, Arity, Operator, classify
from exprtree.tree import ExprNode


@dataclass
class CalcRuntimeError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return f"[Runtime error] {self.errmsg}"


@dataclass
class UnknownOperator(CalcRuntimeError):
    symbol: str


def evaluate(root: Optional[ExprNode]) -> float:
    """Evaluate a tree; an empty tree is ``0.0``.

    Floating point edge cases (zero divisors, logs of non-positive numbers,
    overflow) come back as ``inf``/``nan`` rather than raising.
    """
    if root is None:
        return 0.0
    with np.errstate(all="ignore"):
        return float(evaluate_node(root))


def _dispatch(node: ExprNode) -> tuple[Operator, bool]:
    """Operator of an interior node and whether it applies to a single operand"""
    arity = classify(node.token)
    if arity is Arity.NOOP:
        raise UnknownOperator(f"Unknown operator {node.token!r}", symbol=node.token)
    if node.right is None:
        raise CalcRuntimeError(f"No operand for operator {node.token!r}")

    op = Operator.from_symbol(node.token)
    assert op is not None
    if arity is Arity.UNARY or (arity is Arity.BOTH and node.left is None):
        if node.left is not None:
            raise CalcRuntimeError(f"{node.token!r} takes a single operand")
        return op, True
    if node.left is None:
        raise CalcRuntimeError(f"{node.token!r} requires two operands")
    return op, False


def evaluate_node(node: ExprNode) -> np.float64:
    """Post-order evaluation with explicit stacks, so tree depth is not bound by the recursion limit"""
    values: list[np.float64] = []
    pending: list[tuple[ExprNode, bool]] = [(node, False)]
    while pending:
        current, children_done = pending.pop()
        if current.value is not None:
            values.append(np.float64(current.value))
            continue

        op, unary = _dispatch(current)
        if not children_done:
            pending.append((current, True))
            pending.append((current.right, False))  # type: ignore[arg-type]
            if not unary:
                pending.append((current.left, False))  # type: ignore[arg-type]
            continue

        right_res = values.pop()
        if unary:
            values.append(UNARY_IMPLS[op](right_res))
        else:
            left_res = values.pop()
            values.append(BINARY_IMPLS[op](left_res, right_res))
    return values[0]
