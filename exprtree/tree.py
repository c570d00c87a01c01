from dataclasses import dataclass
from typing import Optional

from exprtree.operators import CONSTANTS
from exprtree.postfix import point_at_token
from exprtree.tokenizer import Token, TokenType


@dataclass
class StructuralError(Exception):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        return "\n".join([f"[Structural error] {self.errmsg}", *point_at_token(self.tokens, self.error_token_idx)])


class MalformedLiteral(StructuralError):
    pass


@dataclass(frozen=True)
class ExprNode:
    token: str
    value: Optional[float] = None
    left: Optional["ExprNode"] = None
    right: Optional["ExprNode"] = None

    def is_leaf(self) -> bool:
        return self.value is not None


def build_tree(postfix: list[Token]) -> Optional[ExprNode]:
    """Assemble postfix tokens into a single tree; ``None`` for an empty sequence"""
    stack: list[ExprNode] = []

    def pop_operand(idx: int) -> ExprNode:
        if not stack:
            raise StructuralError(
                f"Missing operand for {postfix[idx].lexeme!r}", tokens=postfix, error_token_idx=idx
            )
        return stack.pop()

    for idx, token in enumerate(postfix):
        if token.type is TokenType.NUMERIC:
            stack.append(_leaf(postfix, idx))
        elif token.type is TokenType.OPERATOR and not token.unary:
            right = pop_operand(idx)
            left = pop_operand(idx)
            stack.append(ExprNode(token=token.lexeme, left=left, right=right))
        elif token.type in (TokenType.OPERATOR, TokenType.FUNCTIONAL):
            right = pop_operand(idx)
            stack.append(ExprNode(token=token.lexeme, right=right))
        else:
            raise StructuralError(f"Unexpected {token.type} token in postfix", tokens=postfix, error_token_idx=idx)

    if len(stack) > 1:
        raise StructuralError(
            f"{len(stack)} operands left without an operator", tokens=postfix, error_token_idx=len(postfix) - 1
        )
    return stack[0] if stack else None


def _leaf(postfix: list[Token], idx: int) -> ExprNode:
    lexeme = postfix[idx].lexeme
    if lexeme in CONSTANTS:
        return ExprNode(token=lexeme, value=CONSTANTS[lexeme])
    try:
        value = float(lexeme)
    except ValueError:
        raise MalformedLiteral(f"Malformed number {lexeme!r}", tokens=postfix, error_token_idx=idx) from None
    return ExprNode(token=lexeme, value=value)


def render(node: Optional[ExprNode]) -> str:
    """Fully parenthesized form, e.g. ``(2 + (3 * 4))`` or ``(- 5)``"""
    if node is None:
        return ""
    rendered: list[str] = []
    pending: list[tuple[ExprNode, bool]] = [(node, False)]
    while pending:
        current, children_done = pending.pop()
        if current.is_leaf():
            rendered.append(current.token)
            continue
        if not children_done:
            pending.append((current, True))
            if current.right is not None:
                pending.append((current.right, False))
            if current.left is not None:
                pending.append((current.left, False))
            continue
        right = rendered.pop() if current.right is not None else None
        left = rendered.pop() if current.left is not None else None
        parts = [p for p in (left, current.token, right) if p is not None]
        rendered.append("(" + " ".join(parts) + ")")
    return rendered[0]
