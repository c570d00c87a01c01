import dataclasses
import logging
from dataclasses import dataclass

from exprtree.operators import UNARY_MINUS_PRECEDENCE, Assoc, operator_assoc
from exprtree.tokenizer import Token, TokenType, format_tokens
from exprtree.utils import point_at

logger = logging.getLogger(__name__)


@dataclass
class ParenthesisMismatch(Exception):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        return "\n".join([f"[Parenthesis mismatch] {self.errmsg}", *point_at_token(self.tokens, self.error_token_idx)])


def point_at_token(tokens: list[Token], idx: int) -> list[str]:
    offset = len(format_tokens(tokens[:idx])) + (1 if idx > 0 else 0)
    return point_at(format_tokens(tokens), offset)


def _is_prefix_position(prev: Token | None) -> bool:
    return prev is None or prev.type in (TokenType.OPERATOR, TokenType.LEFT_PAREN, TokenType.FUNCTIONAL)


def _pops_before(top: Token, token: Token) -> bool:
    if top.type is not TokenType.OPERATOR:
        return False
    top_assoc = operator_assoc(top.lexeme, unary=top.unary)
    return (top_assoc is Assoc.LEFT and top.precedence >= token.precedence) or top.precedence > token.precedence


def _log_state(output: list[Token], stack: list[Token]) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("output: %s | stack: %s", format_tokens(output), format_tokens(stack))


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Reorder infix tokens into postfix (RPN) with the shunting-yard algorithm.

    A ``-`` in prefix position (start of input, after an operator, an opening
    parenthesis or a function name) is re-tagged as unary negation. Functions
    are never displaced by precedence; they leave the stack when the ``)``
    closing their argument is seen, or when the stack is drained.
    """
    output: list[Token] = []
    stack: list[Token] = []
    prev: Token | None = None
    for idx, token in enumerate(tokens):
        if token.type is TokenType.NUMERIC:
            output.append(token)
        elif token.type is TokenType.FUNCTIONAL:
            stack.append(token)
        elif token.type is TokenType.OPERATOR:
            if token.lexeme == "-" and _is_prefix_position(prev):
                stack.append(dataclasses.replace(token, precedence=UNARY_MINUS_PRECEDENCE, unary=True))
            else:
                while stack and _pops_before(stack[-1], token):
                    output.append(stack.pop())
                stack.append(token)
        elif token.type is TokenType.LEFT_PAREN:
            stack.append(token)
        elif token.type is TokenType.RIGHT_PAREN:
            while True:
                if not stack:
                    raise ParenthesisMismatch("No matching '(' for ')'", tokens=tokens, error_token_idx=idx)
                top = stack.pop()
                if top.type is TokenType.LEFT_PAREN:
                    break
                output.append(top)
            if stack and stack[-1].type is TokenType.FUNCTIONAL:
                output.append(stack.pop())
        else:
            logger.debug("Ignoring %s token %r", token.type, token.lexeme)
            continue
        prev = token
        _log_state(output, stack)

    while stack:
        top = stack.pop()
        if top.type in (TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN):
            error_token_idx = next(i for i, t in enumerate(tokens) if t is top)
            raise ParenthesisMismatch("Unclosed '('", tokens=tokens, error_token_idx=error_token_idx)
        output.append(top)
        _log_state(output, stack)

    return output
