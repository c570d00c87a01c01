import enum
import logging
from dataclasses import dataclass

from exprtree.operators import CONSTANTS, OPERATOR_CHARS, operator_precedence
from exprtree.utils import PrintableEnum, point_at

logger = logging.getLogger(__name__)


@dataclass
class TokenizerError(Exception):
    errmsg: str
    expression: str
    error_char_idx: int

    def __str__(self) -> str:
        return "\n".join([f"[Tokenizer error] {self.errmsg}", *point_at(self.expression, self.error_char_idx)])


class TokenType(PrintableEnum):
    NUMERIC = enum.auto()
    ALPHABETICAL = enum.auto()
    FUNCTIONAL = enum.auto()
    OPERATOR = enum.auto()
    LEFT_PAREN = enum.auto()
    RIGHT_PAREN = enum.auto()
    INVALID = enum.auto()


@dataclass
class Token:
    type: TokenType
    lexeme: str
    precedence: int = 0
    position: int = -1
    unary: bool = False

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


def classify_char(c: str) -> TokenType:
    if c in "0123456789.":
        return TokenType.NUMERIC
    elif "a" <= c <= "z":
        return TokenType.ALPHABETICAL
    elif c in OPERATOR_CHARS:
        return TokenType.OPERATOR
    elif c == "(":
        return TokenType.LEFT_PAREN
    elif c == ")":
        return TokenType.RIGHT_PAREN
    else:
        return TokenType.INVALID


def classify_name(name: str) -> TokenType:
    """Constants are operands, every other name is a prefix function"""
    return TokenType.NUMERIC if name in CONSTANTS else TokenType.FUNCTIONAL


def _run_end(expression: str, start: int, char_type: TokenType) -> int:
    end = start + 1
    while end < len(expression) and classify_char(expression[end]) is char_type:
        end += 1
    return end


def tokenize(expression: str, strict: bool = False) -> list[Token]:
    """Split ``expression`` into tokens in a single left to right pass.

    Characters outside the known classes are dropped. With ``strict`` set, any
    such character other than whitespace raises :class:`TokenizerError` instead.
    """
    i = 0
    tokens: list[Token] = []
    while i < len(expression):
        c = expression[i]
        char_type = classify_char(c)
        if char_type is TokenType.NUMERIC:
            end = _run_end(expression, i, char_type)
            tokens.append(Token(type=TokenType.NUMERIC, lexeme=expression[i:end], position=i))
            i = end
            continue
        elif char_type is TokenType.ALPHABETICAL:
            end = _run_end(expression, i, char_type)
            name = expression[i:end]
            tokens.append(Token(type=classify_name(name), lexeme=name, position=i))
            i = end
            continue
        elif char_type is TokenType.OPERATOR:
            tokens.append(Token(type=char_type, lexeme=c, precedence=operator_precedence(c), position=i))
        elif char_type in (TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN):
            tokens.append(Token(type=char_type, lexeme=c, position=i))
        elif strict and not c.isspace():
            raise TokenizerError(f"Unexpected character: {c!r}", expression=expression, error_char_idx=i)
        elif not c.isspace():
            logger.debug("Skipping invalid character %r at %d", c, i)
        i += 1

    logger.debug("Tokens of %r: %s", expression, format_tokens(tokens))
    return tokens


def format_tokens(tokens: list[Token]) -> str:
    return " ".join(t.lexeme for t in tokens)
