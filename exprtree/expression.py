import logging
from typing import Optional

from exprtree.postfix import to_postfix
from exprtree.runtime import evaluate
from exprtree.tokenizer import Token, format_tokens, tokenize
from exprtree.tree import ExprNode, build_tree, render

logger = logging.getLogger(__name__)


class ExprTree:
    """An expression parsed once into a binary tree and evaluated on demand"""

    def __init__(self, root: Optional[ExprNode] = None) -> None:
        self._root = root

    @property
    def root(self) -> Optional[ExprNode]:
        return self._root

    @classmethod
    def build(cls, expression: str, strict: bool = False) -> "ExprTree":
        postfix = to_postfix(tokenize(expression, strict=strict))
        logger.debug("Postfix of %r: %s", expression, format_tokens(postfix))
        return cls.from_postfix(postfix)

    @classmethod
    def from_postfix(cls, postfix: list[Token]) -> "ExprTree":
        return cls(build_tree(postfix))

    def eval(self) -> float:
        return evaluate(self.root)

    def __str__(self) -> str:
        return render(self.root)

    def __repr__(self) -> str:
        return f"ExprTree({render(self.root)!r})"
