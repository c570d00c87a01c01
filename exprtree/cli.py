import argparse
import logging
import sys
from typing import Optional

from exprtree.expression import ExprTree
from exprtree.postfix import ParenthesisMismatch, to_postfix
from exprtree.runtime import CalcRuntimeError
from exprtree.tokenizer import TokenizerError, format_tokens, tokenize
from exprtree.tree import StructuralError

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def parse_arguments(argv: Optional[list[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="exprtree", description="Evaluate an arithmetic expression.")
    parser.add_argument("expression", help="expression to evaluate, e.g. '2+3*4' or 'ln(2.7)'")
    parser.add_argument("--strict", action="store_true", help="reject unknown characters instead of skipping them")
    parser.add_argument("--tree", action="store_true", help="print the parenthesized expression tree")
    parser.add_argument("--rpn", action="store_true", help="print the postfix form")
    parser.add_argument(
        "--precision", type=non_negative_int, default=None, help="number of decimal places in the result"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every parsing step")
    return parser.parse_args(argv)


def format_result(result: float, precision: Optional[int]) -> str:
    if precision is None:
        return repr(result)
    return f"{result:.{precision}f}"


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        postfix = to_postfix(tokenize(args.expression, strict=args.strict))
        if args.rpn:
            print(format_tokens(postfix))
        tree = ExprTree.from_postfix(postfix)
    except (TokenizerError, ParenthesisMismatch, StructuralError) as e:
        print(e, file=sys.stderr)
        return 1

    if args.tree:
        print(tree)

    try:
        result = tree.eval()
    except CalcRuntimeError as e:
        print(e, file=sys.stderr)
        return 2

    logger.debug("%s = %r", args.expression, result)
    print(format_result(result, args.precision))
    return 0


if __name__ == "__main__":
    sys.exit(main())
