from exprtree.expression import ExprTree
from exprtree.postfix import ParenthesisMismatch
from exprtree.runtime import CalcRuntimeError
from exprtree.tokenizer import TokenizerError
from exprtree.tree import StructuralError


if __name__ == "__main__":
    while True:
        try:
            expression = input("> ")
        except EOFError:
            break

        if not expression.strip():
            continue

        try:
            tree = ExprTree.build(expression)
        except (TokenizerError, ParenthesisMismatch, StructuralError) as e:
            print(e)
            continue

        try:
            result = tree.eval()
        except CalcRuntimeError as e:
            print(e)
            continue

        print(f"{tree} = {result}")
