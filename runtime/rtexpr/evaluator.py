"""
Tree-walking evaluator

Walks an (optionally optimized) AST against a VariableStore and returns a
float. Operands are evaluated left to right; && and || skip their right
operand entirely once the result is known, so assignments inside a skipped
operand never run. Errors abort the line; store writes made before the
error stay applied.
"""

from .errors import DivisionByZeroError, ExprRuntimeError, UnknownFunctionError
from .nodes import ASTNode, Assign, Binary, Call, Number, Unary, VarRef
from .operators import FUNCTIONS, apply_binary, apply_function, apply_unary, truth
from .store import VariableStore


class Evaluator:
    """Evaluate expression ASTs"""

    def __init__(self, store: VariableStore):
        self.store = store

    def evaluate(self, node: ASTNode) -> float:
        """Evaluate AST node"""
        if isinstance(node, Number):
            return node.value

        elif isinstance(node, VarRef):
            return self.store.get(node.id)

        elif isinstance(node, Unary):
            operand = self.evaluate(node.operand)
            try:
                return apply_unary(node.op, operand)
            except ValueError as e:
                raise ExprRuntimeError(str(e), node.pos) from e

        elif isinstance(node, Binary):
            return self._eval_binary(node)

        elif isinstance(node, Call):
            arg = self.evaluate(node.arg)
            if node.name not in FUNCTIONS:
                raise UnknownFunctionError(f"Unknown function {node.name}", node.pos)
            return apply_function(node.name, arg)

        elif isinstance(node, Assign):
            value = self.evaluate(node.value)
            return self.store.set(node.id, value)

        else:
            raise ExprRuntimeError(f"Unknown AST node type: {type(node).__name__}", getattr(node, 'pos', 0))

    def _eval_binary(self, node: Binary) -> float:
        if node.op == '&&':
            if self.evaluate(node.left) == 0.0:
                return 0.0
            return truth(self.evaluate(node.right))

        if node.op == '||':
            if self.evaluate(node.left) != 0.0:
                return 1.0
            return truth(self.evaluate(node.right))

        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        if node.op == '/' and right == 0.0:
            raise DivisionByZeroError("Division by zero", node.pos)
        try:
            return apply_binary(node.op, left, right)
        except ValueError as e:
            raise ExprRuntimeError(str(e), node.pos) from e


def evaluate(node: ASTNode, store: VariableStore) -> float:
    """Evaluate a tree against a store (convenience function)"""
    return Evaluator(store).evaluate(node)


__all__ = ['Evaluator', 'evaluate']
