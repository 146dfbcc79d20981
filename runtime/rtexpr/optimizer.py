"""
Constant folding for expression trees

Folds Unary, Binary and Call nodes whose operands are all literals and whose
subtree never reads the variable store. #id values can change between
parse time and evaluation time (they are fed by an external real-time
source), so any subtree containing a VarRef is left alone.

Assignments are never folded but their value is. Division by a literal zero
is not folded either: the error is raised by the evaluator, with the same
message and position as an unoptimized run.

The input tree is never modified; rewritten nodes are new objects, so the
parsed tree can still be displayed after optimization.
"""

from dataclasses import replace
import logging

from .nodes import ASTNode, Assign, Binary, Call, Number, Unary, VarRef
from .operators import BINARY_OPS, FUNCTIONS, UNARY_OPS, apply_binary, apply_function, apply_unary


logger = logging.getLogger(__name__)


class Optimizer:
    """Post-order constant folder"""

    def __init__(self):
        self.folded = 0

    def optimize(self, node: ASTNode) -> ASTNode:
        """Return the optimized node (possibly a new Number)"""
        if isinstance(node, (Number, VarRef)):
            return node

        elif isinstance(node, Unary):
            operand = self.optimize(node.operand)
            if node.op in UNARY_OPS and self._foldable(operand):
                return self._fold(node, apply_unary(node.op, operand.value))
            return replace(node, operand=operand)

        elif isinstance(node, Binary):
            left = self.optimize(node.left)
            right = self.optimize(node.right)
            if node.op not in BINARY_OPS or not self._foldable(left, right):
                return replace(node, left=left, right=right)
            if node.op == '/' and right.value == 0.0:
                logger.debug("not folding division by zero at position %d", node.pos)
                return replace(node, left=left, right=right)
            return self._fold(node, apply_binary(node.op, left.value, right.value))

        elif isinstance(node, Call):
            arg = self.optimize(node.arg)
            if node.name in FUNCTIONS and self._foldable(arg):
                return self._fold(node, apply_function(node.name, arg.value))
            return replace(node, arg=arg)

        elif isinstance(node, Assign):
            return replace(node, value=self.optimize(node.value))

        else:
            raise TypeError(f"Unknown AST node type: {type(node).__name__}")

    @staticmethod
    def _foldable(*operands: ASTNode) -> bool:
        # operands are already optimized, so a Number here has no VarRef below it
        return all(isinstance(operand, Number) for operand in operands)

    def _fold(self, node: ASTNode, value: float) -> Number:
        # keep the original position for diagnostics
        self.folded += 1
        logger.debug("folded %s at position %d to %r", type(node).__name__, node.pos, value)
        return Number(pos=node.pos, value=value)


def optimize(node: ASTNode) -> ASTNode:
    """Constant-fold a tree (convenience function)"""
    return Optimizer().optimize(node)


__all__ = ['Optimizer', 'optimize']
