"""
rtexpr Runtime - one line in, one value or diagnostic out

Pipeline per line:
    Tokenizer -> Parser -> Optimizer -> Evaluator

evaluate_line() is the driver contract: it never raises for language
errors and returns a LineResult carrying either the value or a Diagnostic
(message plus character offset). Runtime bundles a VariableStore with a
RuntimeConfig for interactive sessions.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

from .config import RuntimeConfig
from .errors import Diagnostic, ExprError, ExprRuntimeError, ExprSyntaxError
from .evaluator import Evaluator
from .lexer import Token, Tokenizer
from .nodes import ASTNode
from .optimizer import Optimizer
from .parser import Parser
from .store import VariableStore


logger = logging.getLogger(__name__)


# ============================================================================
# Staged API
# ============================================================================

def tokenize(text: str) -> List[Token]:
    return Tokenizer(text).tokenize()


def parse(text: str) -> ASTNode:
    """Tokenize and parse one line; raises LexError or ExprSyntaxError"""
    return Parser(tokenize(text)).parse()


def optimize(tree: ASTNode) -> ASTNode:
    return Optimizer().optimize(tree)


def evaluate(tree: ASTNode, store: VariableStore) -> float:
    return Evaluator(store).evaluate(tree)


# ============================================================================
# Line Results
# ============================================================================

@dataclass
class LineResult:
    """Outcome of evaluating one line"""
    value: Optional[float] = None
    diagnostic: Optional[Diagnostic] = None
    tree: Optional[ASTNode] = None
    optimized: Optional[ASTNode] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


def evaluate_line(text: str, store: VariableStore, optimize: bool = True) -> LineResult:
    """
    Parse, optimize and evaluate one line against a store.

    Args:
        text: Source line
        store: Variable store, mutated by assignments
        optimize: Constant-fold before evaluating

    Returns:
        LineResult with value on success, diagnostic on failure

    Example:
        >>> evaluate_line('#1 = 2 + 3', VariableStore()).value
        5.0
    """
    result = LineResult()
    try:
        try:
            result.tree = parse(text)
            result.optimized = Optimizer().optimize(result.tree) if optimize else result.tree
            result.value = Evaluator(store).evaluate(result.optimized)
        except RecursionError:
            raise nesting_error(text, result.tree) from None
    except ExprError as e:
        logger.debug("line %r failed: %s", text, e)
        result.diagnostic = e.to_diagnostic()
    return result


def nesting_error(text: str, tree: Optional[ASTNode] = None) -> ExprError:
    """
    Error for a line nested deeper than the interpreter stack allows.

    Before a tree exists this is a syntax error at the first token; after
    parsing it is a runtime error at the root node.
    """
    if tree is None:
        return ExprSyntaxError("Expression nested too deeply", len(text) - len(text.lstrip()))
    return ExprRuntimeError("Expression nested too deeply", tree.pos)


# ============================================================================
# Runtime Interface
# ============================================================================

class Runtime:
    """Interactive session: one store shared by successive lines"""

    def __init__(self, config: Optional[RuntimeConfig] = None, store: Optional[VariableStore] = None):
        self.config = config or RuntimeConfig()
        self.store = store if store is not None else VariableStore()

    def execute(self, source: str) -> float:
        """Evaluate a line, raising ExprError on failure"""
        tree = None
        try:
            tree = parse(source)
            if self.config.optimize:
                tree = optimize(tree)
            return evaluate(tree, self.store)
        except RecursionError:
            raise nesting_error(source, tree) from None

    def evaluate_line(self, source: str) -> LineResult:
        return evaluate_line(source, self.store, optimize=self.config.optimize)

    def set_var(self, var_id: int, value: float):
        self.store.set(var_id, value)

    def get_var(self, var_id: int) -> float:
        return self.store.get(var_id)

    def get_env(self) -> Dict[int, float]:
        return self.store.snapshot()

    def clear_env(self):
        self.store.clear()


def execute(source: str) -> float:
    """
    Evaluate one line against a fresh store (convenience function)

    Example:
        >>> execute('2 + 3 * 4')
        14.0
    """
    return Runtime().execute(source)


__all__ = [
    'tokenize', 'parse', 'optimize', 'evaluate',
    'LineResult', 'evaluate_line', 'nesting_error',
    'Runtime', 'execute',
]
