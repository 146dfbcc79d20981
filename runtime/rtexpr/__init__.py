"""
rtexpr - Real-time expression evaluator

This package evaluates arithmetic/logical expression lines over a store of
#id variables whose values may be fed by an external real-time source.

**Pipeline:**
- Lexer: line -> tokens (never raises; INVALID token on bad input)
- Parser: tokens -> AST (fourteen precedence levels, #id = ... assignment)
- Optimizer: constant folding of subtrees that never read the store
- Evaluator: tree walk with short-circuit && / || and int64 bitwise ops

**Driver:**
- evaluate_line(text, store) -> LineResult (value or Diagnostic)
- Runtime: session object bundling a VariableStore and RuntimeConfig
- repl.main: interactive command line (`rtexpr`, `python -m rtexpr`)

Version: 1.0.0
"""

__version__ = '1.0.0'

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    E_LEX_ERROR, E_SYNTAX_ERROR, E_RUNTIME_ERROR,
    E_DIVISION_BY_ZERO, E_UNKNOWN_FUNCTION,
    Diagnostic,
    ExprError, LexError, ExprSyntaxError, ExprRuntimeError,
    DivisionByZeroError, UnknownFunctionError,
)

# ============================================================================
# Pipeline Stages
# ============================================================================

from .lexer import Token, TokenType, Tokenizer
from .nodes import (
    ASTNode, Number, VarRef, Unary, Binary, Call, Assign,
    contains_varref, format_tree,
)
from .parser import Parser
from .optimizer import Optimizer
from .evaluator import Evaluator
from .store import VariableStore

# ============================================================================
# Runtime Interface
# ============================================================================

from .config import RuntimeConfig
from .runtime import (
    tokenize, parse, optimize, evaluate,
    LineResult, evaluate_line,
    Runtime, execute,
)

# ============================================================================
# Exports
# ============================================================================

__all__ = [
    # Version
    '__version__',

    # Errors
    'E_LEX_ERROR', 'E_SYNTAX_ERROR', 'E_RUNTIME_ERROR',
    'E_DIVISION_BY_ZERO', 'E_UNKNOWN_FUNCTION',
    'Diagnostic',
    'ExprError', 'LexError', 'ExprSyntaxError', 'ExprRuntimeError',
    'DivisionByZeroError', 'UnknownFunctionError',

    # Pipeline stages
    'Token', 'TokenType', 'Tokenizer',
    'ASTNode', 'Number', 'VarRef', 'Unary', 'Binary', 'Call', 'Assign',
    'contains_varref', 'format_tree',
    'Parser', 'Optimizer', 'Evaluator', 'VariableStore',

    # Runtime
    'RuntimeConfig',
    'tokenize', 'parse', 'optimize', 'evaluate',
    'LineResult', 'evaluate_line',
    'Runtime', 'execute',
]
