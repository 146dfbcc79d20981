"""
rtexpr error definitions

Every failure of the line pipeline is an ExprError carrying an error code,
a human-readable message and the 0-based character offset at which the
problem was detected. The driver turns errors into Diagnostic records and
renders a caret under the offending column.
"""

from dataclasses import dataclass
from typing import List, Optional


# ============================================================================
# Error Codes
# ============================================================================

E_LEX_ERROR = "E_LEX_ERROR"
E_SYNTAX_ERROR = "E_SYNTAX_ERROR"
E_RUNTIME_ERROR = "E_RUNTIME_ERROR"
E_DIVISION_BY_ZERO = "E_DIVISION_BY_ZERO"
E_UNKNOWN_FUNCTION = "E_UNKNOWN_FUNCTION"

ERROR_KINDS = {
    E_LEX_ERROR: "Lexical",
    E_SYNTAX_ERROR: "Syntax",
    E_RUNTIME_ERROR: "Runtime",
    E_DIVISION_BY_ZERO: "Runtime",
    E_UNKNOWN_FUNCTION: "Runtime",
}


# ============================================================================
# Diagnostics
# ============================================================================

@dataclass(frozen=True)
class Diagnostic:
    """Message and position of a failed line"""
    code: str
    message: str
    pos: int

    @property
    def kind(self) -> str:
        return ERROR_KINDS.get(self.code, "Runtime")

    def render(self, text: str) -> List[str]:
        """Return the source line and a caret line pointing at pos"""
        line = text.rstrip("\r\n")
        pad = "".join("\t" if ch == "\t" else " " for ch in line[:self.pos])
        return [line, pad + "^"]

    def __str__(self) -> str:
        return f"{self.kind} error at position {self.pos}: {self.message}"


# ============================================================================
# Exceptions
# ============================================================================

class ExprError(Exception):
    """Base exception for expression errors"""
    code = E_RUNTIME_ERROR

    def __init__(self, message: str, pos: int, code: Optional[str] = None):
        if code is not None:
            self.code = code
        self.message = message
        self.pos = pos
        super().__init__(f"[{self.code}] {message} at position {pos}")

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(code=self.code, message=self.message, pos=self.pos)


class LexError(ExprError):
    """Unrecognized character in the input line"""
    code = E_LEX_ERROR


class ExprSyntaxError(ExprError):
    """Malformed token sequence"""
    code = E_SYNTAX_ERROR


class ExprRuntimeError(ExprError):
    """Failure while walking the tree"""
    code = E_RUNTIME_ERROR


class DivisionByZeroError(ExprRuntimeError):
    code = E_DIVISION_BY_ZERO


class UnknownFunctionError(ExprRuntimeError):
    code = E_UNKNOWN_FUNCTION


__all__ = [
    'E_LEX_ERROR', 'E_SYNTAX_ERROR', 'E_RUNTIME_ERROR',
    'E_DIVISION_BY_ZERO', 'E_UNKNOWN_FUNCTION',
    'Diagnostic',
    'ExprError', 'LexError', 'ExprSyntaxError', 'ExprRuntimeError',
    'DivisionByZeroError', 'UnknownFunctionError',
]
