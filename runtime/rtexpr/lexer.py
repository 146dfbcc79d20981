"""
rtexpr Lexer - Expression line tokenizer

Turns one input line into a list of tokens terminated by EOF. The tokenizer
never raises: an unrecognized character (or a '#' with no digits after it)
becomes an INVALID token and scanning stops there. The runtime reports the
INVALID token as a lexical error.

Token kinds:
    NUMBER      [0-9.]+ starting with a digit or '.'
    VARREF      '#' followed by one or more digits, e.g. #12
    IDENTIFIER  maximal run of ASCII letters (only sin/cos/exp are valid)
    operators   + - * / ( ) ! != && || > >= < <= == & | ^ ~ << >> =
"""

from typing import Any, List, Optional
from dataclasses import dataclass
import logging
import re


logger = logging.getLogger(__name__)


# ============================================================================
# Token Types
# ============================================================================

@dataclass(frozen=True)
class Token:
    """Token from an expression line"""
    type: str
    value: Any
    text: str
    pos: int


class TokenType:
    """Token type constants"""
    # Literals and references
    NUMBER = "NUMBER"
    VARREF = "VARREF"
    IDENTIFIER = "IDENTIFIER"

    # Arithmetic
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"

    # Logical
    NOT = "NOT"
    AND_AND = "AND_AND"
    OR_OR = "OR_OR"

    # Comparison
    EQUAL_EQUAL = "EQUAL_EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"

    # Bitwise
    AMP = "AMP"
    PIPE = "PIPE"
    CARET = "CARET"
    TILDE = "TILDE"
    SHIFT_LEFT = "SHIFT_LEFT"
    SHIFT_RIGHT = "SHIFT_RIGHT"

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EQUAL = "EQUAL"

    # Special
    EOF = "EOF"
    INVALID = "INVALID"


# Two-character operators are matched before their one-character prefixes
TWO_CHAR_OPERATORS = {
    '&&': TokenType.AND_AND,
    '||': TokenType.OR_OR,
    '<<': TokenType.SHIFT_LEFT,
    '>>': TokenType.SHIFT_RIGHT,
    '>=': TokenType.GREATER_EQUAL,
    '<=': TokenType.LESS_EQUAL,
    '!=': TokenType.NOT_EQUAL,
    '==': TokenType.EQUAL_EQUAL,
}

ONE_CHAR_OPERATORS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '!': TokenType.NOT,
    '>': TokenType.GREATER,
    '<': TokenType.LESS,
    '&': TokenType.AMP,
    '|': TokenType.PIPE,
    '^': TokenType.CARET,
    '~': TokenType.TILDE,
    '=': TokenType.EQUAL,
}

WHITESPACE = ' \t\r\n\v\f'
DIGITS = '0123456789'
LETTERS = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'

# Longest leading decimal prefix of a scanned number ("1.2.3" -> "1.2")
_DECIMAL_PREFIX = re.compile(r'\d*(?:\.\d*)?')


def parse_number(text: str) -> float:
    """Value of a scanned numeric literal; malformed tails are ignored"""
    prefix = _DECIMAL_PREFIX.match(text).group(0)
    if prefix in ('', '.'):
        return 0.0
    return float(prefix)


# ============================================================================
# Tokenizer
# ============================================================================

class Tokenizer:
    """Tokenize one expression line"""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenize the entire line"""
        n = len(self.source)
        while True:
            self._skip_whitespace()
            if self.pos >= n:
                self._add_token(TokenType.EOF, None, '', self.pos)
                break

            ch = self.source[self.pos]
            pair = self.source[self.pos:self.pos + 2]

            if pair in TWO_CHAR_OPERATORS:
                self._add_token(TWO_CHAR_OPERATORS[pair], pair, pair, self.pos)
                self.pos += 2
            elif ch in DIGITS or ch == '.':
                self._read_number()
            elif ch == '#':
                if not self._read_varref():
                    break
            elif ch in LETTERS:
                self._read_identifier()
            elif ch in ONE_CHAR_OPERATORS:
                self._add_token(ONE_CHAR_OPERATORS[ch], ch, ch, self.pos)
                self.pos += 1
            else:
                self._add_token(TokenType.INVALID, ch, ch, self.pos)
                break

        logger.debug("tokenized %r into %d tokens", self.source, len(self.tokens))
        return self.tokens

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos] in WHITESPACE:
            self.pos += 1

    def _read_number(self):
        """Read numeric literal; digits and dots are consumed greedily"""
        start = self.pos
        while self.pos < len(self.source) and (self.source[self.pos] in DIGITS or self.source[self.pos] == '.'):
            self.pos += 1
        text = self.source[start:self.pos]
        self._add_token(TokenType.NUMBER, parse_number(text), text, start)

    def _read_varref(self) -> bool:
        """Read '#<digits>'; returns False after emitting INVALID"""
        start = self.pos
        self.pos += 1
        while self.pos < len(self.source) and self.source[self.pos] in DIGITS:
            self.pos += 1

        if self.pos == start + 1:
            self._add_token(TokenType.INVALID, '#', '#', start)
            return False

        text = self.source[start:self.pos]
        self._add_token(TokenType.VARREF, int(text[1:]), text, start)
        return True

    def _read_identifier(self):
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in LETTERS:
            self.pos += 1
        text = self.source[start:self.pos]
        self._add_token(TokenType.IDENTIFIER, text, text, start)

    def _add_token(self, type: str, value: Any, text: str, pos: int):
        self.tokens.append(Token(type=type, value=value, text=text, pos=pos))


def tokenize(source: str) -> List[Token]:
    """Tokenize an expression line (convenience function)"""
    return Tokenizer(source).tokenize()


def find_invalid(tokens: List[Token]) -> Optional[Token]:
    """Return the first INVALID token, if any"""
    for token in tokens:
        if token.type == TokenType.INVALID:
            return token
    return None


__all__ = [
    'Token',
    'TokenType',
    'Tokenizer',
    'tokenize',
    'find_invalid',
    'parse_number',
]
