"""
rtexpr Parser - Recursive descent over expression tokens

Precedence, lowest to highest:

     1. #id = ...            assignment (right-assoc, VARREF '=' lookahead)
     2. ||                   logical or
     3. &&                   logical and
     4. |                    bitwise or
     5. ^                    bitwise xor
     6. &                    bitwise and
     7. == !=                equality
     8. > >= < <=            relational
     9. << >>                shift
    10. + -                  additive
    11. * /                  multiplicative
    12. - ! ~                unary prefix (right-assoc)
    13. sin(...) cos(...)    function call
    14. exp(...)             function call
    15. number, #id, ( ... ) primary

Levels 2-11 are left-associative. Both operands of && and || are always
parsed; short-circuiting happens at evaluation time.
"""

from typing import List

from .errors import ExprSyntaxError, LexError
from .lexer import Token, TokenType, find_invalid
from .nodes import ASTNode, Assign, Binary, Call, Number, Unary, VarRef


# Binary precedence levels from loosest (||) to tightest (* /)
BINARY_LEVELS = [
    {TokenType.OR_OR: '||'},
    {TokenType.AND_AND: '&&'},
    {TokenType.PIPE: '|'},
    {TokenType.CARET: '^'},
    {TokenType.AMP: '&'},
    {TokenType.EQUAL_EQUAL: '==', TokenType.NOT_EQUAL: '!='},
    {
        TokenType.GREATER: '>',
        TokenType.GREATER_EQUAL: '>=',
        TokenType.LESS: '<',
        TokenType.LESS_EQUAL: '<=',
    },
    {TokenType.SHIFT_LEFT: '<<', TokenType.SHIFT_RIGHT: '>>'},
    {TokenType.PLUS: '+', TokenType.MINUS: '-'},
    {TokenType.STAR: '*', TokenType.SLASH: '/'},
]

UNARY_OPERATORS = {
    TokenType.MINUS: '-',
    TokenType.NOT: '!',
    TokenType.TILDE: '~',
}


class Parser:
    """Parse the tokens of one line into a single AST"""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def parse(self) -> ASTNode:
        """Parse the whole line; trailing tokens are an error"""
        invalid = find_invalid(self.tokens)
        if invalid is not None:
            raise LexError(f"Unexpected character '{invalid.text}'", invalid.pos)

        node = self._parse_assignment()
        if not self._is_at_end():
            token = self._peek()
            raise ExprSyntaxError(f"Unexpected token '{token.text}'", token.pos)
        return node

    def _parse_assignment(self) -> ASTNode:
        """Parse '#id = assignment' or fall through to ||"""
        if self._check(TokenType.VARREF) and self._check_next(TokenType.EQUAL):
            target = self._advance()
            equals = self._advance()
            value = self._parse_assignment()
            return Assign(pos=equals.pos, id=target.value, value=value)
        return self._parse_binary(0)

    def _parse_binary(self, level: int) -> ASTNode:
        """Parse one left-associative binary level"""
        if level == len(BINARY_LEVELS):
            return self._parse_unary()

        operators = BINARY_LEVELS[level]
        left = self._parse_binary(level + 1)
        while self._match(*operators):
            token = self._previous()
            right = self._parse_binary(level + 1)
            left = Binary(pos=token.pos, op=operators[token.type], left=left, right=right)
        return left

    def _parse_unary(self) -> ASTNode:
        """Parse a run of prefix operators; the innermost applies first"""
        prefixes = []
        while self._match(*UNARY_OPERATORS):
            prefixes.append(self._previous())

        node = self._parse_call()
        for token in reversed(prefixes):
            node = Unary(pos=token.pos, op=UNARY_OPERATORS[token.type], operand=node)
        return node

    def _parse_call(self) -> ASTNode:
        """Parse exp(...) and then sin(...) / cos(...)"""
        token = self._peek()
        if token.type == TokenType.IDENTIFIER and token.value == 'exp':
            return self._parse_call_args(token)
        if token.type == TokenType.IDENTIFIER and token.value in ('sin', 'cos'):
            return self._parse_call_args(token)
        return self._parse_primary()

    def _parse_call_args(self, name: Token) -> Call:
        self._advance()
        if not self._match(TokenType.LPAREN):
            raise ExprSyntaxError(f"Expected '(' after {name.value}", name.pos)
        arg = self._parse_assignment()
        if not self._match(TokenType.RPAREN):
            raise ExprSyntaxError(f"Expected ')' after {name.value} argument", name.pos)
        return Call(pos=name.pos, name=name.value, arg=arg)

    def _parse_primary(self) -> ASTNode:
        """Parse number, variable reference or parenthesized expression"""
        if self._match(TokenType.NUMBER):
            token = self._previous()
            return Number(pos=token.pos, value=token.value)

        if self._match(TokenType.VARREF):
            token = self._previous()
            return VarRef(pos=token.pos, id=token.value)

        token = self._peek()
        if token.type == TokenType.IDENTIFIER:
            raise ExprSyntaxError(f"Unexpected identifier '{token.value}'", token.pos)

        if self._match(TokenType.LPAREN):
            expr = self._parse_assignment()
            if not self._match(TokenType.RPAREN):
                raise ExprSyntaxError("Expected ')'", self._peek().pos)
            return expr

        if token.type == TokenType.EOF:
            raise ExprSyntaxError("Unexpected end of input", token.pos)
        raise ExprSyntaxError(f"Unexpected token '{token.text}'", token.pos)

    # Parser utilities
    def _match(self, *types: str) -> bool:
        """Consume the current token if it matches any of the given types"""
        for type in types:
            if self._check(type):
                self._advance()
                return True
        return False

    def _check(self, type: str) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type == type

    def _check_next(self, type: str) -> bool:
        """Check the token after the current one"""
        if self.pos + 1 >= len(self.tokens):
            return False
        return self.tokens[self.pos + 1].type == type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.pos += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _previous(self) -> Token:
        return self.tokens[self.pos - 1]


def parse_tokens(tokens: List[Token]) -> ASTNode:
    """Parse a token list (convenience function)"""
    return Parser(tokens).parse()


__all__ = ['Parser', 'parse_tokens', 'BINARY_LEVELS', 'UNARY_OPERATORS']
