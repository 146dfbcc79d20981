"""
AST nodes for expression lines

Six node kinds: Number, VarRef, Unary, Binary, Call and Assign. Every node
records the character offset of the token that defined it, used only for
diagnostics. A subtree containing a VarRef is volatile: its value depends
on the variable store and must not be constant-folded.
"""

from typing import List
from dataclasses import dataclass


# ============================================================================
# AST Nodes
# ============================================================================

@dataclass
class ASTNode:
    """Base AST node"""
    pos: int


@dataclass
class Number(ASTNode):
    """Numeric literal"""
    value: float


@dataclass
class VarRef(ASTNode):
    """Variable store reference (#id)"""
    id: int


@dataclass
class Unary(ASTNode):
    """Prefix operation: '-', '!' or '~'"""
    op: str
    operand: ASTNode


@dataclass
class Binary(ASTNode):
    """Binary operation"""
    op: str
    left: ASTNode
    right: ASTNode


@dataclass
class Call(ASTNode):
    """Builtin function call: sin, cos or exp"""
    name: str
    arg: ASTNode


@dataclass
class Assign(ASTNode):
    """#id = value; yields the stored value"""
    id: int
    value: ASTNode


def contains_varref(node: ASTNode) -> bool:
    """True if the subtree reads the variable store"""
    if isinstance(node, VarRef):
        return True
    elif isinstance(node, Number):
        return False
    elif isinstance(node, Unary):
        return contains_varref(node.operand)
    elif isinstance(node, Binary):
        return contains_varref(node.left) or contains_varref(node.right)
    elif isinstance(node, Call):
        return contains_varref(node.arg)
    elif isinstance(node, Assign):
        # the target id is not a read
        return contains_varref(node.value)
    else:
        raise TypeError(f"Unknown AST node type: {type(node).__name__}")


# ============================================================================
# Tree Printer
# ============================================================================

def node_label(node: ASTNode) -> str:
    if isinstance(node, Number):
        return '%g' % node.value
    elif isinstance(node, VarRef):
        return f'#{node.id}'
    elif isinstance(node, Unary):
        return f'Unary({node.op})'
    elif isinstance(node, Binary):
        return f'Binary({node.op})'
    elif isinstance(node, Call):
        return f'Func({node.name})'
    elif isinstance(node, Assign):
        return f'Assign(#{node.id})'
    else:
        raise TypeError(f"Unknown AST node type: {type(node).__name__}")


def children(node: ASTNode) -> List[ASTNode]:
    if isinstance(node, Unary):
        return [node.operand]
    elif isinstance(node, Binary):
        return [node.left, node.right]
    elif isinstance(node, Call):
        return [node.arg]
    elif isinstance(node, Assign):
        return [node.value]
    return []


def format_tree(node: ASTNode) -> str:
    """
    Render an AST as an indented tree, one node per line.

    Example:
        >>> print(format_tree(Binary(2, '+', Number(0, 1.0), VarRef(4, 3))))
        └─ Binary(+)
           ├─ 1
           └─ #3
    """
    lines: List[str] = []

    def walk(current: ASTNode, indent: str, last: bool):
        lines.append(indent + ('└─ ' if last else '├─ ') + node_label(current))
        child_indent = indent + ('   ' if last else '│  ')
        kids = children(current)
        for i, child in enumerate(kids):
            walk(child, child_indent, i == len(kids) - 1)

    walk(node, '', True)
    return '\n'.join(lines)


__all__ = [
    'ASTNode',
    'Number',
    'VarRef',
    'Unary',
    'Binary',
    'Call',
    'Assign',
    'contains_varref',
    'format_tree',
]
