from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional


class NodeKind(str, Enum):
    # ---------- Sequencing ----------
    STATEMENT = "STATEMENT"

    # ---------- Statements ----------
    ASSIGNMENT = "ASSIGNMENT"
    IF = "IF"
    ELIF = "ELIF"
    ELSE = "ELSE"
    WHILE = "WHILE"
    BREAK = "BREAK"

    # ---------- Operators ----------
    PLUS = "PLUS"
    MINUS = "MINUS"
    TIMES = "TIMES"
    DIVIDEDBY = "DIVIDEDBY"
    EQ = "EQ"
    NEQ = "NEQ"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    NEGATE = "NEGATE"

    # ---------- Leaves ----------
    IDENTIFIER = "IDENTIFIER"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    BOOLEAN = "BOOLEAN"

    def __str__(self) -> str:
        return self.value


BINARY_OPS = {
    NodeKind.PLUS, NodeKind.MINUS, NodeKind.TIMES, NodeKind.DIVIDEDBY,
    NodeKind.EQ, NodeKind.NEQ, NodeKind.GT, NodeKind.GTE,
    NodeKind.LT, NodeKind.LTE, NodeKind.AND, NodeKind.OR,
}

UNARY_OPS = {NodeKind.NOT, NodeKind.NEGATE}

LITERALS = {NodeKind.IDENTIFIER, NodeKind.INTEGER, NodeKind.FLOAT, NodeKind.BOOLEAN}


@dataclass
class Node:
    kind: NodeKind = NodeKind.STATEMENT
    literal_text: Optional[str] = None
    block: List["Node"] = field(default_factory=list)     # sequential statements
    children: List["Node"] = field(default_factory=list)  # structural operands
    line: int = 0
    column: int = 0


# ---------- Construction helpers ----------
def statements(items: List[Node], line: int = 0, column: int = 0) -> Node:
    return Node(NodeKind.STATEMENT, block=list(items), line=line, column=column)


def leaf(kind: NodeKind, text: str, line: int = 0, column: int = 0) -> Node:
    return Node(kind, literal_text=text, line=line, column=column)


def operator(kind: NodeKind, *operands: Node, line: int = 0, column: int = 0) -> Node:
    return Node(kind, children=list(operands), line=line, column=column)


# ---------- Traversal contract ----------
def is_leaf(node: Node) -> bool:
    return not node.block and not node.children


def is_statement_wrapper(node: Node) -> bool:
    return node.kind is NodeKind.STATEMENT


def walk(node: Optional[Node], parent: str, enter: Callable[[Node, str], str]) -> None:
    """Visit ``node`` and its descendants in canonical order.

    ``enter(node, parent)`` is called for every non-wrapper node and returns
    the handle its own children are attached to. Statement wrappers are
    transparent: they are never entered and pass ``parent`` straight through.
    ``block`` entries are visited under the same parent as ``node`` itself,
    then ``children`` under ``node``'s handle.
    """
    stack = [(node, parent)]
    while stack:
        node, parent = stack.pop()
        if node is None:
            continue

        if is_statement_wrapper(node):
            own = parent
        else:
            own = enter(node, parent)

        # pushed in reverse so block entries pop first, each subtree finishing
        # before its next sibling
        stack.extend((child, own) for child in reversed(node.children))
        stack.extend((st, parent) for st in reversed(node.block))
