"""Render a parsed program as a sequence of C++ statements.

The result is the program body embedded by the C++ backend between its
``Begin program`` / ``End program`` markers.
"""
from __future__ import annotations
from typing import List

from ast_nodes import BINARY_OPS, LITERALS, Node, NodeKind, UNARY_OPS

INDENT = "  "

CPP_OPERATORS = {
    NodeKind.PLUS: "+",
    NodeKind.MINUS: "-",
    NodeKind.TIMES: "*",
    NodeKind.DIVIDEDBY: "/",
    NodeKind.EQ: "==",
    NodeKind.NEQ: "!=",
    NodeKind.GT: ">",
    NodeKind.GTE: ">=",
    NodeKind.LT: "<",
    NodeKind.LTE: "<=",
    NodeKind.AND: "&&",
    NodeKind.OR: "||",
    NodeKind.NOT: "!",
    NodeKind.NEGATE: "-",
}

# C++ binding strength; higher binds tighter.
PRECEDENCE = {
    NodeKind.OR: 1,
    NodeKind.AND: 2,
    NodeKind.EQ: 3, NodeKind.NEQ: 3,
    NodeKind.GT: 4, NodeKind.GTE: 4, NodeKind.LT: 4, NodeKind.LTE: 4,
    NodeKind.PLUS: 5, NodeKind.MINUS: 5,
    NodeKind.TIMES: 6, NodeKind.DIVIDEDBY: 6,
    NodeKind.NOT: 7, NodeKind.NEGATE: 7,
}

STATEMENT_KINDS = {
    NodeKind.STATEMENT, NodeKind.ASSIGNMENT, NodeKind.IF, NodeKind.WHILE, NodeKind.BREAK,
}
CLAUSE_KINDS = {NodeKind.ELIF, NodeKind.ELSE}

# Kinds C++ evaluates as int or bool, outright or when all operands are.
INTEGRAL_RESULTS = {
    NodeKind.INTEGER, NodeKind.BOOLEAN,
    NodeKind.EQ, NodeKind.NEQ, NodeKind.GT, NodeKind.GTE, NodeKind.LT, NodeKind.LTE,
    NodeKind.AND, NodeKind.OR, NodeKind.NOT,
}
INTEGRAL_IF_OPERANDS = {NodeKind.PLUS, NodeKind.MINUS, NodeKind.TIMES, NodeKind.NEGATE}


class UnsupportedNode(ValueError):
    def __init__(self, node: Node, where: str):
        super().__init__(f"{node.kind} node cannot appear in {where} position")
        self.node = node


class BodyTranslator:
    def __init__(self):
        self.lines: List[str] = []

    def emit(self, s: str, depth: int):
        self.lines.append(INDENT * depth + s)

    def generate(self, root: Node) -> str:
        self.lines = []
        self.gen_stmt(root, 0)
        return "\n".join(self.lines)

    def gen_block(self, wrapper: Node, depth: int):
        for st in wrapper.block:
            self.gen_stmt(st, depth)

    def gen_stmt(self, st: Node, depth: int):
        kind = st.kind

        if kind is NodeKind.STATEMENT:
            self.gen_block(st, depth)

        elif kind is NodeKind.ASSIGNMENT:
            target, value = st.children
            self.emit(f"{target.literal_text} = {self.gen_expr(value)};", depth)

        elif kind is NodeKind.IF:
            cond, body, *clauses = st.children
            self.emit(f"if ({self.gen_expr(cond)}) {{", depth)
            self.gen_block(body, depth + 1)
            for clause in clauses:
                self.gen_clause(clause, depth)
            self.emit("}", depth)

        elif kind is NodeKind.WHILE:
            cond, body = st.children
            self.emit(f"while ({self.gen_expr(cond)}) {{", depth)
            self.gen_block(body, depth + 1)
            self.emit("}", depth)

        elif kind is NodeKind.BREAK:
            self.emit("break;", depth)

        else:
            raise UnsupportedNode(st, "statement")

    def gen_clause(self, clause: Node, depth: int):
        if clause.kind is NodeKind.ELIF:
            cond, body = clause.children
            self.emit(f"}} else if ({self.gen_expr(cond)}) {{", depth)
            self.gen_block(body, depth + 1)
        elif clause.kind is NodeKind.ELSE:
            (body,) = clause.children
            self.emit("} else {", depth)
            self.gen_block(body, depth + 1)
        else:
            raise UnsupportedNode(clause, "if-clause")

    # -------- expressions ----------
    def gen_expr(self, e: Node, outer: int = 0, right: bool = False) -> str:
        kind = e.kind

        if kind in LITERALS:
            return e.literal_text

        if kind in BINARY_OPS:
            prec = PRECEDENCE[kind]
            text = self.gen_binary(e, prec)
        elif kind in UNARY_OPS:
            prec = PRECEDENCE[kind]
            (operand,) = e.children
            inner = self.gen_expr(operand, prec)
            # keep "- -x" from collapsing into the decrement operator
            if kind is NodeKind.NEGATE and operand.kind is NodeKind.NEGATE:
                inner = f"({inner})"
            text = f"{CPP_OPERATORS[kind]}{inner}"
        else:
            raise UnsupportedNode(e, "expression")

        if prec < outer or (right and prec == outer):
            return f"({text})"
        return text

    def gen_binary(self, e: Node, prec: int) -> str:
        # Left-associative chains are walked down their left spine in a loop,
        # so "a + b + ... + z" does not recurse once per operator.
        spine: List[Node] = []
        base = e
        while base.kind in BINARY_OPS and PRECEDENCE[base.kind] == prec:
            spine.append(base)
            base = base.children[0]

        text = self.gen_expr(base, prec)
        integral = _is_integral(base)
        acc = base

        for node in reversed(spine):
            rhs = node.children[1]
            rhs_integral = _is_integral(rhs)

            # int / int truncates in C++; promote the dividend to double
            if node.kind is NodeKind.DIVIDEDBY and integral and rhs_integral:
                if acc.kind is NodeKind.INTEGER:
                    text = f"{text}.0"
                else:
                    inner = self.gen_expr(acc) if acc is base else text
                    text = f"static_cast<double>({inner})"

            text = f"{text} {CPP_OPERATORS[node.kind]} {self.gen_expr(rhs, prec, right=True)}"

            if node.kind in INTEGRAL_IF_OPERANDS:
                integral = integral and rhs_integral
            else:
                integral = node.kind in INTEGRAL_RESULTS
            acc = node

        return text


def _is_integral(node: Node) -> bool:
    """True when C++ would evaluate ``node`` as an int or bool, not a double."""
    stack = [node]
    while stack:
        n = stack.pop()
        if n.kind in INTEGRAL_RESULTS:
            continue
        if n.kind in INTEGRAL_IF_OPERANDS:
            stack.extend(n.children)
            continue
        return False
    return True


def translate_program(root: Node) -> str:
    return BodyTranslator().generate(root)
