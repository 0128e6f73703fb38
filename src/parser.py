from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ast_nodes import Node, NodeKind, leaf, operator, statements
from errors import ParseError
from lexer import PyLexer
from symbols import CPP_RESERVED, SymbolTable
from translate import translate_program

log = logging.getLogger(__name__)

COMPARISONS = {
    "EQ": NodeKind.EQ, "NEQ": NodeKind.NEQ,
    "GT": NodeKind.GT, "GTE": NodeKind.GTE,
    "LT": NodeKind.LT, "LTE": NodeKind.LTE,
}
ADDITIVE = {"PLUS": NodeKind.PLUS, "MINUS": NodeKind.MINUS}
MULTIPLICATIVE = {"TIMES": NodeKind.TIMES, "DIVIDEDBY": NodeKind.DIVIDEDBY}


@dataclass
class ParseResult:
    root: Node
    program_text: str
    symbols: SymbolTable


class TokenStream:
    def __init__(self, tokens: List[dict]):
        self.tokens = tokens
        self.i = 0

    def peek(self, k: int = 0) -> Optional[dict]:
        j = self.i + k
        if j >= len(self.tokens):
            return None
        return self.tokens[j]

    def at_end(self) -> bool:
        return self.i >= len(self.tokens)

    def advance(self) -> Optional[dict]:
        tok = self.peek()
        if tok is not None:
            self.i += 1
        return tok

    def check(self, *types: str) -> bool:
        tok = self.peek()
        return tok is not None and tok["type"] in types

    def match(self, *types: str) -> Optional[dict]:
        if self.check(*types):
            return self.advance()
        return None

    def expect(self, ttype: str) -> dict:
        tok = self.peek()
        if not tok or tok["type"] != ttype:
            line = tok["line"] if tok else -1
            col = tok["column"] if tok else -1
            got = tok["type"] if tok else "EOF"
            raise ParseError(f"Expected {ttype}, got {got}", line, col)
        return self.advance()


def _loc(tok: dict):
    return {"line": tok["line"], "column": tok["column"]}


class Parser:
    def __init__(self, tokens: List[dict]):
        self.ts = TokenStream(tokens)
        self.symbols = SymbolTable()

    def define(self, tok: dict):
        name = tok["value"]
        if name in CPP_RESERVED:
            raise ParseError(f"'{name}' is reserved in C++ and cannot be a variable name",
                             tok["line"], tok["column"])
        self.symbols.define(name)

    def parse_program(self) -> Node:
        items: List[Node] = []
        while not self.ts.at_end():
            items.append(self.parse_stmt())
        return statements(items, line=1, column=1)

    # ---------------- STATEMENTS ----------------
    def parse_block(self) -> Node:
        start = self.ts.expect("INDENT")
        items: List[Node] = []
        while not self.ts.match("DEDENT"):
            items.append(self.parse_stmt())
        return statements(items, **_loc(start))

    def parse_suite(self) -> Node:
        # ':' NEWLINE INDENT stmt+ DEDENT
        self.ts.expect("COLON")
        self.ts.expect("NEWLINE")
        return self.parse_block()

    def parse_stmt(self) -> Node:
        tok = self.ts.peek()
        if not tok:
            raise ParseError("Unexpected EOF", -1, -1)

        ttype = tok["type"]

        if ttype == "IF":
            return self.parse_if()

        if ttype == "WHILE":
            return self.parse_while()

        if ttype == "BREAK":
            t = self.ts.advance()
            self.ts.expect("NEWLINE")
            return Node(NodeKind.BREAK, **_loc(t))

        # lookahead: IDENTIFIER ASSIGN
        if ttype == "IDENTIFIER" and self.ts.peek(1) and self.ts.peek(1)["type"] == "ASSIGN":
            return self.parse_assignment()

        raise ParseError(f"Unexpected token {ttype} at start of statement", tok["line"], tok["column"])

    def parse_assignment(self) -> Node:
        name_tok = self.ts.expect("IDENTIFIER")
        self.ts.expect("ASSIGN")
        value = self.parse_expr()
        self.ts.expect("NEWLINE")
        self.define(name_tok)
        target = leaf(NodeKind.IDENTIFIER, name_tok["value"], **_loc(name_tok))
        return operator(NodeKind.ASSIGNMENT, target, value, **_loc(name_tok))

    def parse_if(self) -> Node:
        t = self.ts.expect("IF")
        cond = self.parse_expr()
        body = self.parse_suite()
        node = operator(NodeKind.IF, cond, body, **_loc(t))

        while self.ts.check("ELIF"):
            t_elif = self.ts.advance()
            elif_cond = self.parse_expr()
            elif_body = self.parse_suite()
            node.children.append(operator(NodeKind.ELIF, elif_cond, elif_body, **_loc(t_elif)))

        t_else = self.ts.match("ELSE")
        if t_else:
            node.children.append(operator(NodeKind.ELSE, self.parse_suite(), **_loc(t_else)))

        return node

    def parse_while(self) -> Node:
        t = self.ts.expect("WHILE")
        cond = self.parse_expr()
        body = self.parse_suite()
        return operator(NodeKind.WHILE, cond, body, **_loc(t))

    # ---------------- EXPRESSIONS (precedence) ----------------
    def parse_expr(self) -> Node:
        return self.parse_or()

    def _left_assoc(self, operand: Callable[[], Node], ops: Dict[str, NodeKind]) -> Node:
        expr = operand()
        while self.ts.check(*ops):
            op_tok = self.ts.advance()
            rhs = operand()
            expr = operator(ops[op_tok["type"]], expr, rhs, **_loc(op_tok))
        return expr

    def parse_or(self) -> Node:
        return self._left_assoc(self.parse_and, {"OR": NodeKind.OR})

    def parse_and(self) -> Node:
        return self._left_assoc(self.parse_not, {"AND": NodeKind.AND})

    def parse_not(self) -> Node:
        op_tok = self.ts.match("NOT")
        if op_tok:
            return operator(NodeKind.NOT, self.parse_not(), **_loc(op_tok))
        return self.parse_comparison()

    def parse_comparison(self) -> Node:
        expr = self.parse_additive()
        if self.ts.check(*COMPARISONS):
            op_tok = self.ts.advance()
            rhs = self.parse_additive()
            expr = operator(COMPARISONS[op_tok["type"]], expr, rhs, **_loc(op_tok))
            if self.ts.check(*COMPARISONS):
                tok = self.ts.peek()
                raise ParseError("Comparison operators cannot be chained", tok["line"], tok["column"])
        return expr

    def parse_additive(self) -> Node:
        return self._left_assoc(self.parse_multiplicative, ADDITIVE)

    def parse_multiplicative(self) -> Node:
        return self._left_assoc(self.parse_unary, MULTIPLICATIVE)

    def parse_unary(self) -> Node:
        op_tok = self.ts.match("MINUS")
        if op_tok:
            return operator(NodeKind.NEGATE, self.parse_unary(), **_loc(op_tok))
        return self.parse_primary()

    def parse_primary(self) -> Node:
        tok = self.ts.peek()
        if not tok:
            raise ParseError("Unexpected EOF in expression", -1, -1)

        if self.ts.match("INTEGER"):
            return leaf(NodeKind.INTEGER, tok["value"], **_loc(tok))

        if self.ts.match("FLOAT"):
            return leaf(NodeKind.FLOAT, tok["value"], **_loc(tok))

        if self.ts.match("BOOLEAN"):
            text = "true" if tok["value"] == "True" else "false"
            return leaf(NodeKind.BOOLEAN, text, **_loc(tok))

        if self.ts.match("IDENTIFIER"):
            self.define(tok)
            return leaf(NodeKind.IDENTIFIER, tok["value"], **_loc(tok))

        if self.ts.match("LPAREN"):
            expr = self.parse_expr()
            self.ts.expect("RPAREN")
            return expr

        raise ParseError(f"Unexpected token {tok['type']} in expression", tok["line"], tok["column"])


def parse(text: str) -> ParseResult:
    """Parse program text into its AST, translated C++ body and symbol table.

    Raises ParseError (or LexError) when the text is not a valid program;
    nothing is returned in that case.
    """
    tokens = PyLexer().tokenize(text)
    parser = Parser(tokens)
    try:
        root = parser.parse_program()
        program_text = translate_program(root)
    except RecursionError:
        raise ParseError("Expression nesting too deep", -1, -1) from None
    log.debug("parsed %d top-level statements, %d symbols", len(root.block), len(parser.symbols))
    return ParseResult(root=root, program_text=program_text, symbols=parser.symbols)
