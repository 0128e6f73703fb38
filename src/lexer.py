import logging
import sys

import ply.lex as lex
from ply.lex import TOKEN

from errors import LexError

log = logging.getLogger(__name__)

DIGITS = r'\d(?:_?\d)*'
EXPONENT = r'[eE][+-]?' + DIGITS
FLOAT = (r'(?:' + DIGITS + r'\.(?:' + DIGITS + r')?|\.' + DIGITS + r')(?:' + EXPONENT + r')?'
         + r'|' + DIGITS + EXPONENT)

# Python keywords outside the supported subset; rejected rather than read as names.
UNSUPPORTED_KEYWORDS = frozenset({
    'None', 'as', 'assert', 'async', 'await', 'class', 'continue',
    'def', 'del', 'except', 'finally', 'for', 'from', 'global',
    'import', 'in', 'is', 'lambda', 'nonlocal', 'pass', 'raise',
    'return', 'try', 'with', 'yield',
})


class PyLexer:

    tokens = (
        # Keywords
        'AND', 'BREAK', 'ELIF', 'ELSE', 'IF', 'NOT', 'OR', 'WHILE',

        # Identifiers and values
        'IDENTIFIER', 'FLOAT', 'INTEGER', 'BOOLEAN',

        # Two-character operators
        'EQ', 'NEQ', 'GTE', 'LTE',

        # Single-character operators
        'ASSIGN', 'PLUS', 'MINUS', 'TIMES', 'DIVIDEDBY', 'GT', 'LT',

        # Punctuation
        'LPAREN', 'RPAREN', 'COLON',

        # Layout
        'NEWLINE', 'INDENT', 'DEDENT',
    )

    reserved = {
        'and': 'AND',
        'break': 'BREAK',
        'elif': 'ELIF',
        'else': 'ELSE',
        'if': 'IF',
        'not': 'NOT',
        'or': 'OR',
        'while': 'WHILE',
        'True': 'BOOLEAN',
        'False': 'BOOLEAN',
    }

    # Ignored characters (leading indentation is captured by t_NEWLINE)
    t_ignore = ' \t\r'

    t_EQ = r'=='
    t_NEQ = r'!='
    t_GTE = r'>='
    t_LTE = r'<='

    t_ASSIGN = r'='
    t_PLUS = r'\+'
    t_MINUS = r'-'
    t_TIMES = r'\*'
    t_DIVIDEDBY = r'/'
    t_GT = r'>'
    t_LT = r'<'

    t_LPAREN = r'\('
    t_RPAREN = r'\)'
    t_COLON = r':'

    def __init__(self):
        self.lexer = None

    def t_COMMENT(self, t):
        r'\#[^\n]*'
        pass

    # A run of line breaks plus the indentation of the line that follows
    def t_NEWLINE(self, t):
        r'(?:\n[ \t\r]*)+'
        t.lexer.lineno += t.value.count('\n')
        t.value = len(t.value.rsplit('\n', 1)[1].replace('\r', ''))
        return t

    @TOKEN(FLOAT)
    def t_FLOAT(self, t):
        t.value = t.value.replace('_', '')
        return t

    @TOKEN(DIGITS)
    def t_INTEGER(self, t):
        t.value = t.value.replace('_', '')
        return t

    def t_IDENTIFIER(self, t):
        r'[a-zA-Z_][a-zA-Z_0-9]*'
        if t.value in UNSUPPORTED_KEYWORDS:
            raise LexError(f"Unsupported keyword '{t.value}'", t.lineno, _column(t.lexer.lexdata, t.lexpos))
        t.type = self.reserved.get(t.value, 'IDENTIFIER')
        return t

    def t_error(self, t):
        data = t.lexer.lexdata
        raise LexError(f"Illegal character '{t.value[0]}'", t.lexer.lineno, _column(data, t.lexpos))

    def build(self, **kwargs):
        """Build the lexer"""
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    def tokenize(self, data):
        if not self.lexer:
            self.build()

        # The leading newline lets t_NEWLINE measure the first line's indentation.
        data = '\n' + data
        self.lexer.lineno = 0
        self.lexer.input(data)
        raw = []

        while True:
            tok = self.lexer.token()
            if not tok:
                break

            raw.append({
                'line': tok.lineno,
                'column': _column(data, tok.lexpos),
                'type': tok.type,
                'value': tok.value,
                'lexpos': tok.lexpos
            })

        tokens = self._layout(raw)
        log.debug("lexed %d tokens", len(tokens))
        return tokens

    def _layout(self, raw):
        """Collapse blank lines and turn indentation changes into INDENT/DEDENT."""
        out = []
        stack = [0]
        pending = None

        for tok in raw:
            if tok['type'] == 'NEWLINE':
                pending = tok
                continue

            if pending is not None:
                if out:
                    out.append(_marker('NEWLINE', pending, '\n'))
                width = pending['value']
                if width > stack[-1]:
                    stack.append(width)
                    out.append(_marker('INDENT', tok))
                else:
                    while width < stack[-1]:
                        stack.pop()
                        out.append(_marker('DEDENT', tok))
                    if width != stack[-1]:
                        raise LexError("Unindent does not match any outer indentation level",
                                       tok['line'], tok['column'])
                pending = None

            out.append(tok)

        if out:
            end = pending or out[-1]
            out.append(_marker('NEWLINE', end, '\n'))
            while len(stack) > 1:
                stack.pop()
                out.append(_marker('DEDENT', end))

        return out

    def tokenize_file(self, filename):
        """Tokenize from file"""
        with open(filename, 'r', encoding='utf-8') as f:
            data = f.read()
        return self.tokenize(data)


def _column(data, lexpos):
    line_start = data.rfind('\n', 0, lexpos) + 1
    return lexpos - line_start + 1


def _marker(ttype, at, value=''):
    return {
        'line': at['line'],
        'column': at['column'],
        'type': ttype,
        'value': value,
        'lexpos': at['lexpos'],
    }


def print_tokens(tokens, out=None):
    out = out or sys.stdout
    if not tokens:
        print("No tokens found!", file=out)
        return

    print(f"{'Line':<6}| {'Column':<7}| {'Token':<12}| Value", file=out)
    print("-" * 60, file=out)

    for tok in tokens:
        value = str(tok['value'])
        # Display escape characters
        value = repr(value)[1:-1] if '\n' in value or '\t' in value else value

        print(f"{tok['line']:<6}| {tok['column']:<7}| {tok['type']:<12}| {value}", file=out)
