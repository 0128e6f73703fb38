class ParseError(Exception):
    def __init__(self, message: str, line: int, col: int):
        super().__init__(f"ParseError at {line}:{col} - {message}")
        self.message = message
        self.line = line
        self.col = col


class LexError(ParseError):
    """Raised by the lexer for input it cannot turn into tokens."""
