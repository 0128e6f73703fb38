import logging
import os
import sys

from backends import BACKENDS, UnknownBackend, get_backend
from errors import ParseError
from lexer import PyLexer, print_tokens
from parser import parse

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_PARSE_FAILURE = 2

LOG_LEVEL_ENV = "PY2CPP_LOG_LEVEL"


def read_input(argv):
    if len(argv) == 2:
        with open(argv[1], "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def usage():
    print("Usage:", file=sys.stderr)
    print("  python main.py cpp < input.py", file=sys.stderr)
    print("  python main.py dot < input.py", file=sys.stderr)
    print("  python main.py lex < input.py", file=sys.stderr)
    print("  or:", file=sys.stderr)
    print("  python main.py cpp file.py", file=sys.stderr)
    print("  python main.py dot file.py", file=sys.stderr)
    print("  python main.py lex file.py", file=sys.stderr)


def configure_logging():
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")
    return level


def run(mode, data, out=None):
    out = out or sys.stdout

    if mode == "lex":
        try:
            tokens = PyLexer().tokenize(data)
        except ParseError as e:
            print(str(e), file=sys.stderr)
            return EXIT_PARSE_FAILURE
        print_tokens(tokens, out)
        return EXIT_OK

    backend = get_backend(mode)

    # parse
    try:
        result = parse(data)
    except ParseError as e:
        log.debug("parse failed, %s backend not run", mode)
        print(str(e), file=sys.stderr)
        return EXIT_PARSE_FAILURE

    out.write(backend.render(result))
    return EXIT_OK


def main(argv=None):
    argv = sys.argv[1:] if argv is None else list(argv)
    configure_logging()

    if not 1 <= len(argv) <= 2:
        usage()
        return EXIT_USAGE

    mode = argv[0].lower()
    if mode != "lex" and mode not in BACKENDS:
        usage()
        return EXIT_USAGE

    try:
        data = read_input(argv)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        return run(mode, data)
    except UnknownBackend:
        usage()
        return EXIT_USAGE


def cpp_main():
    sys.exit(main(["cpp", *sys.argv[1:]]))


def dot_main():
    sys.exit(main(["dot", *sys.argv[1:]]))


if __name__ == "__main__":
    sys.exit(main())
