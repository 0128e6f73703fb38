from __future__ import annotations
from typing import Iterable, List

from symbols import CPP_VAR_TYPE

PROLOGUE = ("#include <iostream>", "int main() {")
EPILOGUE = "}"
BEGIN_MARKER = "/* Begin program */"
END_MARKER = "/* End program */"


class CppCodeGen:
    def __init__(self):
        self.lines: List[str] = []

    def emit(self, s: str):
        self.lines.append(s)

    def generate(self, symbols: Iterable[str], program_text: str) -> str:
        self.lines = []
        names = sorted(set(symbols))

        for line in PROLOGUE:
            self.emit(line)

        # Every variable is a double, used or not.
        for name in names:
            self.emit(f"{CPP_VAR_TYPE} {name};")

        self.emit("")
        self.emit(BEGIN_MARKER)
        self.emit("")
        self.emit(program_text)
        self.emit(END_MARKER)
        self.emit("")

        for name in names:
            self.emit(f'std::cout << "{name}: " << {name} << std::endl;')

        self.emit(EPILOGUE)
        return "\n".join(self.lines) + "\n"
