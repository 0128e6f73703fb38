from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Set

# Every variable in a translated program is declared with this C++ type.
CPP_VAR_TYPE = "double"

# Names that cannot be declared as a C++ variable. `std` is included because the
# diagnostic prints go through std::cout.
CPP_RESERVED = frozenset({
    "alignas", "alignof", "and", "and_eq", "asm", "auto", "bitand", "bitor", "bool",
    "break", "case", "catch", "char", "char8_t", "char16_t", "char32_t", "class",
    "compl", "concept", "const", "consteval", "constexpr", "constinit", "const_cast",
    "continue", "co_await", "co_return", "co_yield", "decltype", "default", "delete",
    "do", "double", "dynamic_cast", "else", "enum", "explicit", "export", "extern",
    "false", "float", "for", "friend", "goto", "if", "inline", "int", "long",
    "mutable", "namespace", "new", "noexcept", "not", "not_eq", "nullptr", "operator",
    "or", "or_eq", "private", "protected", "public", "register", "reinterpret_cast",
    "requires", "return", "short", "signed", "sizeof", "static", "static_assert",
    "static_cast", "struct", "switch", "template", "this", "thread_local", "throw",
    "true", "try", "typedef", "typeid", "typename", "union", "unsigned", "using",
    "virtual", "void", "volatile", "wchar_t", "while", "xor", "xor_eq", "std",
})


@dataclass
class SymbolTable:
    names: Set[str] = field(default_factory=set)

    @classmethod
    def of(cls, names: Iterable[str]) -> "SymbolTable":
        table = cls()
        for name in names:
            table.define(name)
        return table

    def define(self, name: str) -> bool:
        if name in self.names:
            return False
        self.names.add(name)
        return True

    def ordered(self) -> List[str]:
        return sorted(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names
