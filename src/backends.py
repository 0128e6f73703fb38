from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Dict, Type

from codegen_cpp import CppCodeGen
from graph_dot import DEFAULT_ANCHOR, DotGraphGen
from parser import ParseResult

log = logging.getLogger(__name__)


class UnknownBackend(KeyError):
    pass


class Backend(ABC):
    name: str = ""

    @abstractmethod
    def render(self, result: ParseResult) -> str:
        """Render one parse result as a complete output document."""


class CppBackend(Backend):
    name = "cpp"

    def render(self, result: ParseResult) -> str:
        log.debug("emitting C++ for %d symbols", len(result.symbols))
        return CppCodeGen().generate(result.symbols, result.program_text)


class DotBackend(Backend):
    name = "dot"

    def __init__(self, anchor: str = DEFAULT_ANCHOR):
        self.anchor = anchor

    def render(self, result: ParseResult) -> str:
        log.debug("emitting DOT graph anchored at %r", self.anchor)
        return DotGraphGen(self.anchor).generate(result.root)


BACKENDS: Dict[str, Type[Backend]] = {
    CppBackend.name: CppBackend,
    DotBackend.name: DotBackend,
}


def get_backend(name: str) -> Backend:
    try:
        return BACKENDS[name]()
    except KeyError:
        raise UnknownBackend(name) from None
