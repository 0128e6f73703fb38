from __future__ import annotations
from typing import List, Optional

from ast_nodes import Node, walk

DEFAULT_ANCHOR = "program"
VALUE_PREFIX = "value"


class IdMinter:
    """Hands out node identifiers for one rendering run.

    The suffix counter only ever grows, so two nodes with the same kind or
    the same literal text still get distinct identifiers.
    """

    def __init__(self, start: int = 0):
        self.next_id = start

    def mint(self, prefix: str) -> str:
        ident = f"{prefix}{self.next_id}"
        self.next_id += 1
        return ident


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


class DotGraphGen:
    def __init__(self, anchor: str = DEFAULT_ANCHOR):
        self.anchor = anchor
        self.lines: List[str] = []
        self.ids = IdMinter()

    def emit(self, s: str):
        self.lines.append(f"  {s}")

    def generate(self, root: Optional[Node]) -> str:
        self.lines = []
        self.ids = IdMinter()
        walk(root, self.anchor, self._enter)
        return "\n".join(["digraph G {", *self.lines, "}"]) + "\n"

    def _enter(self, node: Node, parent: str) -> str:
        kind = str(node.kind)
        node_id = self.ids.mint(kind)
        self.emit(f'{node_id} [label="{_escape(kind)}"];')
        self.emit(f"{parent} -> {node_id};")

        # The literal gets its own node so kind and value render separately.
        if node.literal_text:
            value_id = self.ids.mint(VALUE_PREFIX)
            self.emit(f'{value_id} [label="{_escape(node.literal_text)}"];')
            self.emit(f"{node_id} -> {value_id};")

        return node_id
