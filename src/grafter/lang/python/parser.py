import dataclasses
from pathlib import Path
from typing import Any, List, Optional, Tuple

import libcst as cst

from grafter.common import bus
from grafter.needle import L
from grafter.spec import SEQUENCE_ROLES, TreeNode


class PythonTreeParser:
    """
    Parses Python source with libcst and converts the concrete syntax tree
    into generic TreeNodes.

    Every libcst field is kept: node fields become children whose role is
    the field name, sequence fields become runs of children sharing a role,
    and scalar fields become node attributes. A string `value` field is the
    node's label. Nothing is lost, so the tree can be rendered back to the
    exact source.
    """

    def parse(self, source_code: str) -> Optional[TreeNode]:
        if not source_code.strip():
            bus.warning(L.parser.empty_source)
            return None
        try:
            module = cst.parse_module(source_code)
        except cst.ParserSyntaxError as e:
            bus.error(L.parser.syntax_error, error=str(e))
            return None
        return self.convert(module)

    def parse_file(self, path: Path) -> Optional[TreeNode]:
        if not path.is_file():
            bus.warning(L.parser.missing_file, path=str(path))
            return None
        return self.parse(path.read_text(encoding="utf-8"))

    def convert(self, node: cst.CSTNode, role: Optional[str] = None) -> TreeNode:
        label: Optional[str] = None
        children: List[TreeNode] = []
        attrs: List[Tuple[str, Any]] = []
        sequences: List[str] = []

        for field in dataclasses.fields(node):
            value = getattr(node, field.name)
            if isinstance(value, cst.CSTNode):
                children.append(self.convert(value, field.name))
            elif isinstance(value, (list, tuple)):
                sequences.append(field.name)
                children.extend(self.convert(item, field.name) for item in value)
            elif field.name == "value" and isinstance(value, str):
                label = value
            else:
                attrs.append((field.name, value))

        attrs.append((SEQUENCE_ROLES, tuple(sequences)))
        return TreeNode(type(node).__name__, label, children, role, tuple(attrs))
