from typing import Any, Dict, List, Set, Tuple, cast

import libcst as cst

from grafter.spec import SEQUENCE_ROLES, RenderError, TreeNode


class PythonCodeGenerator:
    """Renders a TreeNode produced by PythonTreeParser back to Python source."""

    def generate(self, tree: TreeNode) -> str:
        if tree.type != "Module":
            raise RenderError(f"Expected a Module at the root, got '{tree.type}'.")
        return cast(cst.Module, self.build(tree)).code

    def build(self, node: TreeNode) -> cst.CSTNode:
        node_class = getattr(cst, node.type, None)
        if not (isinstance(node_class, type) and issubclass(node_class, cst.CSTNode)):
            raise RenderError(f"Unknown libcst node type '{node.type}'.")

        kwargs: Dict[str, Any] = {}
        sequences: Tuple[str, ...] = ()
        for key, value in node.attrs:
            if key == SEQUENCE_ROLES:
                sequences = value
            else:
                kwargs[key] = value
        if node.label is not None:
            kwargs["value"] = node.label

        collected: Dict[str, List[cst.CSTNode]] = {name: [] for name in sequences}
        singles: Set[str] = set()
        for child in node.children:
            role = child.role
            if role is None:
                raise RenderError(f"A child of {node.type} has no field role.")
            built = self.build(child)
            if role in collected:
                collected[role].append(built)
            elif role in singles:
                raise RenderError(
                    f"Field '{role}' of {node.type} received more than one node."
                )
            else:
                # Child nodes take precedence over placeholder attributes
                # such as a None comment or a MaybeSentinel comma.
                kwargs[role] = built
                singles.add(role)

        for name, items in collected.items():
            kwargs[name] = tuple(items)

        try:
            return node_class(**kwargs)
        except (TypeError, cst.CSTValidationError) as e:
            raise RenderError(f"Cannot build {node.type}: {e}") from e


class TreeStringGenerator:
    """Language-independent debug rendering: one indented line per node."""

    def generate(self, tree: TreeNode) -> str:
        return tree.to_tree_string() + "\n"
