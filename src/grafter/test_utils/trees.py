from typing import Optional

from grafter.spec import Correspondence, TreeNode


def n(
    type: str,
    label: Optional[str] = None,
    *children: TreeNode,
    role: Optional[str] = None,
) -> TreeNode:
    """Shorthand for building small trees in tests."""
    return TreeNode(type, label, children, role)


class LabelMatcher:
    """
    Matches nodes with equal type and label, first come first served in
    pre-order. Gives tests a predictable matching without the heuristics
    of the real matcher.
    """

    def match(self, src: TreeNode, dst: TreeNode) -> Correspondence:
        mapping = Correspondence()
        candidates = list(dst.pre_order())
        for s in src.pre_order():
            for d in candidates:
                if (s.type, s.label) == (d.type, d.label) and mapping.add(s, d):
                    break
        return mapping
