from enum import Enum
from typing import Optional

from grafter.spec import NodeTriple, TreeNode


class Decision(str, Enum):
    UNCHANGED = "UNCHANGED"  # neither side changed
    TAKE_PATCHED = "TAKE_PATCHED"  # only patched changed
    TAKE_MODIFIED = "TAKE_MODIFIED"  # only modified changed
    CONVERGENT = "CONVERGENT"  # both sides made the same change
    DIVERGENT = "DIVERGENT"  # both changed differently; baseline is kept


def identical(a: Optional[TreeNode], b: Optional[TreeNode]) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return a.is_isomorphic_to(b)


def classify(triple: NodeTriple) -> Decision:
    base, mod, pat = triple.baseline, triple.modified, triple.patched
    base_mod_same = identical(base, mod)
    base_pat_same = identical(base, pat)

    if base_mod_same and base_pat_same:
        return Decision.UNCHANGED
    if base_mod_same:
        return Decision.TAKE_PATCHED
    if base_pat_same:
        return Decision.TAKE_MODIFIED
    if mod is not None and identical(mod, pat):
        return Decision.CONVERGENT
    return Decision.DIVERGENT


def select(triple: NodeTriple, decision: Decision) -> TreeNode:
    if decision is Decision.TAKE_PATCHED:
        return triple.patched or triple.baseline
    if decision in (Decision.TAKE_MODIFIED, Decision.CONVERGENT):
        return triple.modified or triple.baseline
    return triple.baseline


def decide(triple: NodeTriple, decision: Optional[Decision] = None) -> TreeNode:
    """
    Picks the version whose content represents this baseline position.

    The result is always a fresh childless node; children are resolved by
    the tree builder. Callers that already classified the triple pass the
    decision along.
    """
    return select(triple, decision or classify(triple)).content_copy()
