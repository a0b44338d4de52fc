from typing import List

from grafter.common import bus
from grafter.needle import L
from grafter.spec import NodeTriple, TreeNode
from .context import Divergence, MergeSession
from .decision import Decision, classify, decide


def _discards_an_edit(triple: NodeTriple) -> bool:
    # Ancestors of a conflicting leaf are "divergent" too, but their own
    # content is unchanged; only report positions whose content is lost.
    base = triple.baseline
    for side in (triple.modified, triple.patched):
        if side is None or not base.has_same_content(side):
            return True
    return False


class MergedTreeBuilder:
    def merge(self, baseline_root: TreeNode, session: MergeSession) -> TreeNode:
        return self._merge_node(baseline_root, session)

    def _merge_node(self, base: TreeNode, session: MergeSession) -> TreeNode:
        triple = session.triples.get(base) or NodeTriple(base, base, base)
        decision = classify(triple)
        chosen = decide(triple, decision)

        merged_children: List[TreeNode] = []
        for index, base_child in enumerate(base.children):
            if base_child not in session.triples:
                # Deleted in both derived versions.
                continue
            merged_child = self._merge_node(base_child, session)
            merged_children.insert(min(index, len(merged_children)), merged_child)

        merged = chosen.with_children(merged_children)
        session.baseline_to_merged[base] = merged

        if decision is Decision.DIVERGENT and _discards_an_edit(triple):
            session.divergences.append(
                Divergence(base, triple.modified, triple.patched)
            )
            bus.warning(
                L.merge.decision.divergent,
                node=base.describe(),
                modified=triple.modified.describe() if triple.modified else "<deleted>",
                patched=triple.patched.describe() if triple.patched else "<deleted>",
            )
        return merged
