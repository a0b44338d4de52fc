import logging
from typing import Dict, List, Optional, Set

from grafter.common import bus
from grafter.needle import L
from grafter.spec import MatcherProtocol, TreeNode
from .context import MergeSession, UnanchoredNode
from .decision import identical

log = logging.getLogger(__name__)


class NewNodeInserter:
    """
    Brings nodes that only exist in the modified or patched tree into the
    merged tree, below the merged counterpart of their nearest ancestor
    that existed in the baseline.
    """

    def __init__(self, matcher: MatcherProtocol):
        self.matcher = matcher

    def collect_top_most_unmatched(
        self, source: TreeNode, merged: TreeNode
    ) -> List[TreeNode]:
        mapping = self.matcher.match(source, merged)
        return [
            node
            for node in source.pre_order()
            if not mapping.has_src(node)
            and (node.parent is None or mapping.has_src(node.parent))
        ]

    def find_anchor(
        self,
        node: TreeNode,
        to_baseline: Dict[TreeNode, TreeNode],
        session: MergeSession,
    ) -> Optional[TreeNode]:
        for ancestor in node.ancestors():
            base_node = to_baseline.get(ancestor)
            if base_node is not None:
                return session.baseline_to_merged.get(base_node)
        return None

    def insert_new(
        self,
        modified: TreeNode,
        patched: TreeNode,
        merged: TreeNode,
        session: MergeSession,
    ) -> TreeNode:
        unmatched_mod = self.collect_top_most_unmatched(modified, merged)
        unmatched_pat = self.collect_top_most_unmatched(patched, merged)
        bus.debug(
            L.merge.insert.unmatched,
            modified=len(unmatched_mod),
            patched=len(unmatched_pat),
        )

        plan: Dict[TreeNode, List[TreeNode]] = {}
        duplicates: Set[TreeNode] = set()

        for mod_node in unmatched_mod:
            anchor = self.find_anchor(mod_node, session.modified_to_baseline, session)
            if anchor is None:
                self._report_unanchored(mod_node, "modified", session)
                continue
            plan.setdefault(anchor, []).append(mod_node)

            twin = next(
                (
                    p
                    for p in unmatched_pat
                    if p not in duplicates and identical(mod_node, p)
                ),
                None,
            )
            if twin is not None:
                duplicates.add(twin)
                session.deduplicated_count += 1

        for pat_node in unmatched_pat:
            if pat_node in duplicates:
                continue
            anchor = self.find_anchor(pat_node, session.patched_to_baseline, session)
            if anchor is None:
                self._report_unanchored(pat_node, "patched", session)
                continue
            plan.setdefault(anchor, []).append(pat_node)

        if not plan:
            return merged
        return self._apply(merged, plan, session)

    def _report_unanchored(
        self, node: TreeNode, origin: str, session: MergeSession
    ) -> None:
        session.unanchored.append(UnanchoredNode(node=node, origin=origin))
        log.debug(f"No baseline ancestor for {origin} node:\n{node.to_tree_string()}")
        bus.warning(L.merge.insert.unanchored, origin=origin, node=node.describe())

    def _apply(
        self,
        merged: TreeNode,
        plan: Dict[TreeNode, List[TreeNode]],
        session: MergeSession,
    ) -> TreeNode:
        # The merged tree is rebuilt bottom-up so every anchor gets its new
        # children appended after the ones it already has.
        replacements: Dict[TreeNode, TreeNode] = {}
        for node in merged.post_order():
            children = [replacements[child] for child in node.children]
            for new_node in plan.get(node, ()):
                children.append(new_node.deep_copy())
                session.inserted_count += 1
            replacements[node] = node.with_children(children)

        session.baseline_to_merged = {
            base: replacements[node]
            for base, node in session.baseline_to_merged.items()
            if node in replacements
        }
        return replacements[merged]
