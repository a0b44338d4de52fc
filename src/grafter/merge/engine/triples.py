from grafter.spec import MatcherProtocol, NodeTriple, TreeNode
from .context import MergeSession


class TripleBuilder:
    def __init__(self, matcher: MatcherProtocol):
        self.matcher = matcher

    def build(
        self,
        baseline: TreeNode,
        modified: TreeNode,
        patched: TreeNode,
        session: MergeSession,
    ) -> None:
        """
        Fills the session's triple map and both reverse maps.

        A baseline node gets a triple when it is the root or when at least
        one derived tree still has a counterpart for it. Nodes without any
        counterpart were deleted on both sides and are left out.
        """
        mod_mapping = self.matcher.match(baseline, modified)
        pat_mapping = self.matcher.match(baseline, patched)

        for base_node in baseline.pre_order():
            mod_node = mod_mapping.get_dst(base_node)
            pat_node = pat_mapping.get_dst(base_node)

            if mod_node is not None:
                session.modified_to_baseline[mod_node] = base_node
            if pat_node is not None:
                session.patched_to_baseline[pat_node] = base_node

            if base_node is baseline or mod_node is not None or pat_node is not None:
                session.triples[base_node] = NodeTriple(base_node, mod_node, pat_node)
