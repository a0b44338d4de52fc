import logging
from typing import Optional

from grafter.spec import (
    CodeGeneratorProtocol,
    MatcherProtocol,
    TreeNode,
    UnavailableTreeError,
)
from .builder import MergedTreeBuilder
from .context import MergeResult, MergeSession
from .insertion import NewNodeInserter
from .triples import TripleBuilder

log = logging.getLogger(__name__)


class MergeOrchestrator:
    def __init__(self, matcher: MatcherProtocol, generator: CodeGeneratorProtocol):
        self.generator = generator
        self.triple_builder = TripleBuilder(matcher)
        self.tree_builder = MergedTreeBuilder()
        self.inserter = NewNodeInserter(matcher)

    def merge_trees(
        self,
        baseline: Optional[TreeNode],
        modified: Optional[TreeNode],
        patched: Optional[TreeNode],
    ) -> MergeResult:
        if baseline is None:
            raise UnavailableTreeError("baseline")
        if modified is None:
            raise UnavailableTreeError("modified")
        if patched is None:
            raise UnavailableTreeError("patched")

        session = MergeSession()
        self.triple_builder.build(baseline, modified, patched, session)
        merged = self.tree_builder.merge(baseline, session)
        merged = self.inserter.insert_new(modified, patched, merged, session)

        log.debug(
            f"Merge finished: {len(session.triples)} triples, "
            f"{session.inserted_count} inserted, "
            f"{session.deduplicated_count} deduplicated, "
            f"{len(session.divergences)} divergences, "
            f"{len(session.unanchored)} unanchored"
        )
        return MergeResult(tree=merged, session=session)

    def run(
        self,
        baseline: Optional[TreeNode],
        modified: Optional[TreeNode],
        patched: Optional[TreeNode],
    ) -> MergeResult:
        result = self.merge_trees(baseline, modified, patched)
        result.text = self.generator.generate(result.tree)
        return result

    def perform_merge(
        self,
        baseline: Optional[TreeNode],
        modified: Optional[TreeNode],
        patched: Optional[TreeNode],
    ) -> str:
        return self.run(baseline, modified, patched).text or ""
