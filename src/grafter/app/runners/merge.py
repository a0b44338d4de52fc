from pathlib import Path
from typing import Optional

from grafter.app.fences import strip_code_fences
from grafter.app.versions import GitVersionSource, apply_patch
from grafter.common import TransactionManager, bus
from grafter.merge import MergeOrchestrator, MergeResult
from grafter.needle import L
from grafter.spec import (
    CodeGeneratorProtocol,
    GrafterError,
    MatcherProtocol,
    TreeParserProtocol,
    UnavailableTreeError,
)


class MergeRunner:
    def __init__(
        self,
        root_path: Path,
        parser: TreeParserProtocol,
        generator: CodeGeneratorProtocol,
        matcher: MatcherProtocol,
    ):
        self.root_path = root_path
        self.parser = parser
        self.orchestrator = MergeOrchestrator(matcher, generator)

    def merge_sources(
        self, baseline_text: str, modified_text: str, patched_text: str
    ) -> MergeResult:
        trees = {}
        for version, text in (
            ("baseline", baseline_text),
            ("modified", modified_text),
            ("patched", patched_text),
        ):
            tree = self.parser.parse(text)
            if tree is None:
                raise UnavailableTreeError(version)
            trees[version] = tree

        result = self.orchestrator.run(
            trees["baseline"], trees["modified"], trees["patched"]
        )
        result.text = strip_code_fences(result.text or "")
        return result

    def run_merge(
        self,
        baseline_path: Path,
        modified_path: Path,
        patched_path: Path,
        output: Optional[Path] = None,
    ) -> Optional[MergeResult]:
        try:
            bus.info(L.merge.run.start, path=str(modified_path))
            result = self.merge_sources(
                baseline_path.read_text(encoding="utf-8"),
                modified_path.read_text(encoding="utf-8"),
                patched_path.read_text(encoding="utf-8"),
            )
            self._finish(result, output)
            return result
        except (GrafterError, OSError) as e:
            bus.error(L.error.generic, error=str(e))
            return None

    def run_patch_merge(
        self,
        modified_path: Path,
        diff_text: str,
        baseline_rev: str = "HEAD",
        output: Optional[Path] = None,
    ) -> Optional[MergeResult]:
        try:
            bus.info(L.merge.run.start, path=str(modified_path))
            source = GitVersionSource.discover(modified_path.resolve().parent)
            baseline_text = source.read_at(baseline_rev, modified_path)
            bus.debug(L.merge.run.baseline_loaded, rev=baseline_rev)
            patched_text = apply_patch(baseline_text, diff_text)

            result = self.merge_sources(
                baseline_text, modified_path.read_text(encoding="utf-8"), patched_text
            )
            self._finish(result, output)
            return result
        except (GrafterError, OSError) as e:
            bus.error(L.error.generic, error=str(e))
            return None

    def _finish(self, result: MergeResult, output: Optional[Path]) -> None:
        session = result.session
        if result.divergences:
            bus.warning(L.merge.run.divergences, count=len(result.divergences))
        if result.unanchored:
            bus.warning(L.merge.run.unanchored, count=len(result.unanchored))

        if output is not None:
            tm = TransactionManager(self.root_path)
            tm.add_write(output, result.text or "")
            tm.commit()
            bus.info(L.merge.run.written, path=str(output))

        bus.success(
            L.merge.run.success,
            inserted=session.inserted_count,
            deduplicated=session.deduplicated_count,
        )
