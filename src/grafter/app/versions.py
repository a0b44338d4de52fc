import re
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from grafter.common import bus
from grafter.needle import L
from grafter.spec import PatchApplyError, VersionSourceError

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@", re.MULTILINE)


def _git(args: List[str], cwd: Path, stdin: Optional[str] = None) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        input=stdin,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


class GitVersionSource:
    """Reads file contents at a given revision of a git repository."""

    def __init__(self, repo_root: Path):
        self.repo_root = repo_root.resolve()

    @classmethod
    def discover(cls, start: Path) -> "GitVersionSource":
        try:
            top_level = _git(["rev-parse", "--show-toplevel"], cwd=start)
        except (subprocess.CalledProcessError, OSError) as e:
            raise VersionSourceError(f"'{start}' is not inside a git repository.") from e
        return cls(Path(top_level.strip()))

    def read_at(self, rev: str, path: Path) -> str:
        try:
            rel_path = path.resolve().relative_to(self.repo_root).as_posix()
        except ValueError as e:
            raise VersionSourceError(
                f"'{path}' is outside the repository at '{self.repo_root}'."
            ) from e

        try:
            return _git(["show", f"{rev}:{rel_path}"], cwd=self.repo_root)
        except subprocess.CalledProcessError as e:
            raise VersionSourceError(
                f"Cannot read '{rel_path}' at revision '{rev}': {e.stderr.strip()}"
            ) from e


def normalize_line_endings(content: str) -> str:
    normalized = content.replace("\r\n", "\n").replace("\r", "\n")
    if not normalized.endswith("\n"):
        normalized += "\n"
    return normalized


def extract_target_path(diff_text: str) -> Optional[str]:
    for line in diff_text.splitlines():
        if line.startswith("+++ b/"):
            return line[len("+++ b/") :].strip()
    return None


def _report_hunk_mismatch(baseline_text: str, diff_text: str) -> None:
    header = _HUNK_HEADER.search(diff_text)
    if header is None:
        bus.debug(L.patch.debug.no_hunk)
        return

    start = int(header.group(1))
    count = int(header.group(2) or "1")
    bus.debug(L.patch.debug.hunk_header, header=header.group(0))

    baseline_lines = baseline_text.split("\n")
    for lineno in range(start, start + count):
        line = (
            baseline_lines[lineno - 1]
            if 0 < lineno <= len(baseline_lines)
            else "[MISSING]"
        )
        bus.debug(L.patch.debug.baseline_line, lineno=lineno, line=line)


def apply_patch(baseline_text: str, diff_text: str) -> str:
    """
    Applies a single-file unified diff to the baseline text and returns
    the patched text. The patch is applied with `git apply` inside a
    throwaway repository.
    """
    target = extract_target_path(diff_text)
    if target is None:
        raise PatchApplyError("Cannot find the '+++ b/' target path in the diff.")

    normalized = normalize_line_endings(baseline_text)
    patch = diff_text if diff_text.endswith("\n") else diff_text + "\n"

    with tempfile.TemporaryDirectory(prefix="grafter_patch_") as tmp:
        root = Path(tmp)
        target_file = root / target
        target_file.parent.mkdir(parents=True, exist_ok=True)
        target_file.write_text(normalized, encoding="utf-8")

        try:
            _git(["init", "--quiet"], cwd=root)
            _git(["apply", "--whitespace=nowarn"], cwd=root, stdin=patch)
        except subprocess.CalledProcessError as e:
            _report_hunk_mismatch(normalized, patch)
            raise PatchApplyError(f"Cannot apply patch: {e.stderr.strip()}") from e
        except OSError as e:
            raise PatchApplyError(f"Cannot run git: {e}") from e

        bus.debug(L.patch.applied, path=target)
        return target_file.read_text(encoding="utf-8")
