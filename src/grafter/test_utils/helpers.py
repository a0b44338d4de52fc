import subprocess
from pathlib import Path

from grafter.app import MergeRunner
from grafter.lang.python import (
    PythonCodeGenerator,
    PythonTreeParser,
    TreeStringGenerator,
)
from grafter.matching import GumTreeMatcher

# Commits in throwaway repositories must not depend on the user's git config.
_GIT_IDENTITY = [
    "-c",
    "user.name=grafter-tests",
    "-c",
    "user.email=tests@grafter.invalid",
    "-c",
    "commit.gpgsign=false",
]


def git(root: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *_GIT_IDENTITY, *args],
        cwd=root,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def create_test_runner(root_path: Path, output_format: str = "code") -> MergeRunner:
    generator = (
        TreeStringGenerator() if output_format == "tree" else PythonCodeGenerator()
    )
    return MergeRunner(
        root_path=root_path,
        parser=PythonTreeParser(),
        generator=generator,
        matcher=GumTreeMatcher(),
    )
