from pathlib import Path
from typing import Optional

from grafter.app import MergeRunner
from grafter.config import GrafterConfig, load_config_from_path
from grafter.lang.python import (
    PythonCodeGenerator,
    PythonTreeParser,
    TreeStringGenerator,
)
from grafter.matching import GumTreeMatcher
from grafter.spec import CodeGeneratorProtocol


def get_project_root() -> Path:
    return Path.cwd()


def load_config() -> GrafterConfig:
    return load_config_from_path(get_project_root())


def make_generator(output_format: str) -> CodeGeneratorProtocol:
    if output_format == "tree":
        return TreeStringGenerator()
    return PythonCodeGenerator()


def make_runner(
    config: GrafterConfig, output_format: Optional[str] = None
) -> MergeRunner:
    # Composition Root: Assemble the dependencies
    matcher = GumTreeMatcher(
        min_height=config.min_height, min_similarity=config.min_similarity
    )
    return MergeRunner(
        root_path=get_project_root(),
        parser=PythonTreeParser(),
        generator=make_generator(output_format or config.output_format),
        matcher=matcher,
    )
