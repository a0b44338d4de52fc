from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List

import tomli_w

from .helpers import git


class WorkspaceFactory:
    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files_to_create: List[Dict[str, Any]] = []
        self._pyproject_data: Dict[str, Any] = {}
        self._init_git = False

    def with_config(self, grafter_config: Dict[str, Any]) -> "WorkspaceFactory":
        tool = self._pyproject_data.setdefault("tool", {})
        tool["grafter"] = grafter_config
        return self

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._files_to_create.append(
            {"path": path, "content": dedent(content), "format": "raw"}
        )
        return self

    def with_git(self) -> "WorkspaceFactory":
        """Initializes a repository and commits everything on build()."""
        self._init_git = True
        return self

    def build(self) -> Path:
        if self._pyproject_data:
            self._files_to_create.append(
                {
                    "path": "pyproject.toml",
                    "content": self._pyproject_data,
                    "format": "toml",
                }
            )

        for file_spec in self._files_to_create:
            output_path = self.root_path / file_spec["path"]
            output_path.parent.mkdir(parents=True, exist_ok=True)

            if file_spec["format"] == "toml":
                with output_path.open("wb") as f:
                    tomli_w.dump(file_spec["content"], f)
            else:
                output_path.write_text(file_spec["content"], encoding="utf-8")

        if self._init_git:
            git(self.root_path, "init", "--quiet")
            git(self.root_path, "add", "-A")
            git(self.root_path, "commit", "--quiet", "-m", "baseline")

        return self.root_path
