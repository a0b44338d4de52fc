import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from grafter.spec import GrafterError

OUTPUT_FORMATS = ("code", "tree")


class ConfigError(GrafterError):
    pass


@dataclass
class GrafterConfig:
    min_height: int = 2
    min_similarity: float = 0.5
    output_format: str = "code"


def _find_pyproject_toml(search_path: Path) -> Optional[Path]:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            return None
        current_dir = current_dir.parent


def _parse_section(data: Dict[str, Any]) -> GrafterConfig:
    defaults = GrafterConfig()
    min_height = data.get("min_height", defaults.min_height)
    min_similarity = data.get("min_similarity", defaults.min_similarity)
    output_format = data.get("output_format", defaults.output_format)

    if not isinstance(min_height, int) or min_height < 1:
        raise ConfigError(f"min_height must be a positive integer, got {min_height!r}")
    if not isinstance(min_similarity, (int, float)) or not 0 <= min_similarity <= 1:
        raise ConfigError(
            f"min_similarity must be between 0 and 1, got {min_similarity!r}"
        )
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, got {output_format!r}"
        )

    return GrafterConfig(
        min_height=min_height,
        min_similarity=float(min_similarity),
        output_format=output_format,
    )


def load_config_from_path(search_path: Path) -> GrafterConfig:
    config_path = _find_pyproject_toml(search_path)
    if config_path is None:
        return GrafterConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    grafter_data: Dict[str, Any] = data.get("tool", {}).get("grafter", {})
    return _parse_section(grafter_data)
