from .runners import MergeRunner
from .fences import strip_code_fences
from .versions import GitVersionSource, apply_patch

__all__ = ["MergeRunner", "strip_code_fences", "GitVersionSource", "apply_patch"]
