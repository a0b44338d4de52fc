from .merge import MergeRunner

__all__ = ["MergeRunner"]
