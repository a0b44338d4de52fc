from .engine import MergeOrchestrator, MergeResult, MergeSession

__all__ = ["MergeOrchestrator", "MergeResult", "MergeSession"]
