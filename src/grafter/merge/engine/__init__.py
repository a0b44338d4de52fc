from .context import MergeSession, MergeResult, Divergence, UnanchoredNode
from .decision import Decision, classify, decide, identical
from .triples import TripleBuilder
from .builder import MergedTreeBuilder
from .insertion import NewNodeInserter
from .orchestrator import MergeOrchestrator

__all__ = [
    "MergeSession",
    "MergeResult",
    "Divergence",
    "UnanchoredNode",
    "Decision",
    "classify",
    "decide",
    "identical",
    "TripleBuilder",
    "MergedTreeBuilder",
    "NewNodeInserter",
    "MergeOrchestrator",
]
