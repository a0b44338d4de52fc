from dataclasses import dataclass, field
from typing import Dict, List, Optional

from grafter.spec import NodeTriple, TreeNode


@dataclass
class Divergence:
    """A baseline position where both sides changed differently; baseline was kept."""

    baseline: TreeNode
    modified: Optional[TreeNode]
    patched: Optional[TreeNode]


@dataclass
class UnanchoredNode:
    """A new node whose whole ancestor chain is new as well; it was not inserted."""

    node: TreeNode
    origin: str  # "modified" or "patched"


@dataclass
class MergeSession:
    """
    All mutable state of one merge invocation. A session is created per
    call and handed through each stage; nothing is kept on the stages.
    """

    triples: Dict[TreeNode, NodeTriple] = field(default_factory=dict)
    modified_to_baseline: Dict[TreeNode, TreeNode] = field(default_factory=dict)
    patched_to_baseline: Dict[TreeNode, TreeNode] = field(default_factory=dict)
    baseline_to_merged: Dict[TreeNode, TreeNode] = field(default_factory=dict)
    divergences: List[Divergence] = field(default_factory=list)
    unanchored: List[UnanchoredNode] = field(default_factory=list)
    inserted_count: int = 0
    deduplicated_count: int = 0


@dataclass
class MergeResult:
    tree: TreeNode
    session: MergeSession
    text: Optional[str] = None

    @property
    def divergences(self) -> List[Divergence]:
        return self.session.divergences

    @property
    def unanchored(self) -> List[UnanchoredNode]:
        return self.session.unanchored

    @property
    def is_clean(self) -> bool:
        return not self.session.divergences and not self.session.unanchored
