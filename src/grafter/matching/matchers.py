import logging
from collections import Counter, defaultdict
from typing import Any, Callable, Dict, List, Optional, Tuple

from grafter.spec import Correspondence, TreeNode
from .queue import HeightIndexedQueue

log = logging.getLogger(__name__)

Pair = Tuple[TreeNode, TreeNode]


def dice_similarity(
    src: Optional[TreeNode], dst: Optional[TreeNode], mapping: Correspondence
) -> float:
    if src is None or dst is None:
        return 0.0
    src_desc = list(src.descendants())
    dst_desc = set(dst.descendants())
    total = len(src_desc) + len(dst_desc)
    if total == 0:
        return 0.0
    common = sum(1 for node in src_desc if mapping.get_dst(node) in dst_desc)
    return 2.0 * common / total


def _lcs(
    left: List[TreeNode], right: List[TreeNode], key: Callable[[TreeNode], Any]
) -> List[Pair]:
    left_keys = [key(n) for n in left]
    right_keys = [key(n) for n in right]
    rows, cols = len(left), len(right)
    table = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows - 1, -1, -1):
        for j in range(cols - 1, -1, -1):
            if left_keys[i] == right_keys[j]:
                table[i][j] = table[i + 1][j + 1] + 1
            else:
                table[i][j] = max(table[i + 1][j], table[i][j + 1])

    pairs: List[Pair] = []
    i = j = 0
    while i < rows and j < cols:
        if left_keys[i] == right_keys[j]:
            pairs.append((left[i], right[j]))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs


class GumTreeMatcher:
    """
    Node correspondence in the style of GumTree: a greedy top-down pass
    over isomorphic subtrees, a greedy bottom-up pass over containers,
    then a recovery pass that aligns the children of every mapped pair.

    The matcher keeps no state between calls and can be shared.
    """

    def __init__(self, min_height: int = 2, min_similarity: float = 0.5):
        self.min_height = min_height
        self.min_similarity = min_similarity

    def match(self, src: TreeNode, dst: TreeNode) -> Correspondence:
        mapping = Correspondence()
        self._match_top_down(src, dst, mapping)
        self._match_bottom_up(src, dst, mapping)
        self._recover(src, mapping)
        log.debug(
            f"Matched {len(mapping)} pairs (src size {src.size}, dst size {dst.size})"
        )
        return mapping

    # --- Phase 1: isomorphic subtrees ---

    def _match_top_down(
        self, src: TreeNode, dst: TreeNode, mapping: Correspondence
    ) -> None:
        src_queue = HeightIndexedQueue(src)
        dst_queue = HeightIndexedQueue(dst)
        ambiguous: List[Pair] = []

        while src_queue and dst_queue:
            src_height = src_queue.peek_height()
            dst_height = dst_queue.peek_height()
            if min(src_height, dst_height) < self.min_height:
                break

            if src_height > dst_height:
                for node in src_queue.pop():
                    src_queue.open(node)
                continue
            if dst_height > src_height:
                for node in dst_queue.pop():
                    dst_queue.open(node)
                continue

            src_nodes = src_queue.pop()
            dst_nodes = dst_queue.pop()
            dst_groups: Dict[int, List[TreeNode]] = defaultdict(list)
            for node in dst_nodes:
                dst_groups[node.structure_hash].append(node)
            src_groups: Dict[int, List[TreeNode]] = defaultdict(list)
            for node in src_nodes:
                src_groups[node.structure_hash].append(node)

            pending_src = set()
            pending_dst = set()
            for key, src_group in src_groups.items():
                dst_group = dst_groups.get(key, [])
                pairs = [
                    (s, d)
                    for s in src_group
                    for d in dst_group
                    if s.is_isomorphic_to(d)
                ]
                if not pairs:
                    continue
                if len(src_group) == 1 and len(dst_group) == 1:
                    mapping.add_subtrees(*pairs[0])
                else:
                    ambiguous.extend(pairs)
                    pending_src.update(s for s, _ in pairs)
                    pending_dst.update(d for _, d in pairs)

            for node in src_nodes:
                if not mapping.has_src(node) and node not in pending_src:
                    src_queue.open(node)
            for node in dst_nodes:
                if not mapping.has_dst(node) and node not in pending_dst:
                    dst_queue.open(node)

        self._resolve_ambiguous(src, dst, ambiguous, mapping)

    def _resolve_ambiguous(
        self,
        src: TreeNode,
        dst: TreeNode,
        ambiguous: List[Pair],
        mapping: Correspondence,
    ) -> None:
        if not ambiguous:
            return
        src_order = {node: i for i, node in enumerate(src.pre_order())}
        dst_order = {node: i for i, node in enumerate(dst.pre_order())}

        def priority(pair: Pair) -> Tuple[float, int, int, int]:
            s, d = pair
            return (
                -parent_similarity[pair],
                abs(s.index_in_parent() - d.index_in_parent()),
                src_order[s],
                dst_order[d],
            )

        # Pairs whose parents share nothing are left to recovery.
        parent_similarity = {
            (s, d): dice_similarity(s.parent, d.parent, mapping)
            for s, d in ambiguous
            if s.role == d.role
        }
        candidates = [pair for pair, score in parent_similarity.items() if score > 0]
        for s, d in sorted(candidates, key=priority):
            if not mapping.has_src(s) and not mapping.has_dst(d):
                mapping.add_subtrees(s, d)

    # --- Phase 2: containers ---

    def _match_bottom_up(
        self, src: TreeNode, dst: TreeNode, mapping: Correspondence
    ) -> None:
        for node in src.post_order():
            if mapping.has_src(node):
                continue
            if node.is_root:
                if not mapping.has_dst(dst) and node.type == dst.type:
                    mapping.add(node, dst)
                continue
            if node.is_leaf:
                continue

            best: Optional[TreeNode] = None
            best_score = -1.0
            for candidate in self._container_candidates(node, mapping):
                score = dice_similarity(node, candidate, mapping)
                if score > best_score:
                    best, best_score = candidate, score
            if best is not None and best_score >= self.min_similarity:
                mapping.add(node, best)

    def _container_candidates(
        self, node: TreeNode, mapping: Correspondence
    ) -> List[TreeNode]:
        candidates: Dict[TreeNode, None] = {}
        visited = set()
        for desc in node.descendants():
            counterpart = mapping.get_dst(desc)
            if counterpart is None:
                continue
            for ancestor in counterpart.ancestors():
                if ancestor in visited:
                    break
                visited.add(ancestor)
                if (
                    ancestor.type == node.type
                    and ancestor.role == node.role
                    and not mapping.has_dst(ancestor)
                ):
                    candidates[ancestor] = None
        return list(candidates)

    # --- Phase 3: recovery ---

    def _recover(self, src: TreeNode, mapping: Correspondence) -> None:
        for node in src.pre_order():
            counterpart = mapping.get_dst(node)
            if counterpart is None or node.is_leaf or counterpart.is_leaf:
                continue
            self._align_children(node, counterpart, mapping)

    def _align_children(
        self, src: TreeNode, dst: TreeNode, mapping: Correspondence
    ) -> None:
        self._pair_by_lcs(src, dst, mapping, lambda n: n.structure_hash, True)
        self._pair_by_lcs(src, dst, mapping, _signature, False)
        self._pair_single_roles(src, dst, mapping)
        self._pair_similar(src, dst, mapping)
        # Bare content only pairs siblings when both sides have as many left.
        for key in (lambda n: n.content_key, lambda n: (n.type, n.role)):
            src_free, dst_free = _free_children(src, dst, mapping)
            if len(src_free) == len(dst_free):
                self._pair_by_lcs(src, dst, mapping, key, False)

    def _pair_by_lcs(
        self,
        src: TreeNode,
        dst: TreeNode,
        mapping: Correspondence,
        key: Callable[[TreeNode], Any],
        whole_subtree: bool,
    ) -> None:
        src_free, dst_free = _free_children(src, dst, mapping)
        if not src_free or not dst_free:
            return
        for a, b in _lcs(src_free, dst_free, key):
            if whole_subtree:
                if a.is_isomorphic_to(b):
                    mapping.add_subtrees(a, b)
            else:
                mapping.add(a, b)

    def _pair_single_roles(
        self, src: TreeNode, dst: TreeNode, mapping: Correspondence
    ) -> None:
        # A single-node field pairs its occupants regardless of type, e.g.
        # `+` becoming `-`, or a name becoming an `and` expression.
        src_free, dst_free = _free_children(src, dst, mapping)
        by_role = {b.role: b for b in dst_free if dst.is_single_role(b.role)}
        for a in src_free:
            if not src.is_single_role(a.role):
                continue
            b = by_role.pop(a.role, None)
            if b is not None:
                mapping.add(a, b)

    def _pair_similar(
        self, src: TreeNode, dst: TreeNode, mapping: Correspondence
    ) -> None:
        src_free, dst_free = _free_children(src, dst, mapping)
        start = 0
        for a in src_free:
            best_index, best_score = -1, self.min_similarity
            for index in range(start, len(dst_free)):
                b = dst_free[index]
                if (a.type, a.role) != (b.type, b.role):
                    continue
                score = label_similarity(a, b)
                if score >= best_score and (best_index < 0 or score > best_score):
                    best_index, best_score = index, score
            if best_index >= 0:
                mapping.add(a, dst_free[best_index])
                start = best_index + 1


def _free_children(
    src: TreeNode, dst: TreeNode, mapping: Correspondence
) -> Tuple[List[TreeNode], List[TreeNode]]:
    return (
        [c for c in src.children if not mapping.has_src(c)],
        [c for c in dst.children if not mapping.has_dst(c)],
    )


def _labels(node: TreeNode) -> List[str]:
    # Blank labels (whitespace) are skipped.
    return [
        x.label for x in node.pre_order() if x.label is not None and x.label.strip()
    ]


def _signature(node: TreeNode) -> Tuple[str, Optional[str], Tuple[str, ...]]:
    return (node.type, node.role, tuple(_labels(node)))


def label_similarity(src: TreeNode, dst: TreeNode) -> float:
    """Dice coefficient over the non-blank labels of two subtrees."""
    src_labels = Counter(_labels(src))
    dst_labels = Counter(_labels(dst))
    total = sum(src_labels.values()) + sum(dst_labels.values())
    if total == 0:
        return 0.0
    common = sum((src_labels & dst_labels).values())
    return 2.0 * common / total
