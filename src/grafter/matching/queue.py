import heapq
import itertools
from typing import List, Tuple

from grafter.spec import TreeNode


class HeightIndexedQueue:
    """
    Priority list of subtrees ordered by decreasing height. Nodes of equal
    height come out in insertion order.
    """

    def __init__(self, root: TreeNode):
        self._heap: List[Tuple[int, int, TreeNode]] = []
        self._counter = itertools.count()
        self.push(root)

    def push(self, node: TreeNode) -> None:
        heapq.heappush(self._heap, (-node.height, next(self._counter), node))

    def open(self, node: TreeNode) -> None:
        for child in node.children:
            self.push(child)

    def peek_height(self) -> int:
        return -self._heap[0][0]

    def pop(self) -> List[TreeNode]:
        height = self.peek_height()
        nodes = []
        while self._heap and -self._heap[0][0] == height:
            nodes.append(heapq.heappop(self._heap)[2])
        return nodes

    def __bool__(self) -> bool:
        return bool(self._heap)
