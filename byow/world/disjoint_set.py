"""Union-find over room indices, used while building the corridor spanning tree.

Backing lists are sized to a fixed room capacity and are reset in full on every
``init`` so a smaller active count can never observe stale parents from a
previous connection pass.
"""

from __future__ import annotations

from typing import List

INVALID = -1


class DisjointSet:
    def __init__(self, capacity: int):
        self.capacity = max(0, int(capacity))
        self.parent: List[int] = []
        self.rank: List[int] = []
        self.count = 0
        self.init(self.capacity)

    def init(self, count: int) -> None:
        self.parent = list(range(self.capacity))
        self.rank = [0] * self.capacity
        self.count = min(max(count, 0), self.capacity)

    def find(self, x: int) -> int:
        if x < 0 or x >= self.capacity:
            return INVALID
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression: point every visited node straight at the root
        while self.parent[x] != root:
            nxt = self.parent[x]
            self.parent[x] = root
            x = nxt
        return root

    def union(self, x: int, y: int) -> bool:
        """Merge the sets holding ``x`` and ``y``; return True if a merge happened."""
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == INVALID or root_y == INVALID or root_x == root_y:
            return False
        if self.rank[root_x] < self.rank[root_y]:
            self.parent[root_x] = root_y
        elif self.rank[root_x] > self.rank[root_y]:
            self.parent[root_y] = root_x
        else:
            self.parent[root_y] = root_x
            self.rank[root_x] += 1
        self.count -= 1
        return True

    def connected(self, x: int, y: int) -> bool:
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == INVALID or root_y == INVALID:
            return False
        return root_x == root_y


__all__ = ["DisjointSet", "INVALID"]
