"""
Connectivity tracker for the roadmap.

Union-find with union by rank and path compression. Classic union-find cannot
undo a union, so every write made after `checkpoint()` is journaled and
`rollback()` restores the exact previous parent/rank state.
"""

import logging
import typing as t

logger = logging.getLogger(__name__)

_MISSING = object()


class DisjointSets:
    """
    Disjoint-set forest keyed by vertex index.
    """

    __slots__ = ("_parent", "_rank", "_journal")

    def __init__(self, keys: t.Iterable[int] = ()):
        self._parent: t.Dict[int, int] = {}
        self._rank: t.Dict[int, int] = {}
        self._journal: t.Optional[t.List[t.Tuple[t.Dict[int, int], int, t.Any]]] = None
        for key in keys:
            self.add(key)

    def __len__(self) -> int:
        return len(self._parent)

    def __contains__(self, key: int) -> bool:
        return key in self._parent

    def _write(self, table: t.Dict[int, int], key: int, value: int) -> None:
        if self._journal is not None:
            self._journal.append((table, key, table.get(key, _MISSING)))
        table[key] = value

    def add(self, key: int) -> None:
        """Add a new singleton set."""
        if key in self._parent:
            raise KeyError(f"Key {key} is already tracked")
        self._write(self._parent, key, key)
        self._write(self._rank, key, 0)

    def find(self, key: int) -> int:
        root = key
        while self._parent[root] != root:
            root = self._parent[root]
        # path compression
        while self._parent[key] != root:
            parent = self._parent[key]
            self._write(self._parent, key, root)
            key = parent
        return root

    def union(self, a: int, b: int) -> bool:
        """
        Merge the sets containing a and b.

        Returns:
            True if two different sets were merged.
        """
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._write(self._parent, root_b, root_a)
        if self._rank[root_a] == self._rank[root_b]:
            self._write(self._rank, root_a, self._rank[root_a] + 1)
        return True

    def same_component(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def num_components(self) -> int:
        return sum(1 for key, parent in self._parent.items() if key == parent)

    def components(self) -> t.List[t.Set[int]]:
        groups: t.Dict[int, t.Set[int]] = {}
        for key in list(self._parent):
            groups.setdefault(self.find(key), set()).add(key)
        return sorted(groups.values(), key=len, reverse=True)

    def checkpoint(self) -> None:
        """Start journaling writes so they can be reverted by `rollback()`."""
        if self._journal is not None:
            raise RuntimeError("A checkpoint is already open")
        self._journal = []

    def rollback(self) -> None:
        """Revert every change made since `checkpoint()` and close it."""
        if self._journal is None:
            raise RuntimeError("No checkpoint to roll back to")
        journal, self._journal = self._journal, None
        for table, key, old in reversed(journal):
            if old is _MISSING:
                del table[key]
            else:
                table[key] = old
        logger.debug("Rolled back %d connectivity writes", len(journal))

    def commit(self) -> None:
        """Close the checkpoint and keep all changes."""
        if self._journal is None:
            raise RuntimeError("No checkpoint to commit")
        self._journal = None

    def clear(self) -> None:
        self._parent.clear()
        self._rank.clear()
        self._journal = None
