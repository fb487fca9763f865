# cg2d/graph.py
from __future__ import annotations
from typing import Dict, Iterator, Set


class AdjacencyGraph:
    """
    Неорієнтований граф над цілими дескрипторами вузлів (handle -> set сусідів).
    Нічого не знає про геометрію; трикутники живуть в арені TriMesh.
    """
    def __init__(self) -> None:
        self._adj: Dict[int, Set[int]] = {}

    def __contains__(self, node: int) -> bool:
        return node in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def __iter__(self) -> Iterator[int]:
        return iter(self._adj)

    def add(self, node: int) -> None:
        self._adj.setdefault(node, set())

    def remove(self, node: int) -> None:
        """Прибрати вузол разом з усіма його ребрами."""
        for other in self._adj.pop(node, ()):
            self._adj[other].discard(node)

    def connect(self, a: int, b: int) -> None:
        if a not in self._adj or b not in self._adj:
            raise KeyError(f"cannot connect {a} and {b}: node not in graph")
        if a == b:
            return
        self._adj[a].add(b)
        self._adj[b].add(a)

    def disconnect(self, a: int, b: int) -> None:
        self._adj.get(a, set()).discard(b)
        self._adj.get(b, set()).discard(a)

    def neighbors(self, node: int) -> Set[int]:
        return self._adj[node]

    def nodes(self) -> Set[int]:
        return set(self._adj)
