from __future__ import annotations

from typing import List, Tuple

from .core import ConstructionInvariantViolation, Instance


def _sorted_edges(instance: Instance) -> List[Tuple[int, int, float]]:
    """All pairs i<j by increasing cost; sort is stable so equal weights keep (i, j) order."""
    n = instance.n
    D = instance.cost
    edges = []
    for i in range(n):
        row = D[i]
        for j in range(i + 1, n):
            edges.append((i, j, float(row[j])))
    edges.sort(key=lambda e: e[2])
    return edges


def build_initial_tour(instance: Instance) -> List[int]:
    """
    Greedy edge construction (Kruskal-like).
    - Scans edges shortest first, keeping every node at degree <= 2.
    - A union-find over nodes rejects edges that would close a cycle early.
    - Stops at n-1 edges (a Hamiltonian path), joins the two path ends,
      then walks the cycle from node 0.
    Returns the closed tour [0, ..., 0] of length n+1.
    """
    n = instance.n
    degree = [0] * n
    parent = list(range(n))
    size = [1] * n

    def find(x: int) -> int:
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def unite(a: int, b: int) -> None:
        a = find(a)
        b = find(b)
        if a == b:
            return
        if size[a] < size[b]:
            a, b = b, a
        parent[b] = a
        size[a] += size[b]

    selected: List[Tuple[int, int]] = []
    if n >= 2:
        for u, v, _w in _sorted_edges(instance):
            if degree[u] == 2 or degree[v] == 2:
                continue
            if find(u) == find(v) and len(selected) < n - 1:
                continue
            selected.append((u, v))
            degree[u] += 1
            degree[v] += 1
            unite(u, v)
            if len(selected) == n - 1:
                break

    endpoints = [i for i in range(n) if degree[i] == 1]
    if len(endpoints) != 2:
        raise ConstructionInvariantViolation(
            f"Expected 2 path endpoints after greedy scan, found {len(endpoints)} "
            f"({len(selected)} edges selected for n={n})"
        )
    selected.append((endpoints[0], endpoints[1]))

    adj: List[List[int]] = [[] for _ in range(n)]
    for a, b in selected:
        adj[a].append(b)
        adj[b].append(a)

    tour = [0]
    prev, curr = -1, 0
    while True:
        # For n == 2 both neighbours of a node are the same node.
        nxt = adj[curr][0] if adj[curr][0] != prev else adj[curr][1]
        if nxt == tour[0]:
            break
        tour.append(nxt)
        prev, curr = curr, nxt
    tour.append(tour[0])

    if len(tour) != n + 1:
        raise ConstructionInvariantViolation(
            f"Edge set does not form a single cycle: walked {len(tour) - 1} of {n} nodes"
        )
    return tour
