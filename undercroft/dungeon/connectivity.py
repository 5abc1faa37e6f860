"""Tile connectivity analysis for room grids.

Partitions the non-wall tiles of a row-major grid into maximal 4-connected
regions (N/E/S/W, no diagonals) and picks the dominant one. The dominant
region is the room's *pathing* set: the only tiles allowed to carry exits or
stairs, because everything outside it is unreachable from them.

Regions are built with a disjoint-set forest. Scanning row-major and joining
each tile with its left and upper neighbour is enough to see every
4-adjacency exactly once.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Sequence

from .tiles import WALL


class DisjointSet:
    """Union-find over ``0..n-1`` with path halving and union by size."""

    def __init__(self, n: int):
        self.parent = list(range(n))
        self.size = [1] * n

    def find(self, a: int) -> int:
        parent = self.parent
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def union(self, a: int, b: int) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.size[ra] < self.size[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self.size[ra] += self.size[rb]
        return True


class Connectivity(NamedTuple):
    regions: List[List[int]]
    pathing: List[int]


def connected_regions(tiles: Sequence[str], rows: int, cols: int) -> List[List[int]]:
    """Return every maximal 4-connected non-wall region.

    Each region is a sorted list of tile indices; regions are ordered by their
    first (smallest) index, i.e. the order a row-major scan discovers them.
    """
    if len(tiles) != rows * cols:
        raise ValueError(f"tile count {len(tiles)} does not match {rows}x{cols}")
    ds = DisjointSet(len(tiles))
    for idx, tile in enumerate(tiles):
        if tile == WALL:
            continue
        col = idx % cols
        if col > 0 and tiles[idx - 1] != WALL:
            ds.union(idx, idx - 1)
        if idx >= cols and tiles[idx - cols] != WALL:
            ds.union(idx, idx - cols)

    by_root: Dict[int, List[int]] = {}
    for idx, tile in enumerate(tiles):
        if tile != WALL:
            by_root.setdefault(ds.find(idx), []).append(idx)
    # dicts keep insertion order, so regions come out ordered by smallest index
    return list(by_root.values())


def dominant_region(regions: Sequence[List[int]]) -> List[int]:
    # Ties go to the later region, matching a stable "last maximum wins" scan.
    best: List[int] = []
    for region in regions:
        if len(region) >= len(best):
            best = region
    return list(best)


def analyze_connectivity(tiles: Sequence[str], rows: int, cols: int) -> Connectivity:
    regions = connected_regions(tiles, rows, cols)
    return Connectivity(regions, dominant_region(regions))


__all__ = ["DisjointSet", "Connectivity", "connected_regions", "dominant_region", "analyze_connectivity"]
