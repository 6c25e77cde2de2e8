from __future__ import annotations

import typing as t

import numpy as np


class NodeTable:
    """Heads and elevations of the network's nodes, addressed by a stable integer index.

    The table is owned by whoever builds the network; valves only keep indices into it. The
    hydraulic solver writes converged heads with ``set_heads`` (or ``set_head``), everything else
    only reads.
    """

    def __init__(
        self,
        names: t.Sequence[str],
        elevations: t.Sequence[float],
        heads: t.Optional[t.Sequence[float]] = None,
    ):
        if len(names) != len(elevations):
            raise ValueError("names and elevations must have the same length")
        self.names: t.List[str] = list(names)
        self._index: t.Dict[str, int] = {name: idx for idx, name in enumerate(self.names)}
        if len(self._index) != len(self.names):
            raise ValueError("node names must be unique")
        self.elevations = np.asarray(elevations, dtype=float).copy()
        if heads is None:
            self.heads = self.elevations.copy()
        else:
            self.heads = np.asarray(heads, dtype=float).copy()
            if self.heads.shape != self.elevations.shape:
                raise ValueError("heads and elevations must have the same length")

    def __len__(self):
        return len(self.names)

    def __contains__(self, name: str):
        return name in self._index

    def index_of(self, name: str) -> int:
        return self._index[name]

    def head(self, idx: int) -> float:
        return float(self.heads[idx])

    def elevation(self, idx: int) -> float:
        return float(self.elevations[idx])

    def pressure(self, idx: int) -> float:
        return float(self.heads[idx] - self.elevations[idx])

    @property
    def pressures(self) -> np.ndarray:
        return self.heads - self.elevations

    def set_head(self, idx: int, head: float):
        self.heads[idx] = head

    def set_heads(self, heads: t.Sequence[float]):
        heads = np.asarray(heads, dtype=float)
        if heads.shape != self.heads.shape:
            raise ValueError(f"Expected {len(self)} heads, got {heads.shape}")
        # in-place so that views held by a solver stay valid
        self.heads[:] = heads
