# sphmomentum/sphsim/neighbor_pairs.py
"""
Builds the list of interacting particle pairs and their pair geometry.

Each unordered pair (i, j) with i < j and separation below the kernel support
radius appears exactly once. The unit vector e_ij points from i towards j.
"""

from dataclasses import dataclass

import numpy as np
from scipy.spatial import cKDTree

from sphsim.kernel.base import SPHKernel

# pairs closer than this fraction of the support radius are treated as coincident
COINCIDENT_TOLERANCE = 1e-12

@dataclass
class NeighborPairs:
    """Pair geometry for all interacting pairs, one row per pair."""
    i: np.ndarray        # (P,) int64
    j: np.ndarray        # (P,) int64
    e_ij: np.ndarray     # (P, 3) unit vector from i to j
    abs_rij: np.ndarray  # (P,) separation distance
    dWdrij: np.ndarray   # (P,) kernel derivative felt at i due to j
    dWdrji: np.ndarray   # (P,) kernel derivative felt at j due to i

    def __len__(self):
        return int(self.i.shape[0])

def build_neighbor_pairs(positions: np.ndarray, kernel: SPHKernel) -> NeighborPairs:
    """
    Finds all pairs within the kernel support radius using a KD-tree.

    Args:
        positions: (N, 3) particle positions.
        kernel: a set up smoothing kernel providing the support radius and dW/dr.

    Returns:
        NeighborPairs with coincident pairs removed.
    """
    if not kernel.is_ready():
        raise ValueError(f"Kernel {kernel.__class__.__name__} must be set up before building neighbor pairs.")
    positions = np.asarray(positions, dtype=np.float64)
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise ValueError(f"positions must have shape (N, 3), got {positions.shape}")

    rc = kernel.support_radius
    tree = cKDTree(positions)
    pair_idx = tree.query_pairs(rc, output_type='ndarray')
    if pair_idx.size == 0:
        pair_idx = np.empty((0, 2), dtype=np.int64)
    # query_pairs includes pairs exactly at rc; the kernel vanishes there anyway
    pair_idx = pair_idx.astype(np.int64, copy=False)
    # sort for reproducible accumulation order
    order = np.lexsort((pair_idx[:, 1], pair_idx[:, 0]))
    pair_idx = pair_idx[order]

    i_idx = pair_idx[:, 0]
    j_idx = pair_idx[:, 1]
    r_ij = positions[j_idx] - positions[i_idx]
    abs_rij = np.linalg.norm(r_ij, axis=1)

    keep = abs_rij > COINCIDENT_TOLERANCE * rc
    if not np.all(keep):
        print(f"Warning: build_neighbor_pairs skipped {np.count_nonzero(~keep)} coincident particle pair(s).")
    i_idx, j_idx, r_ij, abs_rij = i_idx[keep], j_idx[keep], r_ij[keep], abs_rij[keep]

    e_ij = r_ij / abs_rij[:, None] if abs_rij.size else np.empty((0, 3), dtype=np.float64)
    dWdr = np.asarray(kernel.dWdrij(abs_rij), dtype=np.float64)

    return NeighborPairs(
        i=np.ascontiguousarray(i_idx),
        j=np.ascontiguousarray(j_idx),
        e_ij=np.ascontiguousarray(e_ij),
        abs_rij=np.ascontiguousarray(abs_rij),
        dWdrij=dWdr.copy(),
        dWdrji=dWdr.copy(), # identical kernels on both sides
    )
