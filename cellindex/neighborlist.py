# cellindex/neighborlist.py
import logging
from itertools import combinations

import numpy as np

from cellindex.grid import build_grid

logger = logging.getLogger(__name__)


class CellIndexMethod:
    """
    Cell-index neighbor search for one snapshot.

    The grid is built once on construction; ``neighbors()`` scans it.
    Two particles are neighbors when they share a cell, or when they sit in
    adjacent cells and their surface-to-surface gap is <= rc.

    The returned map is keyed by real particles only. Ghosts found across
    a periodic boundary are resolved to the particle they were copied from.
    Each neighbor is listed once, in the order it was first found, and a
    particle with no neighbors has no entry.
    """

    def __init__(self, L, rc, particles, periodic=False):
        self.L = L
        self.rc = rc
        self.periodic = periodic
        self.grid = build_grid(L, rc, particles, periodic=periodic)
        self._neighbors = None

    @property
    def M(self):
        return self.grid.M

    @property
    def cell_size(self):
        return self.grid.cell_size

    # ------------------------------------------------------------
    # Neighbor enumeration
    # ------------------------------------------------------------
    def neighbors(self):
        if self._neighbors is None:
            self._neighbors = enumerate_neighbors(self.grid, self.rc)
        return self._neighbors

    @property
    def pairs(self):
        """(n_pairs, 2) array of neighbor id pairs with i < j."""
        pairs = sorted(neighbor_pairs(self.neighbors()))
        return np.asarray(pairs, dtype=np.int64).reshape(-1, 2)


def _cell_arrays(cell):
    pos = np.array([(p.x, p.y) for p in cell], dtype=float).reshape(-1, 2)
    radii = np.array([p.radius for p in cell], dtype=float)
    return pos, radii


def enumerate_neighbors(grid, rc):
    """
    Scan every cell of ``grid`` with the same-cell rule and the forward stencil.

    Returns
    -------
    dict
        Particle -> list of Particle.
    """
    found = {}

    def link(p, q):
        p, q = p.origin, q.origin
        if p.id == q.id:
            return
        # dicts keep insertion order and drop repeats
        found.setdefault(p, {})[q] = None
        found.setdefault(q, {})[p] = None

    arrays = [_cell_arrays(cell) if cell else None for cell in grid.cells]

    for i, cell in enumerate(grid.cells):
        if not cell:
            continue

        # Same cell: neighbors regardless of distance
        for p, q in combinations(cell, 2):
            link(p, q)

        pos_i, rad_i = arrays[i]
        for j in grid.stencil(i):
            if arrays[j] is None:
                continue
            pos_j, rad_j = arrays[j]

            dr = pos_i[:, None, :] - pos_j[None, :, :]
            gap = np.sqrt(np.sum(dr * dr, axis=-1)) - (rad_i[:, None] + rad_j[None, :])

            for a, b in np.argwhere(gap <= rc):
                link(cell[a], grid.cells[j][b])

    neighbors = {p: list(qs) for p, qs in found.items()}
    logger.debug("Found %d neighbor pairs among %d particles",
                 sum(len(v) for v in neighbors.values()) // 2, len(grid.particles))
    return neighbors


def find_neighbors(L, rc, particles, periodic=False):
    """Build the grid for one snapshot and return its neighbor map."""
    return CellIndexMethod(L, rc, particles, periodic=periodic).neighbors()


# ------------------------------------------------------------
# Brute-force reference search
# ------------------------------------------------------------
def brute_force_neighbors(L, rc, particles, periodic=False):
    """
    All-pairs surface-gap search, O(N^2).

    With ``periodic`` the minimum-image distance is used. No same-cell rule
    applies here: only the distance decides.
    """
    particles = list(particles)
    N = len(particles)
    if N < 2:
        return {}

    pos = np.array([(p.x, p.y) for p in particles], dtype=float)
    radii = np.array([p.radius for p in particles], dtype=float)

    found = {}
    for i in range(N - 1):
        rij = pos[i + 1:] - pos[i]
        if periodic:
            # minimum image
            rij -= L * np.round(rij / L)
        gap = np.linalg.norm(rij, axis=1) - (radii[i] + radii[i + 1:])
        for k in np.nonzero(gap <= rc)[0]:
            j = i + 1 + k
            found.setdefault(particles[i], []).append(particles[j])
            found.setdefault(particles[j], []).append(particles[i])
    return found


# ------------------------------------------------------------
# Views by particle id
# ------------------------------------------------------------
def neighbor_ids(neighbor_map):
    """Map particle id -> sorted list of neighbor ids."""
    return {p.id: sorted(q.id for q in qs) for p, qs in neighbor_map.items()}


def neighbor_pairs(neighbor_map):
    """Set of unordered neighbor id pairs as (i, j) with i < j."""
    pairs = set()
    for p, qs in neighbor_map.items():
        for q in qs:
            pairs.add((min(p.id, q.id), max(p.id, q.id)))
    return pairs
