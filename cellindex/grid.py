# cellindex/grid.py
import logging
import math
from dataclasses import dataclass

from cellindex.constants import FORWARD_STENCIL
from cellindex.errors import ConfigurationError, DataError
from cellindex.resolution import GridResolution, select_resolution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grid:
    """
    Square cell grid over [0, L) x [0, L), plus one ring of extension cells.

    Cells are addressed by (row, col) with row = floor(y / cell_size) and
    col = floor(x / cell_size). Base cells have 0 <= row, col < M.
    Extension cells cover rows -1 and M and column M, which is everything
    the forward stencil can reach from a base cell. They are flattened as

        index = (row + 1) * (M + 1) + col

    In periodic mode the reachable extension cells hold ghost copies of the
    base cell (row % M, col % M), shifted by whole box lengths. Otherwise
    they stay empty.
    """

    L: float
    M: int
    cell_size: float
    periodic: bool
    cells: tuple       # tuple of tuples of Particle, flat extended layout
    particles: tuple   # real particles, input order
    ghosts: tuple = ()

    @property
    def n_cols(self):
        return self.M + 1

    @property
    def n_rows(self):
        return self.M + 2

    def index(self, row, col):
        return (row + 1) * self.n_cols + col

    def row_col(self, index):
        row, col = divmod(index, self.n_cols)
        return row - 1, col

    def in_bounds(self, row, col):
        return -1 <= row <= self.M and 0 <= col <= self.M

    def is_base(self, row, col):
        return 0 <= row < self.M and 0 <= col < self.M

    def cell(self, row, col):
        return self.cells[self.index(row, col)]

    def cell_coords(self, particle):
        """(row, col) of the base cell a real particle is bucketed into."""
        return _cell_coords(particle, self.M, self.cell_size)

    def stencil(self, index):
        """Flat indices of the forward neighbors of a cell, skipping offsets that leave the grid."""
        row, col = self.row_col(index)
        out = []
        for dr, dc in FORWARD_STENCIL:
            r, c = row + dr, col + dc
            if self.in_bounds(r, c):
                out.append(self.index(r, c))
        return out


# ------------------------------------------------------------
# Spatial partition
# ------------------------------------------------------------
def _cell_coords(particle, M, cell_size):
    col = int(math.floor(particle.x / cell_size))
    row = int(math.floor(particle.y / cell_size))
    # x < L is checked by the caller; x / cell_size may still round up to M
    return min(row, M - 1), min(col, M - 1)


def _empty_cells(M):
    return [[] for _ in range((M + 2) * (M + 1))]


def partition(particles, L, M, cell_size):
    """
    Bucket particles into the base cells of an extended cell array.

    Returns a list of lists in the flat layout described on ``Grid``.
    Raises DataError for any particle outside [0, L) on either axis.
    """
    cells = _empty_cells(M)
    n_cols = M + 1
    for p in particles:
        if not (0.0 <= p.x < L and 0.0 <= p.y < L):
            raise DataError(
                f"Particle {p.id} at ({p.x}, {p.y}) lies outside the box [0, {L})"
            )
        row, col = _cell_coords(p, M, cell_size)
        cells[(row + 1) * n_cols + col].append(p)
    return cells


# ------------------------------------------------------------
# Periodic ghost layer
# ------------------------------------------------------------
def extension_cells(M):
    """Cells outside the base grid that the forward stencil reaches from a base cell."""
    reached = set()
    for row in range(M):
        for col in range(M):
            for dr, dc in FORWARD_STENCIL:
                r, c = row + dr, col + dc
                if not (0 <= r < M and 0 <= c < M):
                    reached.add((r, c))
    return sorted(reached)


def add_periodic_ghosts(cells, L, M):
    """
    Fill the reachable extension cells with shifted copies of base cells.

    Cell (row, col) receives the particles of base cell (row % M, col % M)
    shifted by (col // M * L, row // M * L). Only base cells are read, so
    ghosts are never copied again. Returns the list of ghosts created.
    """
    n_cols = M + 1
    ghosts = []
    for row, col in extension_cells(M):
        src = (row % M + 1) * n_cols + col % M
        dx = (col // M) * L
        dy = (row // M) * L
        dst = cells[(row + 1) * n_cols + col]
        for p in cells[src]:
            g = p.translated(dx, dy)
            dst.append(g)
            ghosts.append(g)
    return ghosts


# ------------------------------------------------------------
# Grid construction
# ------------------------------------------------------------
def _check_particles(particles):
    seen = set()
    for p in particles:
        if p.is_ghost:
            raise DataError(f"Particle {p.id} is a ghost copy, expected real particles only")
        if p.radius < 0:
            raise DataError(f"Particle {p.id} has negative radius {p.radius}")
        if p.id in seen:
            raise DataError(f"Duplicate particle id {p.id}")
        seen.add(p.id)


def resolve_grid(L, rc, radii):
    """
    Grid resolution for one snapshot.

    The selector's grid (cell > rc + max radius) is kept whenever it is
    wider than the largest pair reach, rc plus the two largest radii.
    Otherwise the grid is coarsened to that reach, down to a single cell,
    since a 1x1 grid lists every pair through the same-cell rule.

    Raises ConfigurationError only where the selector does.
    """
    largest = sorted(radii, reverse=True)[:2] + [0.0, 0.0]
    resolution = select_resolution(L, rc, largest[0])

    reach = rc + largest[0] + largest[1]
    if resolution.M == 1 or resolution.cell_size > reach:
        return resolution

    try:
        wider = select_resolution(L, rc + largest[1], largest[0])
    except ConfigurationError:
        wider = GridResolution(1, float(L))
    logger.debug("Cell %s is within pair reach %s, using M=%d, cell=%s",
                 resolution.cell_size, reach, wider.M, wider.cell_size)
    return wider


def build_grid(L, rc, particles, periodic=False):
    """
    Build the cell grid for one snapshot.

    Raises ConfigurationError when no safe grid exists for (L, rc, radii)
    and DataError for particles that cannot be bucketed.
    """
    particles = tuple(particles)
    _check_particles(particles)

    M, cell_size = resolve_grid(L, rc, [p.radius for p in particles])

    cells = partition(particles, L, M, cell_size)
    ghosts = add_periodic_ghosts(cells, L, M) if periodic else []

    logger.debug("Built %dx%d grid (cell %s) for %d particles, %d ghosts",
                 M, M, cell_size, len(particles), len(ghosts))

    return Grid(
        L=L,
        M=M,
        cell_size=cell_size,
        periodic=periodic,
        cells=tuple(tuple(c) for c in cells),
        particles=particles,
        ghosts=tuple(ghosts),
    )
