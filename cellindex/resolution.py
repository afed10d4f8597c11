# cellindex/resolution.py
import logging
from typing import NamedTuple

from cellindex.constants import DIVISOR_TOLERANCE, MIN_CELL_WIDTH
from cellindex.errors import ConfigurationError

logger = logging.getLogger(__name__)


class GridResolution(NamedTuple):
    M: int            # cells per side
    cell_size: float  # M * cell_size == L


def _divides(L, width, tolerance):
    rem = L % width
    return rem < tolerance or width - rem < tolerance


def select_resolution(L, rc, max_radius, tolerance=DIVISOR_TOLERANCE):
    """
    Pick the finest square grid that is still safe for the cutoff.

    Integer cell widths 2, 3, ... are tried in order; the first width that
    divides L (within ``tolerance``) and is wider than rc + max_radius wins.
    Widths never exceed L, so the search always ends.

    Returns
    -------
    GridResolution(M, cell_size)

    Raises
    ------
    ConfigurationError
        if L is not positive, rc or max_radius is negative,
        rc + max_radius >= L, or no integer width in [2, L] qualifies.
    """
    if L <= 0:
        raise ConfigurationError(f"Box length must be positive, got L={L}")
    if rc < 0 or max_radius < 0:
        raise ConfigurationError(
            f"Cutoff and radius must be non-negative, got rc={rc}, max_radius={max_radius}"
        )

    margin = rc + max_radius
    if margin >= L:
        raise ConfigurationError(
            f"rc + max_radius = {margin} does not fit in box of length L={L}"
        )

    width = MIN_CELL_WIDTH
    while width <= L + tolerance:
        if _divides(L, width, tolerance):
            M = int(round(L / width))
            # M < L / margin  <=>  width > margin
            if margin == 0 or M < L / margin:
                logger.debug("Grid resolution for L=%s, margin=%s: M=%d, cell=%s",
                             L, margin, M, width)
                return GridResolution(M, float(width))
        width += 1

    raise ConfigurationError(
        f"No integer cell width in [{MIN_CELL_WIDTH}, {L}] divides L={L} "
        f"and exceeds rc + max_radius = {margin}"
    )
