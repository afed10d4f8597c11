# cellindex/placement.py
import numpy as np

from cellindex.constants import MAX_PLACEMENT_ATTEMPTS
from cellindex.errors import ConfigurationError
from cellindex.particle import Particle


def make_random_positions(n, L, radii, seed=123, overlap=True, periodic=False):
    """
    Uniform random centres in [0, L) x [0, L).

    With ``overlap=False`` a candidate is redrawn while it overlaps an
    already placed particle (minimum image when ``periodic``).
    Return: positions, shape (n, 2)
    """
    rng = np.random.default_rng(seed)
    radii = np.broadcast_to(np.asarray(radii, dtype=float), (n,))

    if overlap:
        return rng.uniform(0.0, L, size=(n, 2))

    positions = np.empty((n, 2))
    for i in range(n):
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            candidate = rng.uniform(0.0, L, size=2)
            d = positions[:i] - candidate
            if periodic:
                d -= L * np.round(d / L)
            if np.all(np.linalg.norm(d, axis=1) >= radii[:i] + radii[i]):
                positions[i] = candidate
                break
        else:
            raise ConfigurationError(
                f"Could not place particle {i} of {n} without overlap in box L={L}"
            )
    return positions


def make_random_particles(n, L, radius=0.0, seed=123, overlap=True, periodic=False):
    """Random particles with ids 0..n-1; ``radius`` is a scalar or one value per particle."""
    radii = np.broadcast_to(np.asarray(radius, dtype=float), (n,))
    positions = make_random_positions(n, L, radii, seed=seed, overlap=overlap, periodic=periodic)
    return [
        Particle(i, float(x), float(y), float(r))
        for i, ((x, y), r) in enumerate(zip(positions, radii))
    ]
