import numpy as np
import pytest

from cellindex.particle import Particle


@pytest.fixture
def random_particles():
    """Factory: n particles with random centres and radii in [0, max_radius)."""
    def make(n, L, max_radius, seed):
        rng = np.random.default_rng(seed)
        pos = rng.uniform(0.0, L, size=(n, 2))
        radii = rng.uniform(0.0, max_radius, size=n)
        return [Particle(i, float(x), float(y), float(r))
                for i, ((x, y), r) in enumerate(zip(pos, radii))]
    return make
