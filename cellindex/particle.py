# cellindex/particle.py
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Particle:
    """
    Circular particle at one timestep.

    Ghosts are translated copies used for periodic neighbor lookup.
    They keep the id and radius of the particle they were made from and
    point back to it through ``source``.
    """

    id: int
    x: float
    y: float
    radius: float = 0.0
    source: Optional["Particle"] = field(default=None, compare=False, repr=False)

    @property
    def is_ghost(self):
        return self.source is not None

    @property
    def origin(self):
        """The real particle behind this record (itself if not a ghost)."""
        return self.source if self.source is not None else self

    def translated(self, dx, dy):
        """Return a ghost copy shifted by (dx, dy)."""
        return Particle(self.id, self.x + dx, self.y + dy, self.radius, source=self.origin)
