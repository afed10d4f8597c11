# cellindex/utils.py
from typing import List, NamedTuple

from cellindex.errors import DataError
from cellindex.particle import Particle


class StaticConfig(NamedTuple):
    N: int
    L: float
    rc: float
    radii: List[float]


class Frame(NamedTuple):
    time: float
    particles: List[Particle]


def _parse(value, kind, what, filename):
    try:
        return kind(value)
    except ValueError:
        raise DataError(f"{filename}: cannot read {what} from {value!r}") from None


# ------------------------------------------------------------
# Static file: N, L, rc, then N radii (one value per line)
# ------------------------------------------------------------
def read_static(filename):
    with open(filename) as f:
        lines = [line.strip() for line in f if line.strip()]

    if len(lines) < 3:
        raise DataError(f"{filename}: expected N, L and rc on the first three lines")

    N = _parse(lines[0], int, "particle count", filename)
    L = _parse(lines[1], float, "box length", filename)
    rc = _parse(lines[2], float, "cutoff", filename)

    radii = [_parse(v, float, "radius", filename) for v in lines[3:3 + N]]
    if len(radii) != N:
        raise DataError(f"{filename}: expected {N} radii, found {len(radii)}")

    return StaticConfig(N, L, rc, radii)


def write_static(config, filename):
    with open(filename, "w") as f:
        f.write(f"{config.N}\n{config.L}\n{config.rc}\n")
        for r in config.radii:
            f.write(f"{r}\n")


# ------------------------------------------------------------
# Dynamic file: repeated frames of a time line and N "x y" lines
# ------------------------------------------------------------
def read_dynamic(filename, radii):
    """
    Yield Frame(time, particles) for each timestep, in file order.

    A frame that is cut short or has a malformed line raises DataError
    before it is yielded.
    """
    N = len(radii)
    with open(filename) as f:
        lines = (line.strip() for line in f)
        lines = (line for line in lines if line)

        for header in lines:
            time = _parse(header, float, "time", filename)
            particles = []
            for i in range(N):
                line = next(lines, None)
                if line is None:
                    raise DataError(
                        f"{filename}: timestep t={time} ends after {i} of {N} particles"
                    )
                fields = line.split()
                if len(fields) < 2:
                    raise DataError(f"{filename}: expected 'x y', got {line!r}")
                x = _parse(fields[0], float, "x", filename)
                y = _parse(fields[1], float, "y", filename)
                particles.append(Particle(i, x, y, radii[i]))
            yield Frame(time, particles)


def write_dynamic(frames, filename):
    """frames: iterable of (time, positions) with positions an (N, 2) array-like."""
    with open(filename, "w") as f:
        for time, positions in frames:
            f.write(f"{time}\n")
            for x, y in positions:
                f.write(f"{x:.8f} {y:.8f}\n")


# ------------------------------------------------------------
# Neighbor output: "id n1 n2 ..." per particle
# ------------------------------------------------------------
def write_neighbors(neighbor_map, filename, ids=None):
    """
    Write one line per particle id, sorted. ``ids`` lists every particle
    to report, so particles without neighbors still get a line.
    """
    by_id = {p.id: sorted(q.id for q in qs) for p, qs in neighbor_map.items()}
    if ids is None:
        ids = by_id.keys()

    with open(filename, "w") as f:
        for pid in sorted(ids):
            f.write(" ".join(str(v) for v in [pid] + by_id.get(pid, [])) + "\n")
