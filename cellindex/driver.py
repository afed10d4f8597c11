# cellindex/driver.py
import logging
import time

from cellindex.constants import DEFAULT_DYNAMIC_FILE, DEFAULT_STATIC_FILE
from cellindex.errors import CellIndexError, DataError
from cellindex.neighborlist import CellIndexMethod
from cellindex.utils import read_dynamic, read_static, write_neighbors

logger = logging.getLogger(__name__)


def load_frame(static_file=DEFAULT_STATIC_FILE, dynamic_file=DEFAULT_DYNAMIC_FILE, timestep=0):
    """
    Read the static file and the requested timestep of the dynamic file.
    Return: StaticConfig, Frame
    """
    config = read_static(static_file)
    # read_dynamic builds exactly N particles per frame and raises on a short one
    for k, frame in enumerate(read_dynamic(dynamic_file, config.radii)):
        if k == timestep:
            return config, frame
    raise DataError(f"{dynamic_file} has no timestep {timestep}")


def run(static_file=DEFAULT_STATIC_FILE, dynamic_file=DEFAULT_DYNAMIC_FILE,
        timestep=0, periodic=True, output_file=None, rc=None):
    """
    Neighbor search for one timestep of a static/dynamic input pair.

    ``rc`` overrides the cutoff from the static file.
    Return: CellIndexMethod (grid built, neighbors computed)
    """
    config, frame = load_frame(static_file, dynamic_file, timestep)
    rc = config.rc if rc is None else rc

    t0 = time.perf_counter()
    cim = CellIndexMethod(config.L, rc, frame.particles, periodic=periodic)
    neighbors = cim.neighbors()
    elapsed = time.perf_counter() - t0

    logger.info(
        "t=%s: N=%d, L=%s, rc=%s, M=%d, periodic=%s -> %d pairs in %.4f s",
        frame.time, config.N, config.L, rc, cim.M, periodic, len(cim.pairs), elapsed,
    )

    if output_file is not None:
        write_neighbors(neighbors, output_file, ids=range(config.N))
        logger.info("Neighbors written to %s", output_file)

    return cim


def run_all(static_file=DEFAULT_STATIC_FILE, dynamic_file=DEFAULT_DYNAMIC_FILE, periodic=True):
    """
    Neighbor search for every timestep. A timestep whose grid cannot be
    built is logged and skipped. A malformed or truncated frame ends the
    run, keeping the timesteps read before it.
    Return: list of (time, neighbor map)
    """
    config = read_static(static_file)
    results = []
    try:
        for frame in read_dynamic(dynamic_file, config.radii):
            try:
                cim = CellIndexMethod(config.L, config.rc, frame.particles, periodic=periodic)
            except CellIndexError as e:
                logger.warning("Skipping timestep t=%s: %s", frame.time, e)
                continue
            results.append((frame.time, cim.neighbors()))
    except DataError as e:
        logger.warning("Stopping after %d timesteps: %s", len(results), e)
    return results
