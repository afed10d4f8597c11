import logging
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SCRIPT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cellindex.driver import run
from cellindex.logging_config import setup_logging
from cellindex.placement import make_random_positions
from cellindex.utils import StaticConfig, write_static, write_dynamic
from cellindex.viz import visualize_grid

# -----------------------------------------------------
# Inputs
# -----------------------------------------------------
N = 200
L = 20.0
rc = 1.0
radius = 0.25
periodic = True
timestep = 0
highlight_id = 0

static_file = "static.txt"
dynamic_file = "dynamic.txt"
output_file = "neighbors.txt"

setup_logging(logging.INFO)

# -----------------------------------------------------
# Generate inputs if none are present
# -----------------------------------------------------
if not (os.path.exists(static_file) and os.path.exists(dynamic_file)):
    radii = [radius] * N
    write_static(StaticConfig(N, L, rc, radii), static_file)
    pos = make_random_positions(N, L, radii, seed=123, overlap=False, periodic=periodic)
    write_dynamic([(0.0, pos)], dynamic_file)

# -----------------------------------------------------
# Neighbor search
# -----------------------------------------------------
cim = run(static_file, dynamic_file, timestep=timestep,
          periodic=periodic, output_file=output_file)

neighbors = cim.neighbors()
near = sorted(q.id for q in neighbors.get(cim.grid.particles[highlight_id], []))
print(f"Particle {highlight_id}: {near}")

fig = visualize_grid(cim.grid, cim.rc, neighbors=neighbors, highlight_id=highlight_id)
fig.write_html("grid.html")
print("Saved grid.html")
