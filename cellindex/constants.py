# cellindex/constants.py

# Slack used when testing whether a cell width divides the box length
DIVISOR_TOLERANCE = 1e-6

# Smallest integer cell width tried by the resolution search
MIN_CELL_WIDTH = 2

# Forward half-stencil as (row, col) offsets: up, up-right, right, down-right.
# Together with the same-cell pass it visits every adjacent pair of cells once.
FORWARD_STENCIL = ((-1, 0), (-1, 1), (0, 1), (1, 1))

# Default file names used by the driver and the example scripts
DEFAULT_STATIC_FILE = "static.txt"
DEFAULT_DYNAMIC_FILE = "dynamic.txt"
DEFAULT_OUTPUT_FILE = "neighbors.txt"

# Number of random placements tried per particle before giving up
MAX_PLACEMENT_ATTEMPTS = 10000
