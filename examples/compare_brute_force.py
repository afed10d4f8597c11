import os
import sys
import time

import numpy as np
import matplotlib.pyplot as plt

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SCRIPT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cellindex.neighborlist import brute_force_neighbors, find_neighbors
from cellindex.placement import make_random_particles

# -----------------------------------------------------
# Inputs
# -----------------------------------------------------
L = 100.0
rc = 1.0
radius = 0.25
periodic = True
sizes = [100, 200, 500, 1000, 2000, 4000]
repeats = 3


def best_time(fn, *args, **kwargs):
    best = np.inf
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn(*args, **kwargs)
        best = min(best, time.perf_counter() - t0)
    return best


t_cim = np.zeros(len(sizes))
t_bf = np.zeros(len(sizes))

print("#     N     CIM (s)     brute (s)")
for k, n in enumerate(sizes):
    particles = make_random_particles(n, L, radius, seed=k)
    t_cim[k] = best_time(find_neighbors, L, rc, particles, periodic=periodic)
    t_bf[k] = best_time(brute_force_neighbors, L, rc, particles, periodic=periodic)
    print(f"{n:7d}  {t_cim[k]: .4e}  {t_bf[k]: .4e}")

# ================================================================
# ============================ PLOTS ==============================
# ================================================================
plt.figure(figsize=(7,5))
plt.plot(sizes, t_cim, "o-", label="cell index")
plt.plot(sizes, t_bf, "s-", label="brute force")
plt.xlabel("N")
plt.ylabel("time (s)")
plt.title(f"Neighbor search, L={L}, rc={rc}")
plt.legend()
plt.grid(True, alpha=0.3)
plt.tight_layout()
plt.savefig("cim_vs_brute_force.png", dpi=300)
print("Saved cim_vs_brute_force.png")
plt.show()
