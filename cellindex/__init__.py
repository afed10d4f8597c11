# cellindex/__init__.py
"""Cell-index (linked-cell) neighbor search for circular particles in a square box."""
