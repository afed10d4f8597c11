# cellindex/errors.py


class CellIndexError(Exception):
    """Base class for errors raised while building a cell grid."""


class ConfigurationError(CellIndexError, ValueError):
    """Box length, cutoff and radii admit no safe grid."""


class DataError(CellIndexError, ValueError):
    """Particle data is inconsistent with the box or the static input."""
