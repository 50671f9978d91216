"""Cell growth, division and boundary confinement simulation."""

__version__ = "0.1.0"
