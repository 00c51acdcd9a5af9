"""Fluxes, boundary states, sensors, filters and partitioning for a 2D Euler DG solver."""

__version__ = "0.1.0"

__all__ = [
    "boundary",
    "dissipation",
    "filters",
    "fluids",
    "fluxes",
    "initialization",
    "locate",
    "partition",
    "riemann",
]