"""Linear tetrahedral finite elements for stationary reaction-diffusion problems on a box."""

__version__ = "0.1.0"