"""Interactive wireframe viewer for .fdf height maps: map loading, view transforms and a pygame window."""

__version__ = "0.1.0"