"""Scene graph, components, controllers, windows, viewports and OBJ/MTL loading for a small game engine."""

__version__ = "0.1.0"

__all__ = [
    "input",
    "window",
    "viewport",
    "geometry",
    "components",
    "controllers",
    "scene",
    "objloader",
]