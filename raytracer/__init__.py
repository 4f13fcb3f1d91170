"""Ray tracer for sphere and triangle scenes described in plain-text files."""

__version__ = "1.0.0"

__all__ = [
    "cli",
    "colour",
    "config",
    "imageio",
    "intersection",
    "lighting",
    "objects",
    "render",
    "scene",
    "texturing",
    "vectors",
]