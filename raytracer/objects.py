"""Materials and the objects a scene is made of."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from raytracer.colour import Colour
from raytracer.vectors import Vector


class MaterialType(enum.Enum):
    """How a material's diffuse colour is produced."""

    GOURAUD = 0
    CHECKERBOARD = 1
    CIRCLES = 2
    WOOD = 3


@dataclass
class Material:
    """Surface properties shared by scene objects."""

    type: MaterialType = MaterialType.GOURAUD
    diffuse: Colour = Colour()
    # Second colour, used by the generated textures.
    diffuse2: Colour = Colour()
    offset: Vector = Vector()
    size: float = 0.0
    specular: Colour = Colour()
    power: float = 0.0
    reflection: float = 0.0
    refraction: float = 0.0
    density: float = 0.0


@dataclass
class Sphere:
    """A sphere given by its centre and radius."""

    pos: Vector = Vector()
    size: float = 0.0
    material_id: int = 0


@dataclass
class Light:
    """A point light."""

    pos: Vector = Vector()
    intensity: Colour = Colour()


@dataclass
class Triangle:
    """A triangle with a precomputed surface normal."""

    p1: Vector = Vector()
    p2: Vector = Vector()
    p3: Vector = Vector()
    normal: Vector = Vector()
    material_id: int = 0

    def compute_normal(self) -> Vector:
        """Compute the unit normal from the corners, store it and return it."""
        edge1 = self.p2 - self.p1
        edge2 = self.p3 - self.p1
        self.normal = edge1.cross(edge2).normalise()
        return self.normal