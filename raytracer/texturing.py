"""Procedurally generated textures choosing between a material's two colours."""

from __future__ import annotations

import math

from raytracer.colour import Colour
from raytracer.intersection import Intersection
from raytracer.objects import Material
from raytracer.vectors import Vector


def _texture_space(hit: Intersection) -> tuple[Material, Vector]:
    material = hit.material
    if material is None:
        raise ValueError("intersection has no material")
    return material, (hit.pos - material.offset) / material.size


def _pick(material: Material, which: int) -> Colour:
    return material.diffuse if which & 1 else material.diffuse2


def apply_checkerboard(hit: Intersection) -> Colour:
    """Alternate the two colours in unit cubes of texture space."""
    material, p = _texture_space(hit)
    return _pick(material, math.floor(p.x) + math.floor(p.y) + math.floor(p.z))


def apply_circles(hit: Intersection) -> Colour:
    """Alternate the two colours in concentric spherical shells."""
    material, p = _texture_space(hit)
    return _pick(material, math.floor(p.length()))


def apply_wood(hit: Intersection) -> Colour:
    """Alternate the two colours in distorted shells resembling wood grain."""
    material, p = _texture_space(hit)
    p = Vector(
        p.x * math.cos(p.y * 0.996) * math.sin(p.z * 1.023),
        math.cos(p.x) * p.y * math.sin(p.z * 1.211),
        math.cos(p.x * 1.473) * math.cos(p.y * 0.795) * p.z,
    )
    return _pick(material, math.floor(p.length()))