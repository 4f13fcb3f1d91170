"""Diffuse and specular lighting with hard shadows."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable

from raytracer.colour import Colour
from raytracer.intersection import Intersection, sphere_intersection, triangle_intersection
from raytracer.objects import Light, Material, MaterialType
from raytracer.texturing import apply_checkerboard, apply_circles, apply_wood
from raytracer.vectors import Ray

if TYPE_CHECKING:
    from raytracer.scene import Scene

_TEXTURES: dict[MaterialType, Callable[[Intersection], Colour]] = {
    MaterialType.CHECKERBOARD: apply_checkerboard,
    MaterialType.CIRCLES: apply_circles,
    MaterialType.WOOD: apply_wood,
}


def _material(hit: Intersection) -> Material:
    if hit.material is None:
        raise ValueError("intersection has no material")
    return hit.material


def is_in_shadow(scene: Scene, light_ray: Ray, light_dist: float) -> bool:
    """True if any object lies on the light ray closer than ``light_dist``."""
    if any(sphere_intersection(s, light_ray, light_dist) is not None for s in scene.spheres):
        return True
    return any(
        triangle_intersection(tri, light_ray, light_dist) is not None for tri in scene.triangles
    )


def apply_diffuse(light_ray: Ray, light: Light, hit: Intersection) -> Colour:
    """Lambertian contribution of one light, coloured by the material or its texture."""
    material = _material(hit)
    texture = _TEXTURES.get(material.type)
    surface = material.diffuse if texture is None else texture(hit)
    lambert = light_ray.direction @ hit.normal
    return lambert * light.intensity * surface


def apply_specular(
    light_ray: Ray, light: Light, light_projection: float, view_ray: Ray, hit: Intersection
) -> Colour:
    """Blinn specular contribution of one light."""
    material = _material(hit)
    blinn_dir = light_ray.direction - view_ray.direction
    squared = blinn_dir.length_squared()
    if squared == 0.0:
        return Colour()
    blinn = (1.0 / math.sqrt(squared)) * max(light_projection - hit.view_projection, 0.0)
    blinn = blinn**material.power
    return blinn * material.specular * light.intensity


def apply_lighting(scene: Scene, view_ray: Ray, hit: Intersection) -> Colour:
    """Sum the diffuse and specular light reaching the hit point from every light."""
    output = Colour()
    for light in scene.lights:
        to_light = light.pos - hit.pos
        facing = to_light @ hit.normal
        # The light is behind the surface.
        if facing <= 0.0:
            continue
        light_dist = to_light.length()
        inv_light_dist = 1.0 / light_dist
        light_projection = inv_light_dist * facing
        light_ray = Ray(hit.pos, to_light * inv_light_dist)
        if not is_in_shadow(scene, light_ray, light_dist):
            output = output + apply_diffuse(light_ray, light, hit)
            output = output + apply_specular(light_ray, light, light_projection, view_ray, hit)
    return output