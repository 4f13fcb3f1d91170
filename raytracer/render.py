"""Ray tracing of a scene into a buffer of packed pixels."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from raytracer.colour import Colour
from raytracer.intersection import Intersection, calculate_intersection_response, object_intersection
from raytracer.lighting import apply_lighting
from raytracer.vectors import (
    DEFAULT_REFRACTIVE_INDEX,
    MAX_HEIGHT,
    MAX_RAYS_CAST,
    MAX_WIDTH,
    PIOVER180,
    Ray,
    Vector,
)

if TYPE_CHECKING:
    from raytracer.scene import Scene


def calculate_reflection(view_ray: Ray, hit: Intersection) -> Ray:
    """Reflect the view ray about the hit's normal."""
    return Ray(hit.pos, view_ray.direction - hit.normal * hit.view_projection * 2.0)


def calculate_refraction(
    view_ray: Ray, hit: Intersection, refractive_index: float
) -> tuple[Ray, float]:
    """Refract the view ray through the hit surface.

    Returns the transmitted ray and the refractive index of the medium it
    now travels in.
    """
    if hit.material is None:
        raise ValueError("intersection has no material")
    new_index = DEFAULT_REFRACTIVE_INDEX if hit.inside_object else hit.material.density
    ratio = refractive_index / new_index

    cos_i = abs(hit.view_projection)
    if cos_i >= 1.0:
        cos_t = 1.0
    else:
        sin_t = ratio * math.sqrt(1.0 - cos_i * cos_i)
        # Past the critical angle the surface is purely reflective.
        cos_t = 0.0 if sin_t * sin_t >= 1.0 else math.sqrt(1.0 - sin_t * sin_t)

    direction = (view_ray.direction + hit.normal * cos_i) * ratio - hit.normal * cos_t
    return Ray(hit.pos, direction), new_index


def trace_ray(scene: Scene, view_ray: Ray) -> Colour:
    """Follow one ray through reflections and refractions and return its colour."""
    output = Colour()
    refractive_index = DEFAULT_REFRACTIVE_INDEX
    coef = 1.0

    for _ in range(MAX_RAYS_CAST):
        hit = object_intersection(scene, view_ray)
        if hit is None:
            break
        calculate_intersection_response(scene, view_ray, hit)
        material = hit.material

        if not hit.inside_object:
            output = output + coef * apply_lighting(scene, view_ray, hit)

        if material.reflection:
            view_ray = calculate_reflection(view_ray, hit)
            coef *= material.reflection
        elif material.refraction:
            view_ray, refractive_index = calculate_refraction(view_ray, hit, refractive_index)
            coef *= material.refraction
        else:
            return output

    if coef > 0.0:
        output = output + coef * scene.materials[scene.skybox_material_id].diffuse
    return output


def render(scene: Scene, width: int, height: int, aa_level: int) -> list[int]:
    """Render the scene into ``width * height`` pixels packed as 0x00BBGGRR.

    Pixels are filled in row order from the top-left; for odd sizes the
    last row and column are left black.
    """
    if width <= 0 or height <= 0:
        raise ValueError("image size must be positive")
    if width > MAX_WIDTH or height > MAX_HEIGHT:
        raise ValueError(f"image size is limited to {MAX_WIDTH}x{MAX_HEIGHT}")
    if aa_level < 1:
        raise ValueError("anti-aliasing level must be at least 1")

    dir_step = 1.0 / (0.5 * width / math.tan(PIOVER180 * 0.5 * scene.camera_field_of_view))
    cos_r = math.cos(scene.camera_rotation)
    sin_r = math.sin(scene.camera_rotation)
    sample_step = 1.0 / aa_level
    sample_ratio = 1.0 / (aa_level * aa_level)
    offsets = [i * sample_step for i in range(aa_level)]

    pixels: list[int] = []
    for y in range(-(height // 2), height // 2):
        for x in range(-(width // 2), width // 2):
            output = Colour()
            for dx in offsets:
                for dy in offsets:
                    fx = (x + dx) * dir_step
                    fy = (y + dy) * dir_step
                    rotated = Vector(fx * cos_r - sin_r, fy, fx * sin_r + cos_r)
                    view_ray = Ray(scene.camera_position, rotated.normalise())
                    output = output + sample_ratio * trace_ray(scene, view_ray)
            pixels.append(output.to_pixel(scene.exposure))

    pixels.extend([0] * (width * height - len(pixels)))
    return pixels