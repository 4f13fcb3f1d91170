"""Ray intersection tests against spheres, triangles and whole scenes."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from raytracer.objects import Material, Sphere, Triangle
from raytracer.vectors import EPSILON, MAX_RAY_DISTANCE, Ray, Vector

if TYPE_CHECKING:
    from raytracer.scene import Scene


class ObjectKind(enum.Enum):
    """Kind of object a ray hit."""

    NONE = 0
    SPHERE = 1
    TRIANGLE = 2


@dataclass
class Intersection:
    """Everything known about the point where a ray meets an object."""

    kind: ObjectKind
    pos: Vector
    obj: Union[Sphere, Triangle, None] = None
    normal: Vector = Vector()
    view_projection: float = 0.0
    inside_object: bool = False
    material: Material | None = None


def sphere_intersection(sphere: Sphere, ray: Ray, t: float) -> float | None:
    """Distance to the sphere along a unit-direction ray if nearer than ``t``."""
    dist = sphere.pos - ray.start
    b = ray.direction @ dist
    d = b * b - dist @ dist + sphere.size * sphere.size
    if d < 0.0:
        return None
    root = math.sqrt(d)
    t0 = b - root
    t1 = b + root
    if EPSILON < t0 < t:
        return t0
    if EPSILON < t1 < t:
        return t1
    return None


def triangle_intersection(triangle: Triangle, ray: Ray, t: float) -> float | None:
    """Distance to the triangle along the ray if nearer than ``t`` (Möller–Trumbore)."""
    e1 = triangle.p2 - triangle.p1
    e2 = triangle.p3 - triangle.p1
    h = ray.direction.cross(e2)
    det = e1 @ h
    # Ray parallel to the triangle's plane.
    if -EPSILON < det < EPSILON:
        return None
    inv_det = 1.0 / det
    s = ray.start - triangle.p1
    u = inv_det * (s @ h)
    if u < 0.0 or u > 1.0:
        return None
    q = s.cross(e1)
    v = inv_det * (q @ ray.direction)
    if v < 0.0 or u + v > 1.0:
        return None
    t0 = inv_det * (e2 @ q)
    if EPSILON < t0 < t:
        return t0
    return None


def calculate_intersection_response(scene: Scene, view_ray: Ray, hit: Intersection) -> Intersection:
    """Fill in the hit's normal, material, view projection and inside flag."""
    if hit.kind is ObjectKind.SPHERE:
        hit.normal = (hit.pos - hit.obj.pos).normalise()
        hit.material = scene.materials[hit.obj.material_id]
    elif hit.kind is ObjectKind.TRIANGLE:
        hit.normal = hit.obj.normal
        hit.material = scene.materials[hit.obj.material_id]
    else:
        raise ValueError("intersection has no object")

    hit.view_projection = view_ray.direction @ hit.normal
    hit.inside_object = hit.normal @ view_ray.direction > 0.0
    if hit.inside_object:
        hit.normal = hit.normal * -1.0
    return hit


def object_intersection(scene: Scene, view_ray: Ray) -> Intersection | None:
    """The nearest object the ray hits, or None."""
    t = MAX_RAY_DISTANCE
    kind = ObjectKind.NONE
    nearest: Union[Sphere, Triangle, None] = None

    for sphere in scene.spheres:
        hit_t = sphere_intersection(sphere, view_ray, t)
        if hit_t is not None:
            t, kind, nearest = hit_t, ObjectKind.SPHERE, sphere

    for triangle in scene.triangles:
        hit_t = triangle_intersection(triangle, view_ray, t)
        if hit_t is not None:
            t, kind, nearest = hit_t, ObjectKind.TRIANGLE, triangle

    if kind is ObjectKind.NONE:
        return None
    return Intersection(kind=kind, pos=view_ray.start + view_ray.direction * t, obj=nearest)