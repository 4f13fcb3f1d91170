import pytest

from raytracer.intersection import (
    Intersection,
    ObjectKind,
    calculate_intersection_response,
    object_intersection,
    sphere_intersection,
    triangle_intersection,
)
from raytracer.objects import Material, Sphere, Triangle
from raytracer.scene import Scene
from raytracer.vectors import MAX_RAY_DISTANCE, Ray, Vector

FORWARD = Ray(Vector(0, 0, 0), Vector(0, 0, 1))


def make_triangle(z: float, material_id: int = 0) -> Triangle:
    triangle = Triangle(Vector(-1, -1, z), Vector(1, -1, z), Vector(0, 1, z), material_id=material_id)
    triangle.compute_normal()
    return triangle


def test_sphere_hit_front_surface():
    sphere = Sphere(Vector(0, 0, 10), 1.0)
    t = sphere_intersection(sphere, FORWARD, MAX_RAY_DISTANCE)
    assert t == pytest.approx(sphere.pos.z - sphere.size)


def test_sphere_missed():
    sphere = Sphere(Vector(0, 0, 10), 1.0)
    assert sphere_intersection(sphere, Ray(Vector(), Vector(0, 1, 0)), MAX_RAY_DISTANCE) is None


def test_sphere_beyond_limit_ignored():
    sphere = Sphere(Vector(0, 0, 10), 1.0)
    assert sphere_intersection(sphere, FORWARD, 5.0) is None


def test_sphere_hit_from_inside_uses_far_root():
    sphere = Sphere(Vector(0, 0, 0), 2.0)
    t = sphere_intersection(sphere, FORWARD, MAX_RAY_DISTANCE)
    assert t == pytest.approx(sphere.size)


def test_triangle_hit():
    triangle = make_triangle(5.0)
    t = triangle_intersection(triangle, FORWARD, MAX_RAY_DISTANCE)
    assert t == pytest.approx(triangle.p1.z)


def test_triangle_parallel_ray_misses():
    triangle = make_triangle(5.0)
    ray = Ray(Vector(0, 0, 5), Vector(1, 0, 0))
    assert triangle_intersection(triangle, ray, MAX_RAY_DISTANCE) is None


def test_triangle_outside_edges_misses():
    triangle = make_triangle(5.0)
    ray = Ray(Vector(5, 5, 0), Vector(0, 0, 1))
    assert triangle_intersection(triangle, ray, MAX_RAY_DISTANCE) is None


def test_triangle_behind_ray_misses():
    triangle = make_triangle(-5.0)
    assert triangle_intersection(triangle, FORWARD, MAX_RAY_DISTANCE) is None


def test_object_intersection_picks_nearest():
    near = Sphere(Vector(0, 0, 5), 1.0)
    far = Sphere(Vector(0, 0, 20), 1.0)
    scene = Scene(materials=[Material()], spheres=[far, near], triangles=[make_triangle(10.0)])
    hit = object_intersection(scene, FORWARD)
    assert hit.kind is ObjectKind.SPHERE
    assert hit.obj is near
    assert hit.pos.z == pytest.approx(near.pos.z - near.size)


def test_object_intersection_triangle_in_front():
    triangle = make_triangle(2.0)
    scene = Scene(materials=[Material()], spheres=[Sphere(Vector(0, 0, 10), 1.0)], triangles=[triangle])
    hit = object_intersection(scene, FORWARD)
    assert hit.kind is ObjectKind.TRIANGLE
    assert hit.obj is triangle


def test_object_intersection_none():
    scene = Scene(spheres=[Sphere(Vector(0, 10, 0), 1.0)])
    assert object_intersection(scene, FORWARD) is None


def test_response_for_sphere_from_outside():
    materials = [Material(power=1.0), Material(power=2.0)]
    sphere = Sphere(Vector(0, 0, 10), 1.0, material_id=1)
    scene = Scene(materials=materials, spheres=[sphere])
    hit = calculate_intersection_response(scene, FORWARD, object_intersection(scene, FORWARD))
    assert hit.material is materials[1]
    assert hit.inside_object is False
    assert hit.normal.x == pytest.approx(0.0)
    assert hit.normal.z == pytest.approx(-1.0)
    assert hit.view_projection == pytest.approx(-1.0)


def test_response_for_sphere_from_inside_flips_normal():
    sphere = Sphere(Vector(0, 0, 0), 2.0)
    scene = Scene(materials=[Material()], spheres=[sphere])
    hit = calculate_intersection_response(scene, FORWARD, object_intersection(scene, FORWARD))
    assert hit.inside_object is True
    assert hit.view_projection > 0.0
    assert hit.normal @ FORWARD.direction < 0.0
    assert hit.normal.length() == pytest.approx(1.0)


def test_response_for_triangle_uses_stored_normal():
    triangle = make_triangle(5.0)
    scene = Scene(materials=[Material()], triangles=[triangle])
    hit = calculate_intersection_response(scene, FORWARD, object_intersection(scene, FORWARD))
    # The stored normal faces the ray, so the surface is seen from the outside.
    assert hit.inside_object is (triangle.normal @ FORWARD.direction > 0.0)
    assert hit.normal @ FORWARD.direction <= 0.0
    assert hit.material is scene.materials[0]


def test_response_without_object_rejected():
    with pytest.raises(ValueError):
        calculate_intersection_response(Scene(), FORWARD, Intersection(ObjectKind.NONE, Vector()))