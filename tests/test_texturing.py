import pytest

from raytracer.colour import Colour
from raytracer.intersection import Intersection, ObjectKind
from raytracer.objects import Material, MaterialType
from raytracer.texturing import apply_checkerboard, apply_circles, apply_wood
from raytracer.vectors import Vector

RED = Colour(1.0, 0.0, 0.0)
BLUE = Colour(0.0, 0.0, 1.0)


def hit_at(pos: Vector, size: float = 1.0, offset: Vector = Vector(), kind=MaterialType.CHECKERBOARD):
    material = Material(type=kind, diffuse=RED, diffuse2=BLUE, size=size, offset=offset)
    return Intersection(kind=ObjectKind.SPHERE, pos=pos, material=material)


def test_checkerboard_even_cell_uses_second_colour():
    assert apply_checkerboard(hit_at(Vector(0.5, 0.5, 0.5))) == BLUE


def test_checkerboard_odd_cell_uses_first_colour():
    assert apply_checkerboard(hit_at(Vector(1.5, 0.5, 0.5))) == RED


def test_checkerboard_negative_cell_is_odd():
    assert apply_checkerboard(hit_at(Vector(-0.5, 0.5, 0.5))) == RED


def test_checkerboard_alternates_between_neighbours():
    for pos in [Vector(0.5, 0.5, 0.5), Vector(2.5, 3.5, -1.5), Vector(-4.5, 7.5, 0.5)]:
        a = apply_checkerboard(hit_at(pos))
        b = apply_checkerboard(hit_at(pos + Vector(1, 0, 0)))
        assert {a, b} == {RED, BLUE}


def test_checkerboard_offset_shifts_pattern():
    pos = Vector(0.5, 0.5, 0.5)
    shifted = apply_checkerboard(hit_at(pos, offset=Vector(1, 0, 0)))
    assert shifted != apply_checkerboard(hit_at(pos))
    assert shifted == RED


def test_circles_inner_shell_and_next_shell():
    assert apply_circles(hit_at(Vector(0.5, 0, 0), kind=MaterialType.CIRCLES)) == BLUE
    assert apply_circles(hit_at(Vector(0, 1.5, 0), kind=MaterialType.CIRCLES)) == RED


def test_circles_depend_only_on_distance():
    a = apply_circles(hit_at(Vector(2.5, 0, 0), kind=MaterialType.CIRCLES))
    b = apply_circles(hit_at(Vector(0, 0, -2.5), kind=MaterialType.CIRCLES))
    assert a == b


def test_wood_at_texture_origin_uses_second_colour():
    assert apply_wood(hit_at(Vector(3, 3, 3), offset=Vector(3, 3, 3), kind=MaterialType.WOOD)) == BLUE


@pytest.mark.parametrize("pos", [Vector(1.2, 3.4, 5.6), Vector(-7, 2, 9), Vector(0.1, -0.2, 13)])
def test_wood_is_scale_invariant(pos):
    base = apply_wood(hit_at(pos, kind=MaterialType.WOOD))
    scaled = apply_wood(hit_at(pos * 2.0, size=2.0, kind=MaterialType.WOOD))
    assert base == scaled
    assert base in (RED, BLUE)


def test_missing_material_rejected():
    hit = Intersection(kind=ObjectKind.SPHERE, pos=Vector())
    with pytest.raises(ValueError):
        apply_checkerboard(hit)


def test_zero_size_rejected():
    with pytest.raises(ZeroDivisionError):
        apply_circles(hit_at(Vector(1, 1, 1), size=0.0))