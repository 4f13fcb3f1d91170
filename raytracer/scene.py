"""Scene description: camera, materials, spheres, triangle models and lights."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field

from raytracer.config import Config, ConfigError
from raytracer.objects import Light, Material, MaterialType, Sphere, Triangle
from raytracer.vectors import PIOVER180, Vector

SCENE_VERSION_MAJOR = 1
SCENE_VERSION_MINOR = 5

_MATERIAL_TYPES = {
    "checkerboard": MaterialType.CHECKERBOARD,
    "wood": MaterialType.WOOD,
    "circles": MaterialType.CIRCLES,
}


class SceneError(ValueError):
    """Raised when a scene description is malformed."""


@dataclass
class Scene:
    """A single static scene."""

    camera_position: Vector = Vector()
    camera_rotation: float = -45.0 * PIOVER180
    camera_field_of_view: float = 45.0
    exposure: float = 1.0
    skybox_material_id: int = 0
    materials: list[Material] = field(default_factory=list)
    spheres: list[Sphere] = field(default_factory=list)
    triangles: list[Triangle] = field(default_factory=list)
    lights: list[Light] = field(default_factory=list)


def _enter(config: Config, section: str, kind: str) -> None:
    try:
        config.set_section(section)
    except ConfigError as err:
        raise SceneError(f"Malformed Scene file: Missing {kind} section ({section}).") from err


def _count(config: Config, name: str) -> int:
    value = config.get_integer(name, 0)
    if value < 0:
        raise SceneError(f"Malformed Scene file: negative {name}.")
    return value


def _read_material(config: Config) -> Material:
    kind = _MATERIAL_TYPES.get(config.get_string("Type", ""), MaterialType.GOURAUD)
    return Material(
        type=kind,
        size=config.get_float("Size", 0.0),
        offset=config.get_vector("Offset", Vector()),
        diffuse=config.get_float_or_colour("Diffuse", 0.0),
        diffuse2=config.get_float_or_colour("Diffuse2", 0.0),
        reflection=config.get_float("Reflection", 0.0),
        refraction=config.get_float("Refraction", 0.0),
        density=config.get_float("Density", 0.0),
        specular=config.get_float_or_colour("Specular", 0.0),
        power=config.get_float("Power", 0.0),
    )


def _read_model(config: Config) -> list[Triangle]:
    offset = config.get_vector("Center", Vector())
    scale = config.get_float("Size", 1.0)
    count = _count(config, "Triangles")
    material_id = config.get_integer("Material.Id", 0)

    triangles = []
    for index in range(count):
        triangle = config.get_triangle(f"Triangle{index}", Triangle())
        triangle.material_id = material_id
        try:
            triangle.compute_normal()
        except ValueError:
            # A degenerate triangle has no normal; it can never be hit either.
            triangle.normal = Vector(math.nan, math.nan, math.nan)
        triangle.p1 = triangle.p1 * scale + offset
        triangle.p2 = triangle.p2 * scale + offset
        triangle.p3 = triangle.p3 * scale + offset
        triangles.append(triangle)
    return triangles


def _read_sphere(config: Config, num_materials: int) -> Sphere:
    sphere = Sphere(
        pos=config.get_vector("Center", Vector()),
        size=config.get_float("Size", 0.0),
        material_id=config.get_integer("Material.Id", 0),
    )
    if not 0 <= sphere.material_id < num_materials:
        raise SceneError("Malformed Scene file: Sphere Material Id not valid.")
    return sphere


def _read_light(config: Config) -> Light:
    return Light(
        pos=config.get_vector("Position", Vector()),
        intensity=config.get_float_or_colour("Intensity", 0.0),
    )


def scene_from_config(config: Config) -> Scene:
    """Build a Scene from a parsed scene description."""
    try:
        config.set_section("Scene")
    except ConfigError as err:
        raise SceneError("Malformed Scene file: No Scene section.") from err

    major = config.get_integer("Version.Major", 0)
    minor = config.get_integer("Version.Minor", 0)
    if major != SCENE_VERSION_MAJOR or minor != SCENE_VERSION_MINOR:
        raise SceneError("Malformed Scene file: Wrong scene file version.")

    scene = Scene()
    scene.skybox_material_id = config.get_integer("Skybox.Material.Id", 0)
    scene.camera_position = config.get_vector("Camera.Position", Vector())
    scene.camera_rotation = -config.get_float("Camera.Rotation", 45.0) * PIOVER180
    scene.camera_field_of_view = config.get_float("Camera.FieldOfView", 45.0)
    if not 0.0 < scene.camera_field_of_view < 189.0:
        raise SceneError("Malformed Scene file: Out of range FOV.")
    scene.exposure = config.get_float("Exposure", 1.0)

    num_materials = _count(config, "NumberOfMaterials")
    num_spheres = _count(config, "NumberOfSpheres")
    num_lights = _count(config, "NumberOfLights")
    num_models = _count(config, "NumberOfModels")

    # Every model section must exist before anything is read from them.
    for index in range(num_models):
        _enter(config, f"Model{index}", "Model")
        _count(config, "Triangles")

    for index in range(num_materials):
        _enter(config, f"Material{index}", "Material")
        scene.materials.append(_read_material(config))

    for index in range(num_models):
        _enter(config, f"Model{index}", "Model")
        scene.triangles.extend(_read_model(config))

    for index in range(num_spheres):
        _enter(config, f"Sphere{index}", "Sphere")
        scene.spheres.append(_read_sphere(config, num_materials))

    for index in range(num_lights):
        _enter(config, f"Light{index}", "Light")
        scene.lights.append(_read_light(config))

    return scene


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and build a Scene from a scene file."""
    try:
        with open(path, encoding="utf-8", errors="replace") as stream:
            text = stream.read()
    except OSError as err:
        raise SceneError(f"cannot read scene file {os.fspath(path)!r}") from err
    try:
        config = Config.from_text(text)
    except ConfigError as err:
        raise SceneError(f"Malformed Scene file: {err}") from err
    return scene_from_config(config)