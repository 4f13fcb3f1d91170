# raytracer

A compact ray tracer that renders scenes made of spheres and triangle
models. It supports diffuse and Blinn specular lighting with hard shadows,
reflection, refraction, procedural textures (checkerboard, circles and
wood) and a skybox colour, and writes the result as a 24-bit BMP image.

## Installation

```
pip install .
```

The package has no runtime dependencies beyond the standard library.

## Command line

```
raytracer -input scenes/spheres.txt -size 640 480 -samples 2 -runs 1 -output out.bmp
```

Options:

| Option               | Meaning                                               | Default |
|----------------------|-------------------------------------------------------|---------|
| `-input FILE`        | scene file to read                                    | `../Scenes/5000spheres.txt` |
| `-output FILE`       | BMP file to write                                     | `../Outputs/<scene>_<W>x<H>x<N>_<program>.bmp` |
| `-size W H`          | image width and height in pixels                      | `960 540` |
| `-samples N`         | anti-aliasing level (N x N samples per pixel)         | `1` |
| `-runs N`            | number of times to render, for timing (at least 1)    | `5` |
| `-threads N`         | accepted, currently unused                            | `1` |
| `-colourise`         | accepted, currently unused                            | off |
| `-blockSize N`       | accepted, currently unused                            | `-1` |

Unknown arguments are reported on standard error and ignored. An option
missing its value, an unreadable or malformed scene file, an image size
outside 1..2048 in either direction, a sample count below 1, or an output
file that cannot be written is reported on standard error and the command
exits with status 1. After rendering, the average time per run is printed
in milliseconds, for example:

```
average time taken (1 run(s)): 5321ms
```

The default output name is built from the last `/`-separated part of the
input path and the last `\`-separated part of the program name; its
directory must already exist.

## Scene files

A scene file is a set of named sections holding `name = value;` pairs.
All spaces, tabs and line breaks are ignored and `//` starts a comment that
runs to the end of the line. A repeated section name, an unclosed section,
a variable without a name or value, or a missing `;` is a syntax error.

```
Scene
{
    Version.Major = 1;
    Version.Minor = 5;
    Camera.Position = 0.0, 0.0, -10.0;
    Camera.Rotation = 0.0;
    Camera.FieldOfView = 45.0;
    Exposure = -1.0;
    Skybox.Material.Id = 0;
    NumberOfMaterials = 2;
    NumberOfSpheres = 1;
    NumberOfLights = 1;
    NumberOfModels = 0;
}

Material0 { Diffuse = 0.1, 0.1, 0.3; }

Material1
{
    Type = checkerboard;
    Size = 1.0;
    Diffuse = 1.0, 1.0, 1.0;
    Diffuse2 = 0.0, 0.0, 0.0;
    Specular = 0.5;
    Power = 30.0;
    Reflection = 0.3;
}

Sphere0 { Center = 0.0, 0.0, 0.0; Size = 2.0; Material.Id = 1; }

Light0 { Position = 5.0, 5.0, -10.0; Intensity = 1.0, 1.0, 1.0; }
```

Notes on the `Scene` section:

- Only version 1.5 is accepted.
- `Camera.Rotation` is in degrees (default 45) and `Camera.FieldOfView`
  must lie strictly between 0 and 189 (default 45).
- A channel is written as `255 * (1 - exp(value * Exposure))`, so
  `Exposure` must be negative for anything but black to appear; the
  default of 1.0 renders a black image.
- `Skybox.Material.Id` names the material whose diffuse colour is seen
  where rays leave the scene.

Material types are `checkerboard`, `circles`, `wood`, or a plain colour
for any other or missing `Type`. Procedural textures use `Size` and
`Offset` to place the pattern and alternate between `Diffuse` and
`Diffuse2`. `Reflection` and `Refraction` give the share of light that
continues along a reflected or refracted ray (reflection wins if both are
set); `Density` is the refractive index. Colours may be given as one
number (grey) or as three comma-separated components.

Spheres need a `Material.Id` below `NumberOfMaterials`. Models (`Model0`,
`Model1`, ...) give `Triangles = N;` followed by `Triangle0` ...
`TriangleN-1`, each holding nine comma-separated coordinates, plus
optional `Center` (offset), `Size` (scale, default 1) and `Material.Id`.
Lights give `Position` and `Intensity`.

## Library use

```python
from raytracer.scene import load_scene
from raytracer.render import render
from raytracer.imageio import write_bmp

scene = load_scene("scenes/spheres.txt")
pixels = render(scene, 320, 240, 1)
write_bmp("out.bmp", pixels, 320, 240, 320)
```

- `raytracer.scene.load_scene(path)` reads a file and raises
  `raytracer.scene.SceneError` for any problem, syntax errors included.
  `scene_from_config(config)` builds a `Scene` from an already parsed
  `raytracer.config.Config`.
- `raytracer.config.Config.from_text(text)` parses scene text and raises
  `raytracer.config.ConfigError` on a syntax error; `set_section` selects
  a section and `get_float`, `get_integer`, `get_string`, `get_boolean`,
  `get_vector`, `get_triangle` and `get_float_or_colour` read values with
  a default.
- `raytracer.render.render(scene, width, height, aa_level)` returns
  `width * height` pixels in row order; `trace_ray(scene, ray)` returns
  the `Colour` seen along one ray.
- Pixels are packed integers in `0x00BBGGRR` form;
  `raytracer.colour.Colour.from_pixel` and `Colour.to_pixel(exposure)`
  convert between these and floating-point colours.
- `raytracer.imageio` also provides `write_tga`, and `encode_bmp` /
  `encode_tga` return the file contents as bytes. Rows are stored in
  buffer order without padding.

## Limitations

Rendering runs in a single thread in plain Python and is slow for large
images or scenes; `-threads`, `-colourise` and `-blockSize` have no effect.
Image textures are not supported, images cannot be read back, and only
BMP output is available from the command line.

## Running the tests

```
pip install .[test]
pytest
```