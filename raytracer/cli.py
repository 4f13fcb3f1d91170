"""Command line entry point: render a scene file to a BMP image."""

from __future__ import annotations

import re
import sys
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from raytracer.imageio import write_bmp
from raytracer.render import render
from raytracer.scene import SceneError, load_scene

DEFAULT_INPUT = "../Scenes/5000spheres.txt"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Options:
    """Settings taken from the command line."""

    width: int = 960
    height: int = 540
    samples: int = 1
    input_path: str = DEFAULT_INPUT
    output_path: Optional[str] = None
    runs: int = 5
    # Accepted for compatibility; rendering is single-threaded.
    threads: int = 1
    colourise: bool = False
    block_size: int = -1


class _Timer:
    """Measures the wall-clock time of a block in whole milliseconds."""

    def __enter__(self) -> _Timer:
        self.milliseconds = 0
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.milliseconds = int((time.perf_counter() - self._start) * 1000)


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_arguments(argv: Sequence[str]) -> Options:
    """Read options from the arguments (without the program name).

    Unknown arguments are reported on stderr and ignored.
    """
    options = Options()
    args = iter(argv)

    def value(flag: str) -> str:
        try:
            return next(args)
        except StopIteration:
            raise ValueError(f"missing value for {flag}") from None

    for arg in args:
        if arg == "-size":
            options.width = _to_int(value(arg))
            options.height = _to_int(value(arg))
        elif arg == "-samples":
            options.samples = _to_int(value(arg))
        elif arg == "-input":
            options.input_path = value(arg)
        elif arg == "-output":
            options.output_path = value(arg)
        elif arg == "-runs":
            options.runs = _to_int(value(arg))
        elif arg == "-threads":
            options.threads = _to_int(value(arg))
        elif arg == "-colourise":
            options.colourise = True
        elif arg == "-blockSize":
            options.block_size = _to_int(value(arg))
        else:
            print(f"unknown argument: {arg}", file=sys.stderr)

    if options.runs < 1:
        raise ValueError("-runs must be at least 1")
    return options


def default_output_name(input_path: str, width: int, height: int, samples: int, program: str) -> str:
    """The output file name used when none is given on the command line."""
    scene_name = input_path.rsplit("/", 1)[-1]
    program_name = program.rsplit("\\", 1)[-1]
    return f"../Outputs/{scene_name}_{width}x{height}x{samples}_{program_name}.bmp"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render a scene as many times as asked, report the average time and save a BMP."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else "raytracer"
    args = sys.argv[1:] if argv is None else list(argv)

    try:
        options = parse_arguments(args)
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1

    output_path = options.output_path or default_output_name(
        options.input_path, options.width, options.height, options.samples, program
    )

    try:
        scene = load_scene(options.input_path)
    except SceneError as err:
        print(err, file=sys.stderr)
        print("Failure when reading the Scene file.", file=sys.stderr)
        return 1

    total_ms = 0
    pixels: list[int] = []
    try:
        for _ in range(options.runs):
            with _Timer() as timer:
                pixels = render(scene, options.width, options.height, options.samples)
            total_ms += timer.milliseconds
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1

    print(f"average time taken ({options.runs} run(s)): {total_ms // options.runs}ms")

    try:
        write_bmp(output_path, pixels, options.width, options.height, options.width)
    except OSError as err:
        print(f"cannot write {output_path}: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())