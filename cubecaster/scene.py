"""Loading of a complete scene description file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Union

from .mapgrid import extract_map, locate_player, validate_map
from .metadata import Metadata, SceneError, read_metadata
from .vectors import Vector

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class Scene:
    """A validated scene: header data, map grid and player start."""

    metadata: Metadata
    grid: tuple[str, ...]
    pov: str
    player_pos: Vector


def _split_lines(text: str) -> list[str]:
    """Split text into lines that keep their newline character."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def check_extension(path: PathLike) -> None:
    """Require the scene file name to end with ``.cub``."""
    if not os.fspath(path).endswith(".cub"):
        raise SceneError("Map extension is invalid")


def parse_scene(text: str) -> Scene:
    """Parse and validate the contents of a scene file."""
    lines = _split_lines(text)
    metadata = read_metadata(lines)
    grid = extract_map(lines)
    validate_map(grid)
    pov, position, rows = locate_player(grid)
    return Scene(metadata=metadata, grid=tuple(rows), pov=pov, player_pos=position)


def load_scene(path: PathLike) -> Scene:
    """Read, parse and validate the scene file at ``path``."""
    check_extension(path)
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            text = f.read()
    except OSError as exc:
        raise SceneError("failed to open file") from exc
    return parse_scene(text)