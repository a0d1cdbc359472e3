"""Grid raycasting, textured wall columns and the frame buffer they are drawn into."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Sequence

from .vectors import Vector

# Keeps the projected wall height finite when the player touches a wall.
_MIN_DISTANCE = 1e-6


class Side(Enum):
    """Which kind of grid line a ray crossed when it hit a wall."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Wall(Enum):
    """The compass face of a wall, used to pick its texture."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


@dataclass(frozen=True)
class RayHit:
    """Where and how a ray struck a wall."""

    map_x: int
    map_y: int
    side: Side
    step_x: int
    step_y: int
    perp_wall_dist: float
    ray_dir: Vector


@dataclass(frozen=True)
class Texture:
    """An image stored row by row as RGBA bytes."""

    width: int
    height: int
    pixels: bytes
    bytes_per_pixel: int = 4

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture size must not be negative")
        if self.bytes_per_pixel < 4:
            raise ValueError("texture needs at least four bytes per pixel")
        if len(self.pixels) < self.width * self.height * self.bytes_per_pixel:
            raise ValueError("texture pixel data is too short")

    def pixel(self, x: int, y: int) -> int:
        """Return the RGBA colour at ``(x, y)``, or 0 outside the image."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return 0
        offset = (y * self.width + x) * self.bytes_per_pixel
        r, g, b, a = self.pixels[offset:offset + 4]
        return (r << 24) | (g << 16) | (b << 8) | a


@dataclass
class FrameBuffer:
    """A width by height image of packed RGBA colours."""

    width: int
    height: int
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("frame buffer size must not be negative")
        self.pixels = [0] * (self.width * self.height)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame buffer")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, colour: int) -> None:
        """Set the pixel at ``(x, y)``."""
        self.pixels[self._offset(x, y)] = colour & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at ``(x, y)``."""
        return self.pixels[self._offset(x, y)]


def _is_wall(grid: Sequence[str], x: int, y: int) -> bool:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x] == "1"
    return True


def cast_ray(grid: Sequence[str], pos: Vector, ray_dir: Vector) -> RayHit:
    """Walk the grid from ``pos`` along ``ray_dir`` until a wall cell is reached."""
    step_x = -1 if ray_dir.x < 0 else 1
    step_y = -1 if ray_dir.y < 0 else 1
    delta_x = math.inf if ray_dir.x == 0 else abs(1 / ray_dir.x)
    delta_y = math.inf if ray_dir.y == 0 else abs(1 / ray_dir.y)
    map_x = int(pos.x)
    map_y = int(pos.y)
    if ray_dir.x < 0:
        side_x = (pos.x - map_x) * delta_x
    else:
        side_x = (map_x + 1.0 - pos.x) * delta_x
    if ray_dir.y < 0:
        side_y = (pos.y - map_y) * delta_y
    else:
        side_y = (map_y + 1.0 - pos.y) * delta_y

    side = Side.VERTICAL
    while not _is_wall(grid, map_x, map_y):
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = Side.VERTICAL
        else:
            side_y += delta_y
            map_y += step_y
            side = Side.HORIZONTAL

    if side is Side.VERTICAL:
        perp = side_x - delta_x
    else:
        perp = side_y - delta_y
    return RayHit(map_x, map_y, side, step_x, step_y, perp, ray_dir)


def texture_side(hit: RayHit) -> Wall:
    """Return the wall face a ray hit, which decides the texture to draw."""
    if hit.side is Side.HORIZONTAL:
        return Wall.NORTH if hit.step_y < 0 else Wall.SOUTH
    return Wall.WEST if hit.step_x < 0 else Wall.EAST


def draw_background(buffer: FrameBuffer, ceiling: int, floor: int) -> None:
    """Fill the upper half with the ceiling colour and the rest with the floor."""
    half = buffer.height // 2
    for y in range(buffer.height):
        colour = ceiling if y < half else floor
        for x in range(buffer.width):
            buffer.put_pixel(x, y, colour)


def draw_wall_column(
    buffer: FrameBuffer,
    column: int,
    hit: RayHit,
    pos: Vector,
    texture: Texture,
) -> None:
    """Draw the textured wall slice for one screen column."""
    screen_height = buffer.height
    half = screen_height // 2
    height = screen_height / max(hit.perp_wall_dist, _MIN_DISTANCE)
    line_start = max(0, int(half - height / 2))
    line_end = min(screen_height - 1, int(half + height / 2))

    if hit.side is Side.VERTICAL:
        point = pos.y + hit.perp_wall_dist * hit.ray_dir.y
    else:
        point = pos.x + hit.perp_wall_dist * hit.ray_dir.x
    point -= math.floor(point)

    texture_x = int(point * texture.width)
    resize = texture.height / height
    texture_pos = (line_start - half + height / 2) * resize
    for y in range(line_start, line_end):
        texture_y = min(max(int(texture_pos), 0), texture.height - 1)
        texture_pos += resize
        buffer.put_pixel(column, y, texture.pixel(texture_x, texture_y))


def render(
    buffer: FrameBuffer,
    grid: Sequence[str],
    pos: Vector,
    direction: Vector,
    plane: Vector,
    textures: Mapping[Wall, Texture],
    ceiling: int,
    floor: int,
) -> list[float]:
    """Draw a whole frame and return the wall distance of every column."""
    draw_background(buffer, ceiling, floor)
    z_buffer: list[float] = []
    for column in range(buffer.width):
        camera_x = (2 * column) / float(buffer.width) - 1
        ray_dir = direction + plane * camera_x
        hit = cast_ray(grid, pos, ray_dir)
        draw_wall_column(buffer, column, hit, pos, textures[texture_side(hit)])
        z_buffer.append(hit.perp_wall_dist)
    return z_buffer