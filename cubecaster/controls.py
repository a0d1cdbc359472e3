"""Keyboard state and player movement."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .vectors import Vector

MOVE_SPEED = 0.05
ROTATE_SPEED = 2.0
SPRINT_MULTIPLIER = 2.0


class Key(Enum):
    """Keys the game reacts to."""

    LEFT = "left"
    RIGHT = "right"
    W = "w"
    S = "s"
    A = "a"
    D = "d"
    LEFT_SHIFT = "left_shift"
    ESCAPE = "escape"


_KEY_FLAGS = {
    Key.LEFT: "left",
    Key.RIGHT: "right",
    Key.W: "w",
    Key.S: "s",
    Key.A: "a",
    Key.D: "d",
    Key.LEFT_SHIFT: "shift",
}


@dataclass
class Keys:
    """Which movement keys are currently held down."""

    left: bool = False
    right: bool = False
    w: bool = False
    s: bool = False
    a: bool = False
    d: bool = False
    shift: bool = False

    def press(self, key: Key) -> None:
        """Mark ``key`` as held; keys without a movement role are ignored."""
        flag = _KEY_FLAGS.get(key)
        if flag is not None:
            setattr(self, flag, True)

    def release(self, key: Key) -> None:
        """Mark ``key`` as released; keys without a movement role are ignored."""
        flag = _KEY_FLAGS.get(key)
        if flag is not None:
            setattr(self, flag, False)


_FACINGS = {
    "N": (Vector(0, -1), Vector(0.66, 0)),
    "S": (Vector(0, 1), Vector(-0.66, 0)),
    "W": (Vector(-1, 0), Vector(0, -0.66)),
    "E": (Vector(1, 0), Vector(0, 0.66)),
}


def _is_wall(grid: Sequence[str], x: int, y: int) -> bool:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x] == "1"
    return True


@dataclass
class Player:
    """The player's position, view direction and camera plane."""

    pos: Vector
    direction: Vector
    plane: Vector

    @classmethod
    def facing(cls, pov: str, pos: Vector) -> Player:
        """Create a player at ``pos`` looking towards compass letter ``pov``."""
        try:
            direction, plane = _FACINGS[pov]
        except KeyError:
            raise ValueError(f"unknown facing {pov!r}") from None
        return cls(pos=pos, direction=direction, plane=plane)

    def try_move(self, grid: Sequence[str], direction: Vector, speed: float) -> None:
        """Move along ``direction``, each axis only if it does not enter a wall."""
        new_x = self.pos.x + direction.x * speed
        new_y = self.pos.y + direction.y * speed
        x, y = self.pos.x, self.pos.y
        if not _is_wall(grid, int(new_x), int(y)):
            x = new_x
        if not _is_wall(grid, int(x), int(new_y)):
            y = new_y
        self.pos = Vector(x, y)

    def update(
        self,
        grid: Sequence[str],
        keys: Keys,
        move_speed: float = MOVE_SPEED,
        rotate_speed: float = ROTATE_SPEED,
        sprint: float = SPRINT_MULTIPLIER,
    ) -> None:
        """Apply one frame of movement and rotation for the held keys."""
        speed = move_speed * sprint if keys.shift else move_speed
        if keys.w:
            self.try_move(grid, self.direction, speed)
        if keys.s:
            self.try_move(grid, self.direction, -speed)
        if keys.a:
            self.try_move(grid, self.plane, -speed)
        if keys.d:
            self.try_move(grid, self.plane, speed)
        if keys.left:
            self.direction = self.direction.rotated(-rotate_speed)
            self.plane = self.plane.rotated(-rotate_speed)
        if keys.right:
            self.direction = self.direction.rotated(rotate_speed)
            self.plane = self.plane.rotated(rotate_speed)