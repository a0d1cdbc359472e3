"""Extraction and validation of the map grid of a scene description."""

from __future__ import annotations

from itertools import takewhile
from typing import Sequence

from .metadata import SceneError
from .vectors import Vector

_WHITESPACE = " \t\n\v\f\r"
_VALID_CHARS = "10 SNEW"
_PLAYER_CHARS = "NSEW"
_OPEN_CHARS = "0SNEW"


def is_valid_char(c: str) -> bool:
    """Tell whether ``c`` may appear in the map grid."""
    return len(c) == 1 and c in _VALID_CHARS


def _is_blank(row: str) -> bool:
    return all(c in _WHITESPACE for c in row)


def _is_first_map_line(line: str) -> bool:
    if "1" not in line and "0" not in line:
        return False
    return all(c in "10" or c in _WHITESPACE for c in line)


def find_map_start(lines: Sequence[str]) -> int:
    """Return the index of the first map line, or ``len(lines)`` if there is none.

    The first map line holds only walls, floor and whitespace.
    """
    for index, line in enumerate(lines):
        if _is_first_map_line(line):
            return index
    return len(lines)


def _map_section(lines: Sequence[str]) -> list[str]:
    start = find_map_start(lines)
    return list(takewhile(bool, lines[start:]))


def map_width(lines: Sequence[str]) -> int:
    """Return the width the grid is padded to.

    Only newline-terminated map lines made of valid characters and whitespace
    count; the width includes the newline.
    """
    width = 0
    for line in _map_section(lines):
        if line.endswith("\n") and all(
            is_valid_char(c) or c in _WHITESPACE for c in line
        ):
            width = max(width, len(line))
    return width


def extract_map(lines: Sequence[str]) -> list[str]:
    """Cut the map out of the lines of a scene file.

    Every row is padded with spaces (or cut) to :func:`map_width`, and blank
    rows at the end are dropped.
    """
    width = map_width(lines)
    rows = [line.strip("\n")[:width].ljust(width) for line in _map_section(lines)]
    while rows and _is_blank(rows[-1]):
        rows.pop()
    return rows


def _is_empty_line_in_map(grid: Sequence[str], index: int) -> bool:
    if grid[index] != "":
        return False
    return any(not _is_blank(row) for row in grid[index:])


def check_map_info(grid: Sequence[str]) -> None:
    """Reject empty lines inside the map and characters that are not allowed."""
    for index, row in enumerate(grid):
        if _is_empty_line_in_map(grid, index):
            raise SceneError("empty line in map")
        for c in row:
            if not is_valid_char(c):
                raise SceneError(f"invalid character <{c}> in map")


def _cell(grid: Sequence[str], row: int, column: int) -> str:
    if 0 <= row < len(grid) and 0 <= column < len(grid[row]):
        return grid[row][column]
    return " "


def check_walls(grid: Sequence[str]) -> None:
    """Require every floor and player cell to be enclosed by the map."""
    height = len(grid)
    for i, row in enumerate(grid):
        for j, c in enumerate(row):
            if c not in _OPEN_CHARS:
                continue
            on_border = i in (0, height - 1) or j in (0, len(row) - 1)
            neighbours = (
                _cell(grid, i - 1, j),
                _cell(grid, i + 1, j),
                _cell(grid, i, j - 1),
                _cell(grid, i, j + 1),
            )
            if on_border or any(n in _WHITESPACE for n in neighbours):
                raise SceneError(
                    f"map is not surrounded by walls at row {i}, column {j}"
                )


def check_player_count(grid: Sequence[str]) -> None:
    """Require exactly one player start position."""
    count = sum(row.count(c) for row in grid for c in _PLAYER_CHARS)
    if count != 1:
        raise SceneError("invalid number of player positions")


def validate_map(grid: Sequence[str]) -> None:
    """Run every map check, raising :class:`SceneError` on the first failure."""
    check_map_info(grid)
    check_walls(grid)
    check_player_count(grid)


def locate_player(grid: Sequence[str]) -> tuple[str, Vector, list[str]]:
    """Find the player start.

    Returns the facing letter, the position at the centre of its cell and a
    copy of the grid with the start cell turned into floor.
    """
    found: tuple[str, Vector] | None = None
    rows: list[str] = []
    for y, row in enumerate(grid):
        for x, c in enumerate(row):
            if c in _PLAYER_CHARS:
                found = (c, Vector(x + 0.5, y + 0.5))
        rows.append("".join("0" if c in _PLAYER_CHARS else c for c in row))
    if found is None:
        raise SceneError("invalid number of player positions")
    pov, position = found
    return pov, position, rows