"""Parsing of the texture and colour header of a scene description."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

_WHITESPACE = " \t\n\v\f\r"
_MAP_CHARS = "10SNEW"

_TEXTURE_IDS = (
    ("NO", "north"),
    ("SO", "south"),
    ("EA", "east"),
    ("WE", "west"),
)


class SceneError(Exception):
    """Raised when a scene description is invalid."""


def parse_line_value(line: str) -> Optional[str]:
    """Return the value of an ``ID value`` line, or None if it is not two words."""
    words = [w for w in line.strip(" \n").split(" ") if w]
    if len(words) == 2:
        return words[1]
    return None


def parse_colour(text: str) -> tuple[int, int, int]:
    """Parse ``R,G,B`` made of decimal digits into three integers."""
    parts = [p for p in text.split(",") if p]
    if any(not p.isascii() or not p.isdigit() for p in parts) or len(parts) != 3:
        raise SceneError("invalid colour info")
    red, green, blue = (int(p) for p in parts)
    return red, green, blue


def convert_rgb(r: int, g: int, b: int) -> int:
    """Pack a colour as a 32-bit RGBA value with full opacity."""
    return ((r << 24) | (g << 16) | (b << 8) | 255) & 0xFFFFFFFF


def is_map_line(line: str) -> bool:
    """Tell whether a line looks like the first line of the map grid."""
    if "1" not in line:
        return False
    body = line.lstrip(_WHITESPACE).split("\n", 1)[0]
    if not body:
        return False
    return all(c in _MAP_CHARS or c in _WHITESPACE for c in body)


@dataclass
class Metadata:
    """Texture paths and colours read from the header of a scene."""

    north: Optional[str] = None
    south: Optional[str] = None
    east: Optional[str] = None
    west: Optional[str] = None
    floor_rgb: Optional[tuple[int, int, int]] = None
    ceiling_rgb: Optional[tuple[int, int, int]] = None
    floor: int = 0
    ceiling: int = 0
    count: int = 0
    _colour_lines: int = 0

    def add_line(self, line: str) -> None:
        """Record one header line; blank lines are ignored."""
        stripped = line.lstrip(_WHITESPACE)
        if not stripped:
            return
        for prefix, attr in _TEXTURE_IDS:
            if stripped.startswith(prefix):
                self._save_texture(stripped, attr)
                return
        if stripped.startswith("C"):
            rgb = self._save_colour(stripped, "ceiling_rgb")
            self.ceiling = convert_rgb(*rgb)
            return
        if stripped.startswith("F"):
            rgb = self._save_colour(stripped, "floor_rgb")
            self.floor = convert_rgb(*rgb)
            return
        raise SceneError("invalid texture/colour info")

    def is_complete(self) -> bool:
        """Tell whether exactly the six required entries were read."""
        return (
            self.count == 6
            and all((self.north, self.south, self.east, self.west))
            and bool(self.floor)
            and bool(self.ceiling)
        )

    def _save_texture(self, line: str, attr: str) -> None:
        path = parse_line_value(line)
        if path is None:
            raise SceneError("invalid texture/colour info")
        if not path.startswith("./"):
            raise SceneError("invalid texture path")
        if getattr(self, attr) is not None:
            raise SceneError("Duplicated texture")
        setattr(self, attr, path)
        self.count += 1

    def _save_colour(self, line: str, attr: str) -> tuple[int, int, int]:
        value = parse_line_value(line)
        if value is None:
            raise SceneError("invalid colour info")
        rgb = parse_colour(value)
        if self._colour_lines > 1:
            raise SceneError("duplicated colour info")
        # A repeated identifier keeps the first value it was given.
        if getattr(self, attr) is None:
            setattr(self, attr, rgb)
        self._colour_lines += 1
        self.count += 1
        return getattr(self, attr)


def read_metadata(lines: Iterable[str]) -> Metadata:
    """Read header lines until the map begins and return the collected metadata."""
    metadata = Metadata()
    seen_any = False
    for line in lines:
        seen_any = True
        if is_map_line(line):
            break
        metadata.add_line(line)
    if not seen_any:
        raise SceneError("file is empty")
    if not metadata.is_complete():
        raise SceneError("missing or duplicated texture/colour info")
    return metadata