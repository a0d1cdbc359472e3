"""The playable game: texture loading, the frame loop and the command entry point."""

from __future__ import annotations

import os
import struct
import sys
from typing import Mapping, Optional, Sequence, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .controls import Key, Keys, Player  # noqa: E402
from .metadata import Metadata, SceneError  # noqa: E402
from .raycast import FrameBuffer, Texture, Wall, render  # noqa: E402
from .scene import Scene, load_scene  # noqa: E402

PathLike = Union[str, "os.PathLike[str]"]

WINDOW_WIDTH = 640
WINDOW_HEIGHT = 480
WINDOW_TITLE = "Cub3D"
FRAMES_PER_SECOND = 60

_PYGAME_KEYS = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_w: Key.W,
    pygame.K_s: Key.S,
    pygame.K_a: Key.A,
    pygame.K_d: Key.D,
    pygame.K_LSHIFT: Key.LEFT_SHIFT,
    pygame.K_ESCAPE: Key.ESCAPE,
}


def load_texture(path: PathLike) -> Texture:
    """Load an image file as an RGBA :class:`Texture`."""
    try:
        surface = pygame.image.load(os.fspath(path))
    except (pygame.error, OSError, FileNotFoundError) as exc:
        raise SceneError(f"Error loading texture: {os.fspath(path)}") from exc
    width, height = surface.get_size()
    pixels = pygame.image.tostring(surface, "RGBA")
    return Texture(width=width, height=height, pixels=pixels)


def load_textures(paths: Mapping[Wall, PathLike]) -> dict[Wall, Texture]:
    """Load the texture of every wall face, in north, south, east, west order."""
    order = (Wall.NORTH, Wall.SOUTH, Wall.EAST, Wall.WEST)
    textures: dict[Wall, Texture] = {}
    for wall in order:
        if wall not in paths:
            raise SceneError(f"Error loading texture: no path for {wall.value}")
        textures[wall] = load_texture(paths[wall])
    return textures


def _texture_paths(metadata: Metadata) -> dict[Wall, str]:
    paths = {
        Wall.NORTH: metadata.north,
        Wall.SOUTH: metadata.south,
        Wall.EAST: metadata.east,
        Wall.WEST: metadata.west,
    }
    missing = [wall.value for wall, path in paths.items() if path is None]
    if missing:
        raise SceneError(f"missing texture path for {', '.join(missing)}")
    return {wall: path for wall, path in paths.items() if path is not None}


class Game:
    """A running game: player state, held keys and the frame being drawn."""

    def __init__(
        self,
        scene: Scene,
        textures: Mapping[Wall, Texture],
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
    ) -> None:
        self.scene = scene
        self.grid = scene.grid
        self.textures = dict(textures)
        self.player = Player.facing(scene.pov, scene.player_pos)
        self.keys = Keys()
        self.buffer = FrameBuffer(width, height)
        self.running = True

    def frame(self) -> list[float]:
        """Advance the player one step and redraw the frame buffer.

        Returns the wall distance of every screen column.
        """
        self.player.update(self.grid, self.keys)
        return render(
            self.buffer,
            self.grid,
            self.player.pos,
            self.player.direction,
            self.player.plane,
            self.textures,
            self.scene.metadata.ceiling,
            self.scene.metadata.floor,
        )

    def handle_key(self, key: Key, pressed: bool) -> None:
        """React to a key going down (``pressed``) or up; Escape ends the game."""
        if key is Key.ESCAPE:
            self.running = False
            return
        if pressed:
            self.keys.press(key)
        else:
            self.keys.release(key)

    def _surface(self) -> pygame.Surface:
        data = struct.pack(f">{len(self.buffer.pixels)}I", *self.buffer.pixels)
        return pygame.image.frombuffer(
            data, (self.buffer.width, self.buffer.height), "RGBA"
        )

    def run(self) -> None:
        """Open a window and run the frame loop until the game is closed."""
        pygame.init()
        try:
            pygame.display.set_caption(WINDOW_TITLE)
            screen = pygame.display.set_mode(
                (self.buffer.width, self.buffer.height), pygame.RESIZABLE
            )
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                        key = _PYGAME_KEYS.get(event.key)
                        if key is not None:
                            self.handle_key(key, event.type == pygame.KEYDOWN)
                if not self.running:
                    break
                self.frame()
                image = self._surface()
                if image.get_size() != screen.get_size():
                    image = pygame.transform.scale(image, screen.get_size())
                screen.blit(image, (0, 0))
                pygame.display.flip()
                clock.tick(FRAMES_PER_SECOND)
        finally:
            pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the game on the scene file named by the single argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 1:
        print("Too few arguments: please provide a path to a map")
        return 1
    if len(args) > 1:
        print("Too many arguments")
        return 1
    try:
        scene = load_scene(args[0])
        textures = load_textures(_texture_paths(scene.metadata))
    except SceneError as exc:
        print(f"Error: {exc}")
        return 1
    Game(scene, textures).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())