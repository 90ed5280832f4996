"""Software 2D renderer: immediate quads and lines plus a batched sprite pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union

import pygame

Vec2 = Tuple[float, float]
Vec4 = Tuple[float, float, float, float]
PathLike = Union[str, "Any"]

WHITE: Vec4 = (1.0, 1.0, 1.0, 1.0)
BLACK: Vec4 = (0.0, 0.0, 0.0, 1.0)
RED: Vec4 = (1.0, 0.0, 0.0, 1.0)
GREEN: Vec4 = (0.0, 1.0, 0.0, 1.0)
BLUE: Vec4 = (0.0, 0.0, 1.0, 1.0)
YELLOW: Vec4 = (1.0, 1.0, 0.0, 1.0)
CYAN: Vec4 = (0.0, 1.0, 1.0, 1.0)
MAGENTA: Vec4 = (1.0, 0.0, 1.0, 1.0)
ORANGE: Vec4 = (1.0, 0.5, 0.0, 1.0)
PURPLE: Vec4 = (0.5, 0.0, 1.0, 1.0)
TURQUOISE: Vec4 = (0.0, 1.0, 0.5, 1.0)

CLEAR_COLOR: Vec4 = (0.1, 0.1, 0.12, 1.0)

MAX_BATCH_QUADS = 10000
MAX_BATCH_VERTICES = 40000
MAX_BATCH_ELEMENTS = 60000

RENDER_WIDTH = 640
RENDER_HEIGHT = 360
SCALE = 3
WINDOW_TITLE = "2D Game Engine"

_FULL_UVS: Vec4 = (0.0, 0.0, 1.0, 1.0)


def _to_rgba(color: Sequence[float]) -> Tuple[int, int, int, int]:
    channels = list(color) + [1.0] * (4 - len(color))
    return tuple(max(0, min(255, round(c * 255))) for c in channels[:4])  # type: ignore[return-value]


def sprite_texture_coordinates(
    row: float,
    column: float,
    texture_width: float,
    texture_height: float,
    cell_width: float,
    cell_height: float,
) -> Vec4:
    """Return ``(u0, v0, u1, v1)`` of the cell at ``row``/``column`` of a sheet."""
    w = 1.0 / (texture_width / cell_width)
    h = 1.0 / (texture_height / cell_height)
    x = column * w
    y = row * h
    return (x, y, x + w, y + h)


def batch_indices(quad_count: int) -> List[int]:
    """Return triangle indices for ``quad_count`` quads of four vertices each."""
    return [
        offset + corner
        for offset in range(0, quad_count * 4, 4)
        for corner in (0, 1, 2, 2, 3, 0)
    ]


def quad_line_points(position: Sequence[float], size: Sequence[float]) -> List[Vec2]:
    """Return the four corners of a box centred on ``position``, counter-clockwise."""
    px, py = float(position[0]), float(position[1])
    hw, hh = float(size[0]) * 0.5, float(size[1]) * 0.5
    return [
        (px - hw, py - hh),
        (px + hw, py - hh),
        (px + hw, py + hh),
        (px - hw, py + hh),
    ]


@dataclass
class SpriteSheet:
    """An image divided into equally sized cells."""

    width: float
    height: float
    cell_width: float
    cell_height: float
    image: Optional[pygame.Surface] = None

    @classmethod
    def load(cls, path: PathLike, cell_width: float, cell_height: float) -> "SpriteSheet":
        """Load the image at ``path``; raises ``OSError`` when it cannot be read."""
        try:
            image = pygame.image.load(path)
        except pygame.error as error:
            raise OSError(f"Failed to load image: {path}") from error
        width, height = image.get_size()
        return cls(float(width), float(height), float(cell_width), float(cell_height), image)


@dataclass(frozen=True)
class BatchVertex:
    """One corner of a batched quad."""

    position: Vec2
    uvs: Vec2
    color: Vec4


class Renderer:
    """Draws into a low-resolution canvas with a bottom-left origin.

    ``end`` scales the canvas onto ``window`` when one is given and presents it
    when that window is the display surface.
    """

    def __init__(
        self,
        window: Optional[pygame.Surface] = None,
        render_width: int = RENDER_WIDTH,
        render_height: int = RENDER_HEIGHT,
        scale: float = SCALE,
    ) -> None:
        self.window = window
        self.render_width = render_width
        self.render_height = render_height
        self.scale = scale
        self.window_width = round(render_width * scale)
        self.window_height = round(render_height * scale)
        self.canvas = pygame.Surface((render_width, render_height))
        self.batch: List[BatchVertex] = []
        self.batch_texture: Optional[pygame.Surface] = None

    def _screen_y(self, y: float) -> int:
        return round(self.render_height - y)

    def begin(self) -> None:
        """Clear the canvas and the pending batch."""
        self.canvas.fill(_to_rgba(CLEAR_COLOR))
        self.batch.clear()

    def end(self) -> None:
        """Draw the batched quads and present the frame."""
        for start in range(0, len(self.batch) - 3, 4):
            self._draw_batch_quad(self.batch[start], self.batch[start + 2])

        if self.window is None:
            return
        self.window.blit(pygame.transform.scale(self.canvas, self.window.get_size()), (0, 0))
        if pygame.display.get_init() and self.window is pygame.display.get_surface():
            pygame.display.flip()

    def _draw_batch_quad(self, first: BatchVertex, opposite: BatchVertex) -> None:
        (x0, y0), (x1, y1) = first.position, opposite.position
        left, right = sorted((x0, x1))
        bottom, top = sorted((y0, y1))
        rect = pygame.Rect(
            round(left), self._screen_y(top), round(right - left), round(top - bottom)
        )
        if rect.width <= 0 or rect.height <= 0:
            return

        color = _to_rgba(first.color)
        texture = self.batch_texture
        if texture is None:
            pygame.draw.rect(self.canvas, color, rect)
            return

        tw, th = texture.get_size()
        (u0, v0), (u1, v1) = first.uvs, opposite.uvs
        sx0, sx1 = sorted((u0 * tw, u1 * tw))
        # Texture rows are addressed from the bottom of the image.
        sy0, sy1 = sorted(((1.0 - v0) * th, (1.0 - v1) * th))
        source = pygame.Rect(
            round(sx0), round(sy0), round(sx1 - sx0), round(sy1 - sy0)
        ).clip(texture.get_rect())
        if source.width <= 0 or source.height <= 0:
            return

        flip_x = (u0 > u1) != (x0 > x1)
        flip_y = (v0 > v1) != (y0 > y1)
        piece = pygame.transform.flip(texture.subsurface(source), flip_x, flip_y)
        piece = pygame.transform.scale(piece, rect.size)
        if color != (255, 255, 255, 255):
            piece.fill(color, special_flags=pygame.BLEND_RGBA_MULT)
        self.canvas.blit(piece, rect.topleft)

    def append_quad(
        self,
        position: Sequence[float],
        size: Sequence[float],
        uvs: Optional[Sequence[float]],
        color: Sequence[float],
    ) -> None:
        """Queue a quad whose bottom-left corner is ``position``."""
        if len(self.batch) + 4 > MAX_BATCH_VERTICES:
            raise OverflowError(f"batch holds at most {MAX_BATCH_QUADS} quads")
        u = tuple(float(c) for c in (uvs if uvs is not None else _FULL_UVS))
        rgba = tuple(float(c) for c in color)
        x, y = float(position[0]), float(position[1])
        w, h = float(size[0]), float(size[1])
        self.batch.extend(
            (
                BatchVertex((x, y), (u[0], u[1]), rgba),
                BatchVertex((x + w, y), (u[2], u[1]), rgba),
                BatchVertex((x + w, y + h), (u[2], u[3]), rgba),
                BatchVertex((x, y + h), (u[0], u[3]), rgba),
            )
        )

    def quad(self, position: Sequence[float], size: Sequence[float], color: Sequence[float]) -> None:
        """Fill a box centred on ``position``."""
        left = float(position[0]) - float(size[0]) * 0.5
        top = float(position[1]) + float(size[1]) * 0.5
        rect = pygame.Rect(
            round(left), self._screen_y(top), round(float(size[0])), round(float(size[1]))
        )
        pygame.draw.rect(self.canvas, _to_rgba(color), rect)

    def line_segment(
        self, start: Sequence[float], end: Sequence[float], color: Sequence[float]
    ) -> None:
        """Draw a line from ``start`` to ``end``."""
        pygame.draw.line(
            self.canvas,
            _to_rgba(color),
            (round(float(start[0])), self._screen_y(float(start[1]))),
            (round(float(end[0])), self._screen_y(float(end[1]))),
            1,
        )

    def quad_line(
        self, position: Sequence[float], size: Sequence[float], color: Sequence[float]
    ) -> None:
        """Outline a box centred on ``position``."""
        points = quad_line_points(position, size)
        for start, end in zip(points, points[1:] + points[:1]):
            self.line_segment(start, end, color)

    def aabb(self, aabb: Any, color: Sequence[float]) -> None:
        """Outline a box given by ``position`` and ``half_size`` attributes."""
        size = (aabb.half_size[0] * 2, aabb.half_size[1] * 2)
        self.quad_line(aabb.position, size, color)

    def sprite_sheet_frame(
        self,
        sprite_sheet: SpriteSheet,
        row: float,
        column: float,
        position: Sequence[float],
        is_flipped: bool,
    ) -> None:
        """Queue one cell of ``sprite_sheet`` centred on ``position``."""
        u0, v0, u1, v1 = sprite_texture_coordinates(
            row, column,
            sprite_sheet.width, sprite_sheet.height,
            sprite_sheet.cell_width, sprite_sheet.cell_height,
        )
        if is_flipped:
            u0, u1 = u1, u0

        size = (sprite_sheet.cell_width, sprite_sheet.cell_height)
        bottom_left = (
            float(position[0]) - size[0] * 0.5,
            float(position[1]) - size[1] * 0.5,
        )
        if sprite_sheet.image is not None:
            self.batch_texture = sprite_sheet.image
        self.append_quad(bottom_left, size, (u0, v0, u1, v1), WHITE)