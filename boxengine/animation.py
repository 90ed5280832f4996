"""Frame-based sprite animations."""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

MAX_FRAMES = 16


@dataclass(frozen=True)
class AnimationFrame:
    """One frame: how long it lasts and which sprite cell it shows."""

    duration: float
    row: int
    column: int


@dataclass
class AnimationDefinition:
    """A sprite sheet together with an ordered list of frames."""

    sprite_sheet: Any
    frames: Tuple[AnimationFrame, ...] = field(default_factory=tuple)

    @property
    def frame_count(self) -> int:
        return len(self.frames)


@dataclass(eq=False)
class Animation:
    """A playing instance of an animation definition."""

    definition: AnimationDefinition
    does_loop: bool = False
    current_frame_time: float = 0.0
    current_frame_index: int = 0
    is_active: bool = True
    is_flipped: bool = False

    @property
    def current_frame(self) -> AnimationFrame:
        return self.definition.frames[self.current_frame_index]


def _checked(items: List[Any], index: int, what: str) -> Any:
    index = operator.index(index)
    if not 0 <= index < len(items):
        raise IndexError(f"{what} with id {index} not found")
    return items[index]


class AnimationStore:
    """Owns animation definitions and the animations playing them."""

    def __init__(self) -> None:
        self.definitions: List[AnimationDefinition] = []
        self.animations: List[Animation] = []

    def create_definition(
        self,
        sprite_sheet: Any,
        durations: Sequence[float],
        rows: Sequence[int],
        columns: Sequence[int],
    ) -> int:
        """Add a definition built from parallel frame lists and return its id."""
        if not (len(durations) == len(rows) == len(columns)):
            raise ValueError("durations, rows and columns must have the same length")
        if not rows:
            raise ValueError("an animation needs at least one frame")
        if len(rows) > MAX_FRAMES:
            raise ValueError(f"an animation has at most {MAX_FRAMES} frames")

        frames = tuple(
            AnimationFrame(float(duration), int(row), int(column))
            for duration, row, column in zip(durations, rows, columns)
        )
        self.definitions.append(AnimationDefinition(sprite_sheet, frames))
        return len(self.definitions) - 1

    def create(self, definition_id: int, does_loop: bool) -> int:
        """Start an animation of a definition, reusing a free slot if any."""
        definition = _checked(self.definitions, definition_id, "Animation definition")
        animation = Animation(definition=definition, does_loop=does_loop)

        for index, existing in enumerate(self.animations):
            if not existing.is_active:
                self.animations[index] = animation
                return index

        self.animations.append(animation)
        return len(self.animations) - 1

    def destroy(self, animation_id: int) -> None:
        """Mark an animation as inactive so its slot can be reused."""
        self.get(animation_id).is_active = False

    def get(self, animation_id: int) -> Animation:
        """Return the animation with ``animation_id``."""
        return _checked(self.animations, animation_id, "Animation")

    def update(self, dt: float) -> None:
        """Advance every animation by ``dt`` seconds."""
        for animation in self.animations:
            definition = animation.definition
            animation.current_frame_time -= dt

            if animation.current_frame_time < 0.0:
                animation.current_frame_index += 1
                if animation.current_frame_index >= definition.frame_count:
                    if animation.does_loop:
                        animation.current_frame_index = 0
                    else:
                        animation.current_frame_index -= 1

                animation.current_frame_time = (
                    definition.frames[animation.current_frame_index].duration
                )