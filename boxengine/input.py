"""Logical input keys and their per-frame press states."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Mapping


class InputKey(IntEnum):
    """Logical actions that can be bound to a physical key."""

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    ESCAPE = 4


class KeyState(IntEnum):
    """State of a key across consecutive frames."""

    UNPRESSED = 0
    PRESSED = 1
    HELD = 2


def next_key_state(current: KeyState, is_down: bool) -> KeyState:
    """Return the state following ``current`` given whether the key is down now."""
    if not is_down:
        return KeyState.UNPRESSED
    return KeyState.HELD if current else KeyState.PRESSED


@dataclass
class InputState:
    """Current state of every logical input key."""

    left: KeyState = KeyState.UNPRESSED
    right: KeyState = KeyState.UNPRESSED
    up: KeyState = KeyState.UNPRESSED
    down: KeyState = KeyState.UNPRESSED
    escape: KeyState = KeyState.UNPRESSED

    def update(
        self,
        key_binds: Mapping[InputKey, int],
        is_pressed: Callable[[int], bool],
    ) -> None:
        """Advance every key's state.

        ``key_binds`` maps each logical key to a physical key code and
        ``is_pressed`` reports whether a physical key code is currently down.
        Keys without a binding are treated as released.
        """
        for key in InputKey:
            code = key_binds.get(key)
            down = bool(is_pressed(code)) if code is not None else False
            attr = key.name.lower()
            setattr(self, attr, next_key_state(getattr(self, attr), down))

    def get(self, key: InputKey) -> KeyState:
        """Return the state of ``key``."""
        return getattr(self, InputKey(key).name.lower())