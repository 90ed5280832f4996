"""Key binding configuration loaded from a small INI-like file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Union

from .fileio import read_file, write_file
from .input import InputKey

log = logging.getLogger(__name__)

CONFIG_DEFAULT = (
    "[controls]\n"
    "left = A\n"
    "right = D\n"
    "up = W\n"
    "down = S\n"
    "escape = Escape\n"
    "\n"
)

CONFIG_PATH = "assets/config/config.ini"

_CONTROL_NAMES = (
    ("left", InputKey.LEFT),
    ("right", InputKey.RIGHT),
    ("up", InputKey.UP),
    ("down", InputKey.DOWN),
    ("escape", InputKey.ESCAPE),
)


class ConfigError(Exception):
    """Raised when the configuration is missing a value or names an unknown key."""


def _pygame_key_code(name: str) -> Optional[int]:
    import pygame

    try:
        return pygame.key.key_code(name)
    except ValueError:
        return None


def get_value(text: str, name: str) -> str:
    """Return the value following the first occurrence of ``name`` in ``text``.

    The value is whatever follows the next ``=``, with leading spaces skipped,
    up to the end of the line.
    """
    start = text.find(name)
    if start < 0:
        raise ConfigError(f"Could not find config value: {name}")

    equals = text.find("=", start)
    if equals < 0:
        return ""
    rest = text[equals + 1:].lstrip(" ")
    for stop, char in enumerate(rest):
        if char in "\n\r\0":
            return rest[:stop]
    return rest


@dataclass
class Config:
    """Mapping from logical input keys to physical key codes."""

    resolve: Callable[[str], Optional[int]] = field(default=_pygame_key_code)
    key_binds: Dict[InputKey, int] = field(default_factory=dict)

    def bind(self, key: InputKey, key_name: str) -> None:
        """Bind ``key`` to the physical key called ``key_name``."""
        code = self.resolve(key_name)
        if not code:
            raise ConfigError(f"Invalid scan code for key: {key_name}")
        self.key_binds[InputKey(key)] = code

    def load_controls(self, text: str) -> None:
        """Bind every control named in ``text``.

        Valid bindings are applied even when some key names are unknown; those
        are then reported together in one ``ConfigError``.
        """
        invalid = []
        for name, key in _CONTROL_NAMES:
            value = get_value(text, name)
            try:
                self.bind(key, value)
            except ConfigError:
                invalid.append(value)
        if invalid:
            raise ConfigError("Invalid scan code for key: " + ", ".join(invalid))


def init_config(
    path: Union[str, "os.PathLike[str]"] = CONFIG_PATH,
    resolve: Optional[Callable[[str], Optional[int]]] = None,
) -> Config:
    """Load key bindings from ``path``.

    When the file cannot be read the default controls are used and written
    back to ``path``.
    """
    config = Config(resolve=resolve) if resolve is not None else Config()
    try:
        text = read_file(path)
    except OSError:
        log.warning("Error reading config file, using default")
        config.load_controls(CONFIG_DEFAULT)
        try:
            write_file(path, CONFIG_DEFAULT)
        except OSError as error:
            log.warning("Could not write default config: %s", error)
        return config

    config.load_controls(text)
    return config