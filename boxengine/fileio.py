"""Whole-file reading and writing helpers."""

from __future__ import annotations

import os
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def read_file(path: PathLike) -> str:
    """Return the whole contents of ``path`` as text.

    The file is read in binary mode so line endings are kept exactly as stored.
    Raises ``OSError`` (e.g. ``FileNotFoundError``) when the file cannot be read.
    """
    with open(path, "rb") as handle:
        return handle.read().decode("utf-8")


def write_file(path: PathLike, data: Union[str, bytes]) -> None:
    """Write ``data`` to ``path``, replacing any previous contents.

    Raises ``OSError`` when the file cannot be opened for writing.
    """
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    with open(path, "wb") as handle:
        handle.write(payload)