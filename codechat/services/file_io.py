"""Source file read/write helpers that never translate line endings."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def read_source_text(path: str | Path, *, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding, newline="") as handle:
        return handle.read()


def atomic_write_source_text(path: str | Path, text: str, *, encoding: str = "utf-8") -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=target.name + ".", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(text)
        os.replace(tmp_path, target)
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
