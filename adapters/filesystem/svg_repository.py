from __future__ import annotations

from pathlib import Path

from filelock import FileLock

from adapters.filesystem.json_utils import write_text_atomic
from domain.ports.repositories import SvgRepository


class FileSystemSvgRepository(SvgRepository):
    def save(self, markup: str, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        lock_path = path.with_suffix(f"{path.suffix}.lock")
        with FileLock(str(lock_path)):
            write_text_atomic(path, markup)
