# src/tetris_arcade/utils/file_io.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional, cast


def read_json(path: Path) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    return cast(dict[str, Any], json.loads(path.read_text(encoding="utf-8")))


def write_json(path: Path, data: dict[str, Any]) -> None:
    """
    Written to a sibling .tmp file, then os.replace()d over `path`.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(data, indent=2, sort_keys=False) + "\n", encoding="utf-8")
    os.replace(str(tmp), str(path))


__all__ = ["read_json", "write_json"]
