"""Whole-file JSON persistence helpers.

読み込みは失敗しても例外を投げず既定値を返し、書き込み失敗は
`StoreWriteError` として呼び出し側（ルーター）へ伝播させる。
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ..logging import logger


class StoreWriteError(RuntimeError):
    """Raised when a JSON document could not be written to disk."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"failed to write {path}: {cause}")
        self.path = path
        self.cause = cause


def read_json(path: Path, default: Any) -> Any:
    """Read and parse ``path``; missing, empty or malformed files yield ``default``."""

    try:
        if not path.exists():
            return default
        text = path.read_text(encoding="utf-8")
        return json.loads(text) if text.strip() else default
    except (OSError, ValueError) as exc:
        logger.warning("store_read_failed", path=str(path), error=repr(exc))
        return default


def write_json(path: Path, data: Any) -> None:
    """Serialise ``data`` and replace ``path`` atomically.

    一時ファイルへ書き出してから `os.replace` で差し替えるため、
    書き込み途中でプロセスが落ちても半端な JSON は残らない。
    """

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, TypeError, ValueError) as exc:
        logger.error("store_write_failed", path=str(path), error=repr(exc))
        raise StoreWriteError(path, exc) from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
