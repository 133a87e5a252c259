# page_scout/storage/jsonl.py
"""
JSON Lines sink: one page document per line, appended to a local file.
"""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Mapping, Optional, TextIO, Union

from page_scout.errors import PersistenceError

__all__ = ("JsonLinesSink",)


class JsonLinesSink:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()
        self._fh: Optional[TextIO] = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("a", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"cannot open {self.path}: {exc}") from exc

    async def store(self, collection: str, document: Mapping[str, str]) -> None:
        if self._fh is None:
            raise PersistenceError("sink is not connected", document.get("url"))
        line = json.dumps({"collection": collection, **document}, ensure_ascii=False)
        async with self._lock:
            try:
                self._fh.write(line + "\n")
                self._fh.flush()
            except (OSError, UnicodeEncodeError) as exc:
                raise PersistenceError(f"write failed: {exc}", document.get("url")) from exc

    async def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
