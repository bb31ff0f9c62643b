"""State – key/value persistence port and backends."""
from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Mapping, Protocol, runtime_checkable

from starflight.kernel.errors import InfrastructureError

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Port: string key/value persistence.

    ``set_many`` and ``delete_many`` apply all of their changes or none.
    """

    async def get(self, key: str) -> str | None: ...

    async def set_many(self, values: Mapping[str, str]) -> None: ...

    async def delete_many(self, keys: Iterable[str]) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store; state lives as long as the instance."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set_many(self, values: Mapping[str, str]) -> None:
        self._data.update(values)

    async def delete_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileKeyValueStore:
    """Store backed by a single JSON object on disk.

    Every write replaces the file atomically (temp file + ``os.replace``),
    so a crash mid-write leaves the previous content intact.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._data: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> str | None:
        data = await self._load()
        return data.get(key)

    async def set_many(self, values: Mapping[str, str]) -> None:
        data = dict(await self._load())
        data.update(values)
        await self._save(data)

    async def delete_many(self, keys: Iterable[str]) -> None:
        data = dict(await self._load())
        removed = False
        for key in keys:
            if data.pop(key, None) is not None:
                removed = True
        if removed:
            await self._save(data)

    async def _load(self) -> dict[str, str]:
        if self._data is None:
            self._data = await asyncio.to_thread(self._read)
        return self._data

    async def _save(self, data: dict[str, str]) -> None:
        await asyncio.to_thread(self._write, data)
        self._data = data

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise InfrastructureError(f"Could not read state file '{self._path}'", cause=exc) from exc
        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            raise InfrastructureError(f"State file '{self._path}' is not valid JSON", cause=exc) from exc
        if not isinstance(data, dict):
            raise InfrastructureError(f"State file '{self._path}' does not hold a JSON object")
        entries: dict[str, str] = {}
        for key, value in data.items():
            if value is None:
                continue
            if not isinstance(value, str):
                raise InfrastructureError(
                    f"State file '{self._path}' holds a non-string value for '{key}'"
                )
            entries[key] = value
        return entries

    def _write(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise InfrastructureError(f"Could not write state file '{self._path}'", cause=exc) from exc
        logger.debug("state.file_written path=%s keys=%d", self._path, len(data))


__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore", "KeyValueStore"]
