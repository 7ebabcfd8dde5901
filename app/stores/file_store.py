"""
Local JSON file mapping store.

The record set lives in a single JSON array on disk. The file is streamed
with ijson on first use and cached in memory; every mutation rewrites the
file atomically (temp file + rename). Blocking file I/O runs in a worker
thread so a slow disk does not stall the event loop.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Dict

import ijson
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import UnreachableError
from ..models.mapping import MappingRecord
from .embedded_store import EmbeddedMappingStore

logger = logging.getLogger(__name__)


class JsonFileMappingStore(EmbeddedMappingStore):
    name = "file"

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self._loaded = False

    async def _load(self) -> Dict[str, MappingRecord]:
        if not self._loaded:
            try:
                self._records = await asyncio.to_thread(self._read_file)
            except (OSError, ijson.JSONError, PydanticValidationError) as e:
                logger.error("file_store_read_error", extra={"path": str(self.path), "error": str(e)})
                raise UnreachableError(f"Cannot read mapping file {self.path}", backend=self.name) from e
            self._loaded = True
        return self._records

    async def _commit(self, records: Dict[str, MappingRecord]) -> None:
        try:
            await asyncio.to_thread(self._write_file, records)
        except OSError as e:
            logger.error("file_store_write_error", extra={"path": str(self.path), "error": str(e)})
            raise UnreachableError(f"Cannot write mapping file {self.path}", backend=self.name) from e
        self._records = records

    def _read_file(self) -> Dict[str, MappingRecord]:
        records: Dict[str, MappingRecord] = {}
        if not self.path.exists():
            logger.warning("mapping_file_not_found", extra={"path": str(self.path)})
            return records
        with open(self.path, "rb") as f:
            for item in ijson.items(f, "item", use_float=True):
                record = MappingRecord.model_validate(item)
                records.setdefault(record.namaste_code, record)
        logger.info("mapping_file_loaded", extra={"path": str(self.path), "records": len(records)})
        return records

    def _write_file(self, records: Dict[str, MappingRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        payload = [r.model_dump(mode="json") for r in records.values()]
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
