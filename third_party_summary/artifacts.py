"""Pre-extracted trace artifacts: network records and main-thread tasks.

The audit only consumes these through an async provider. ``JsonArtifacts``
reads them from a JSON file written by the trace-processing step::

    {
      "networkRecords": [{"url": "...", "transferSize": 1234, "resourceType": "Script"}],
      "mainThreadTasks": [{"selfTime": 12.5, "attributableURLs": ["..."]}]
    }
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
from pathlib import Path
from typing import Protocol

from .models import ExecutionTask, TransferRecord

logger = logging.getLogger(__name__)


class ArtifactError(Exception):
    """Raised when records or tasks cannot be obtained."""


class ArtifactProvider(Protocol):
    async def network_records(self) -> list[TransferRecord]: ...

    async def main_thread_tasks(self) -> list[ExecutionTask]: ...


def _non_negative(value, what: str, index: int) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ArtifactError(f"{what} #{index}: expected a number, got {value!r}")
    if not math.isfinite(value):
        raise ArtifactError(f"{what} #{index}: non-finite value {value}")
    if value < 0:
        raise ArtifactError(f"{what} #{index}: negative value {value}")
    return value


def parse_network_records(raw: list) -> list[TransferRecord]:
    if not isinstance(raw, list):
        raise ArtifactError("networkRecords must be a list")
    records: list[TransferRecord] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or "url" not in item:
            raise ArtifactError(f"network record #{i}: missing 'url'")
        size = _non_negative(item.get("transferSize", 0), "network record", i)
        if size != int(size):
            raise ArtifactError(f"network record #{i}: transferSize must be an integer, got {size}")
        records.append(TransferRecord(
            url=str(item["url"]),
            transfer_size=int(size),
            resource_type=item.get("resourceType") or "Other",
        ))
    return records


def parse_main_thread_tasks(raw: list) -> list[ExecutionTask]:
    if not isinstance(raw, list):
        raise ArtifactError("mainThreadTasks must be a list")
    tasks: list[ExecutionTask] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or "selfTime" not in item:
            raise ArtifactError(f"task #{i}: missing 'selfTime'")
        self_time = _non_negative(item["selfTime"], "task", i)
        urls = item.get("attributableURLs") or []
        if not isinstance(urls, list):
            raise ArtifactError(f"task #{i}: attributableURLs must be a list")
        tasks.append(ExecutionTask(
            self_time=float(self_time),
            attributable_urls=[str(u) for u in urls],
        ))
    return tasks


class JsonArtifacts:
    """Artifact provider backed by a JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict | None = None

    async def _load(self) -> dict:
        if self._data is None:
            try:
                text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
                data = json.loads(text)
            except OSError as e:
                raise ArtifactError(f"Cannot read artifacts file {self.path}: {e}") from e
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                raise ArtifactError(f"Invalid JSON in {self.path}: {e}") from e
            if not isinstance(data, dict):
                raise ArtifactError(f"Artifacts file {self.path} must contain an object")
            self._data = data
            logger.debug("Loaded artifacts from %s", self.path)
        return self._data

    async def network_records(self) -> list[TransferRecord]:
        data = await self._load()
        if "networkRecords" not in data:
            raise ArtifactError("Artifacts missing 'networkRecords'")
        return parse_network_records(data["networkRecords"])

    async def main_thread_tasks(self) -> list[ExecutionTask]:
        data = await self._load()
        if "mainThreadTasks" not in data:
            raise ArtifactError("Artifacts missing 'mainThreadTasks'")
        return parse_main_thread_tasks(data["mainThreadTasks"])


class StaticArtifacts:
    """Artifact provider over already-materialized sequences."""

    def __init__(self, records: list[TransferRecord], tasks: list[ExecutionTask]):
        self._records = records
        self._tasks = tasks

    async def network_records(self) -> list[TransferRecord]:
        return list(self._records)

    async def main_thread_tasks(self) -> list[ExecutionTask]:
        return list(self._tasks)
