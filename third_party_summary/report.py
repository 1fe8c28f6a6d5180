"""Third-party usage audit: attribution table and informative score."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .artifacts import ArtifactProvider
from .attribution import AttributionAggregator
from .config import AuditSettings
from .entity_db import EntityResolver
from .models import RankedRow, ScoreDisplayMode, Summary
from .summary import score_for, summarize

logger = logging.getLogger(__name__)

AUDIT_ID = "third-party-summary"
TITLE = "Third-Party Usage"
DESCRIPTION = (
    "Third-party code can significantly impact load performance. "
    "Limit the number of redundant third-party providers and only load third-party code after "
    "your page has primarily finished loading."
)
COLUMN_URL = "URL"
COLUMN_SIZE = "Size"
COLUMN_MAIN_THREAD_TIME = "Main Thread Time"

HEADINGS: list[dict] = [
    {"key": "entity", "itemType": "link", "text": COLUMN_URL},
    {"key": "transferSize", "granularity": 1, "itemType": "bytes", "text": COLUMN_SIZE},
    {"key": "mainThreadTime", "granularity": 1, "itemType": "ms", "text": COLUMN_MAIN_THREAD_TIME},
]


@dataclass
class AuditProduct:
    score: int
    score_display_mode: str = ScoreDisplayMode.INFORMATIVE.value
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": AUDIT_ID,
            "title": TITLE,
            "description": DESCRIPTION,
            "score": self.score,
            "scoreDisplayMode": self.score_display_mode,
            "details": self.details,
        }


def row_to_item(row: RankedRow) -> dict:
    return {
        "entity": {"type": "link", "text": row.entity_name, "url": row.entity_homepage or ""},
        "transferSize": row.transfer_size,
        "mainThreadTime": row.main_thread_time,
    }


def make_table_details(headings: list[dict], items: list[dict], summary: Summary | None = None) -> dict:
    details = {"type": "table", "headings": headings, "items": items}
    if summary is not None:
        details["summary"] = {"wastedBytes": summary.wasted_bytes, "wastedMs": summary.wasted_ms}
    return details


class ThirdPartySummaryAudit:
    """Ranks third-party providers by transfer size and main-thread time."""

    def __init__(self, resolver: EntityResolver):
        self._aggregator = AttributionAggregator(resolver)

    async def audit(self, artifacts: ArtifactProvider, settings: AuditSettings | None = None) -> AuditProduct:
        settings = settings or AuditSettings()
        network_records = await artifacts.network_records()
        tasks = await artifacts.main_thread_tasks()
        multiplier = settings.cpu_multiplier

        aggregate = self._aggregator.aggregate(network_records, tasks, multiplier)
        rows, summary = summarize(aggregate)
        logger.info(
            "Third-party summary: %d entities, %d bytes, %.1f ms (cpu multiplier %s)",
            len(rows), summary.wasted_bytes, summary.wasted_ms, multiplier,
        )

        return AuditProduct(
            score=score_for(rows),
            details=make_table_details(HEADINGS, [row_to_item(r) for r in rows], summary),
        )
