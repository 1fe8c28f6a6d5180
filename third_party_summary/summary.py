"""Ranking and grand totals for attributed entities."""

from __future__ import annotations

from .models import Aggregate, RankedRow, Summary


def summarize(aggregate: Aggregate) -> tuple[list[RankedRow], Summary]:
    """Rank entities by combined byte and main-thread impact.

    Rows are sorted by ``transfer_size / 1024 + main_thread_time``
    descending, ties by entity name. Totals are accumulated while the rows
    are built.
    """
    summary = Summary()
    rows: list[RankedRow] = []

    for entity, stats in aggregate.items():
        summary.wasted_bytes += stats.transfer_size
        summary.wasted_ms += stats.main_thread_time
        rows.append(RankedRow(
            entity_name=entity.name,
            entity_homepage=entity.homepage,
            transfer_size=stats.transfer_size,
            main_thread_time=stats.main_thread_time,
        ))

    rows.sort(key=lambda row: (-row.sort_value, row.entity_name))
    return rows, summary


def score_for(rows: list[RankedRow]) -> int:
    """Informative score: 1 when no third party was attributed at all."""
    return int(len(rows) == 0)
