"""Per-entity attribution of transfer bytes and main-thread time."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .bootup import get_attributable_url_for_task, get_javascript_urls
from .entity_db import EntityResolver
from .models import Aggregate, ExecutionTask, TransferRecord

logger = logging.getLogger(__name__)


class AttributionAggregator:
    """Folds network records and main-thread tasks into an Aggregate."""

    def __init__(self, resolver: EntityResolver):
        self._resolver = resolver

    def aggregate(
        self,
        transfer_records: Sequence[TransferRecord],
        execution_tasks: Sequence[ExecutionTask],
        cpu_multiplier: float = 1,
    ) -> Aggregate:
        """Attribute bytes and main-thread time to entities.

        ``cpu_multiplier`` scales task self time back to real-device
        magnitude when throttling was simulated. It never applies to bytes.
        """
        aggregate = Aggregate()
        skipped_records = 0
        skipped_tasks = 0

        for record in transfer_records:
            entity = self._resolver.get_entity_safe(record.url)
            if not entity:
                skipped_records += 1
                continue
            aggregate.add_transfer_size(entity, record.transfer_size)

        js_urls = get_javascript_urls(transfer_records)

        for task in execution_tasks:
            attributable_url = get_attributable_url_for_task(task, js_urls)
            entity = self._resolver.get_entity_safe(attributable_url)
            if not entity:
                skipped_tasks += 1
                continue
            aggregate.add_main_thread_time(entity, task.self_time * cpu_multiplier)

        logger.debug(
            "Attributed %d entities (%d/%d records, %d/%d tasks unattributed)",
            len(aggregate), skipped_records, len(transfer_records),
            skipped_tasks, len(execution_tasks),
        )
        return aggregate.freeze()
