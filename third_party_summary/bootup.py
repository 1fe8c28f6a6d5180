"""Script URL detection and main-thread task attribution."""

from __future__ import annotations

from collections.abc import Iterable

from .models import SCRIPT_RESOURCE_TYPE, ExecutionTask, TransferRecord

OTHER_URL = "Other"


def get_javascript_urls(records: Iterable[TransferRecord]) -> set[str]:
    """URLs of every record that delivered script."""
    return {r.url for r in records if r.resource_type == SCRIPT_RESOURCE_TYPE}


def get_attributable_url_for_task(task: ExecutionTask, js_urls: set[str]) -> str:
    """Pick the URL a task's cost is charged to.

    Prefers the first candidate that executed script, then the first
    candidate of any kind. Tasks with no usable candidate are charged to
    the 'Other' label.
    """
    js_url = next((url for url in task.attributable_urls if url in js_urls), None)
    fallback_url = task.attributable_urls[0] if task.attributable_urls else None
    attributable_url = js_url or fallback_url
    if not attributable_url or attributable_url == "about:blank":
        return OTHER_URL
    return attributable_url
