"""CLI entry point for the third-party summary audit."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import yaml

from .artifacts import ArtifactError, JsonArtifacts
from .config import AuditSettings, load_config
from .entity_db import EntityResolver, default_resolver
from .models import ThrottlingMethod
from .report import TITLE, AuditProduct, ThirdPartySummaryAudit

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="third_party_summary",
        description="Attribute page-load cost to third-party providers",
    )
    parser.add_argument(
        "artifacts", type=str,
        help="JSON file with networkRecords and mainThreadTasks",
    )
    parser.add_argument(
        "--config", type=str, default="config.yaml",
        help="Path to config.yaml (default: ./config.yaml)",
    )
    parser.add_argument(
        "--entities", type=str, default=None,
        help="Override third-party-web entities.json path",
    )
    parser.add_argument(
        "--throttling-method", type=str, default=None,
        choices=[m.value for m in ThrottlingMethod],
        help="Override the throttling method the trace was recorded with",
    )
    parser.add_argument(
        "--cpu-multiplier", type=float, default=None,
        help="Override the simulated CPU slowdown multiplier",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the audit result as JSON",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


def _format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size / (1024 * 1024):.1f} MiB"


def print_table(product: AuditProduct) -> None:
    details = product.details
    items = details.get("items", [])
    summary = details.get("summary", {})

    print("=" * 70)
    print(TITLE.upper())
    print("=" * 70)
    if not items:
        print("  No third-party usage detected.")
    for item in items:
        print(
            f"  {item['entity']['text']:<36} "
            f"{_format_bytes(item['transferSize']):>12} "
            f"{item['mainThreadTime']:>10.0f} ms"
        )
    print("-" * 70)
    print(f"  Transfer size:      {_format_bytes(summary.get('wastedBytes', 0))}")
    print(f"  Main thread time:   {summary.get('wastedMs', 0):,.0f} ms")
    print("=" * 70)


async def main(args: argparse.Namespace) -> int:
    """Load config and artifacts, run the audit, print the result."""
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("filelock").setLevel(logging.WARNING)

    try:
        config = load_config(Path(args.config).resolve())
        audit_settings = config.audit
        if args.throttling_method or args.cpu_multiplier is not None:
            audit_settings = AuditSettings(
                throttling_method=args.throttling_method or audit_settings.throttling_method,
                cpu_slowdown_multiplier=(
                    args.cpu_multiplier if args.cpu_multiplier is not None
                    else audit_settings.cpu_slowdown_multiplier
                ),
            )
    except (ValueError, TypeError, yaml.YAMLError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    if args.entities:
        entities_path = Path(args.entities)
    elif config.entities.path:
        entities_path = config.resolve_path(config.entities.path)
    else:
        entities_path = None
    if entities_path is None and config.entities.include_builtins:
        resolver = default_resolver()
    else:
        resolver = EntityResolver(
            entities_path=entities_path,
            include_builtins=config.entities.include_builtins,
        )

    audit = ThirdPartySummaryAudit(resolver)
    try:
        product = await audit.audit(JsonArtifacts(args.artifacts), audit_settings)
    except ArtifactError as e:
        logger.error("Failed to obtain artifacts: %s", e)
        return 1

    if args.json:
        json.dump(product.to_dict(), sys.stdout, indent=2)
        print()
    else:
        print_table(product)
    return 0


def run() -> None:
    """Console script entry point."""
    args = parse_args(sys.argv[1:])
    sys.exit(asyncio.run(main(args)))
