"""Configuration loading and typed config dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .models import ThrottlingMethod


@dataclass
class AuditSettings:
    throttling_method: str = ThrottlingMethod.SIMULATE.value
    cpu_slowdown_multiplier: float = 4.0

    def __post_init__(self) -> None:
        # Raises ValueError on an unknown method
        self.throttling_method = ThrottlingMethod(self.throttling_method).value
        if self.cpu_slowdown_multiplier <= 0:
            raise ValueError(
                f"cpu_slowdown_multiplier must be positive, got {self.cpu_slowdown_multiplier}"
            )

    @property
    def cpu_multiplier(self) -> float:
        """Factor applied to main-thread time; 1 unless throttling was simulated."""
        if self.throttling_method == ThrottlingMethod.SIMULATE.value:
            return self.cpu_slowdown_multiplier
        return 1


@dataclass
class EntitySettings:
    path: str | None = None
    include_builtins: bool = True


@dataclass
class SummaryConfig:
    project_root: Path = field(default_factory=lambda: Path.cwd())
    audit: AuditSettings = field(default_factory=AuditSettings)
    entities: EntitySettings = field(default_factory=EntitySettings)

    def resolve_path(self, relative_path: str) -> Path:
        """Resolve a relative path against the project root."""
        p = Path(relative_path)
        if p.is_absolute():
            return p
        return self.project_root / p


def _build_nested(cls, data: dict | None):
    """Build a dataclass from a dict, ignoring unknown keys."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for {cls.__name__}, got {type(data).__name__}")
    fieldnames = set(cls.__dataclass_fields__)
    return cls(**{key: val for key, val in data.items() if key in fieldnames})


def load_config(path: str | Path) -> SummaryConfig:
    """Load configuration from a YAML file, falling back to defaults."""
    config_path = Path(path)
    project_root = config_path.parent

    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    else:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    return SummaryConfig(
        project_root=project_root,
        audit=_build_nested(AuditSettings, raw.get("audit")),
        entities=_build_nested(EntitySettings, raw.get("entities")),
    )
