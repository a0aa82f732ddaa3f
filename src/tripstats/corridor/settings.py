from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from tripstats.ingest.trip_reader import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class AnalyzerSettings:
    """Run settings for the analyzer CLI.

    Only I/O behaviour is configurable; corridor locations and duration
    bounds are fixed.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = "WARNING"
    show_progress: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise TypeError("chunk_size must be an integer")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        level = str(self.log_level or "").strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}: {self.log_level!r}"
            )
        object.__setattr__(self, "log_level", level)
        if not isinstance(self.show_progress, bool):
            raise TypeError("show_progress must be a boolean")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "AnalyzerSettings":
        if not isinstance(data, Mapping):
            raise TypeError("Analyzer settings must be a mapping")
        known = {item.name for item in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ValueError(f"Unknown analyzer settings: {', '.join(unknown)}")
        return cls(**{str(key): value for key, value in data.items()})

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnalyzerSettings":
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Analyzer settings YAML not found at {config_path}")
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, Mapping):
            raise TypeError("Analyzer settings YAML must contain a mapping at the top level")
        settings = cls.from_mapping(data)
        logger.debug("Loaded analyzer settings from %s: %s", config_path, settings)
        return settings

    def to_yaml(self, path: str | Path) -> None:
        dest = Path(path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(asdict(self), handle, sort_keys=True)

    def with_overrides(
        self,
        *,
        chunk_size: Optional[int] = None,
        log_level: Optional[str] = None,
        show_progress: Optional[bool] = None,
    ) -> "AnalyzerSettings":
        """Return a copy with every non-None argument applied."""
        overrides: Dict[str, object] = {
            name: value
            for name, value in (
                ("chunk_size", chunk_size),
                ("log_level", log_level),
                ("show_progress", show_progress),
            )
            if value is not None
        }
        return replace(self, **overrides)


__all__ = ["AnalyzerSettings", "LOG_LEVELS"]
