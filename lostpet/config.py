"""Central application configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from lostpet.matching.scoring import DEFAULT_WEIGHTS, SIZE_RULES, validate_weights


@dataclass(frozen=True)
class Config:
    """Central application configuration.

    Reads from environment variables with sensible defaults.
    All paths are resolved relative to project root.
    """

    # Paths
    data_dir: Path = field(default_factory=lambda: Path(os.getenv("DATA_DIR", "data")))
    store_file: str = field(
        default_factory=lambda: os.getenv("STORE_FILE", "lostpet_store.json")
    )

    # Scoring
    scoring_weights: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    size_rule: str = field(default_factory=lambda: os.getenv("SIZE_SCORE_RULE", "strict"))
    match_threshold: int = field(
        default_factory=lambda: int(os.getenv("MATCH_THRESHOLD", "70"))
    )

    # Area risk
    risk_radius_km: float = 2.0
    risk_window_hours: float = 72.0
    risk_critical_count: int = 5

    # Local user defaults (Bangkok)
    default_lat: float = 13.7563
    default_lng: float = 100.5018
    default_alert_radius_km: float = 5.0
    default_frequency: str = "immediate"

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))

    def __post_init__(self) -> None:
        validate_weights(self.scoring_weights)
        if self.size_rule not in SIZE_RULES:
            raise ValueError(
                f"Unknown size rule {self.size_rule!r}, expected one of {sorted(SIZE_RULES)}"
            )

    @property
    def store_path(self) -> Path:
        """Location of the JSON key-value store."""
        return self.data_dir / self.store_file


def get_config() -> Config:
    """Get application configuration.

    Returns:
        Config instance with values from environment or defaults.
    """
    return Config()
