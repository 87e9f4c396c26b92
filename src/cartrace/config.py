from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class GeneratorConfig:
    not_found_plates: frozenset[str] = frozenset({"ZZ999ZZ", "NOTFOUND"})
    base_year: int = 2005
    year_span: int = 9
    base_km: int = 20_000
    km_span: int = 180_000
    practice_prefix: str = "PR-2026-"
    min_service_events: int = 1
    max_service_events: int = 3
    parts_per_event: int = 2
    first_event_age_days: int = 85
    event_spacing_days: int = 60
    labor_min: float = 25.0
    labor_max: float = 32.5
    base_confidence: float = 0.95
    event_penalty: float = 0.025
    user_penalty: float = 0.010
    min_confidence: float = 0.05
    max_confidence: float = 0.99
    severity_penalties: Dict[str, float] = field(
        default_factory=lambda: {
            "high": 0.25,
            "medium": 0.12,
        }
    )
    default_severity_penalty: float = 0.05
