from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from cartrace.catalog import (
    FUELS,
    MAKES,
    MODELS_BY_MAKE,
    ORG_UNITS,
    PARTS_CATALOG,
    ROLES,
    SERVICE_TYPES,
    WORKSHOP_CITIES,
)
from cartrace.config import GeneratorConfig
from cartrace.data_models import (
    CurrentUser,
    PartUsed,
    ServiceEvent,
    Snapshot,
    VehicleInfo,
    WarningDetail,
)
from cartrace.hashing import composite_seed, stable_hash
from cartrace.plates import mask_plate, normalize_plate
from cartrace.vin import synthetic_vin

logger = logging.getLogger(__name__)

HISTORY_UNAVAILABLE = WarningDetail(
    code="SERVICE_HISTORY_UNAVAILABLE",
    message="Service history not available for this plate in the mock dataset.",
    severity="medium",
)
ODOMETER_INCONSISTENCY = WarningDetail(
    code="ODOMETER_INCONSISTENCY",
    message="Potential odometer inconsistency detected (mock warning).",
    severity="high",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def pick_cost(seed: int, min_cost: float, max_cost: float) -> float:
    r = (seed % 1000) / 1000.0
    return round(min_cost + (max_cost - min_cost) * r, 2)


def pick_parts(plate: str, event_index: int, count: int) -> list[PartUsed]:
    h = composite_seed(plate, event_index)
    parts: list[PartUsed] = []
    for i in range(count):
        item = PARTS_CATALOG[(h + i * 97) % len(PARTS_CATALOG)]
        parts.append(
            PartUsed(
                code=item.code,
                description=item.description,
                cost=pick_cost(h + i * 31, item.min_cost, item.max_cost),
            )
        )
    return parts


def score_confidence(
    event_count: int,
    user_count: int,
    details: Sequence[WarningDetail],
    config: GeneratorConfig,
) -> float:
    score = config.base_confidence
    score -= config.event_penalty * event_count
    score -= config.user_penalty * user_count
    for detail in details:
        score -= config.severity_penalties.get(detail.severity, config.default_severity_penalty)
    return round(max(config.min_confidence, min(config.max_confidence, score)), 2)


class SnapshotGenerator:
    """Derive a reproducible fake vehicle snapshot from a license plate.

    Everything except ``data_as_of`` comes from the plate hash; user ``since``
    timestamps count back from midnight of the current day. Service event
    count and labor cost are drawn from a random source; pass ``rng`` to
    ``generate`` to control it, otherwise a source seeded from the plate is
    used and the result is fully reproducible.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.clock = clock

    def generate(self, plate: str, *, rng: random.Random | None = None) -> Snapshot | None:
        p = normalize_plate(plate)
        if p in self.config.not_found_plates:
            logger.info("Plate not in mock dataset", extra={"extra_data": {"plate_masked": mask_plate(p)}})
            return None

        now = self.clock()
        seed = stable_hash(p)
        if rng is None:
            rng = random.Random(seed)

        vehicle = self._vehicle(p, seed)
        anchor = now.replace(hour=0, minute=0, second=0, microsecond=0)
        users = self._users(seed, anchor)
        events = self._events(p, plate, seed, now, rng)

        details: list[WarningDetail] = []
        if p.startswith("AA"):
            events = []
            details.append(HISTORY_UNAVAILABLE)
        if p.startswith("CC"):
            details.append(ODOMETER_INCONSISTENCY)

        return Snapshot(
            data_as_of=now,
            confidence=score_confidence(len(events), len(users), details, self.config),
            vehicle=vehicle,
            service_events=tuple(events),
            current_users=tuple(users),
            warnings=tuple(d.message for d in details),
            warning_details=tuple(details),
        )

    def _vehicle(self, plate: str, seed: int) -> VehicleInfo:
        make = MAKES[seed % len(MAKES)]
        models = MODELS_BY_MAKE[make]
        return VehicleInfo(
            plate_masked=mask_plate(plate),
            vin=synthetic_vin(seed),
            make=make,
            model=models[seed % len(models)],
            year=self.config.base_year + seed % self.config.year_span,
            fuel=FUELS[(seed // 7) % len(FUELS)],
        )

    def _users(self, seed: int, anchor: datetime) -> list[CurrentUser]:
        users: list[CurrentUser] = []
        for i in range(1 + seed % 3):
            user_seed = seed + i * 97
            role = ROLES[user_seed % len(ROLES)]
            users.append(
                CurrentUser(
                    user_id=f"{role[0]}_{100 + user_seed % 900}",
                    role=role,
                    org_unit=ORG_UNITS[(user_seed // 3) % len(ORG_UNITS)],
                    since=anchor - timedelta(days=1 + user_seed % 200),
                )
            )
        return users

    def _events(
        self,
        plate: str,
        raw_plate: str,
        seed: int,
        now: datetime,
        rng: random.Random,
    ) -> list[ServiceEvent]:
        cfg = self.config
        count = rng.randint(cfg.min_service_events, cfg.max_service_events)
        raw_hash = stable_hash(raw_plate)
        today = now.date()

        events: list[ServiceEvent] = []
        for i in range(count):
            event_seed = composite_seed(plate, i)
            parts = pick_parts(plate, i, cfg.parts_per_event)
            city = WORKSHOP_CITIES[(raw_hash + i) % len(WORKSHOP_CITIES)]
            events.append(
                ServiceEvent(
                    practice_number=f"{cfg.practice_prefix}{100_000 + event_seed % 900_000}",
                    type=SERVICE_TYPES[i % len(SERVICE_TYPES)],
                    km=cfg.base_km + seed % cfg.km_span,
                    where=f"Workshop {raw_hash % 1000:03d} ({city})",
                    when=today - timedelta(days=cfg.first_event_age_days + cfg.event_spacing_days * i),
                    backoffice=f"BO-{raw_hash % 10_000:04d}",
                    technician=f"TEC-{(raw_hash + i * 13) % 1000:03d}",
                    parts=tuple(parts),
                    parts_total_cost=round(sum(part.cost for part in parts), 2),
                    labor=round(rng.uniform(cfg.labor_min, cfg.labor_max), 2),
                )
            )
        return events
