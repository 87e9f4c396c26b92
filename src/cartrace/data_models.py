from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal


Severity = Literal["info", "medium", "high"]


@dataclass(frozen=True)
class VehicleInfo:
    plate_masked: str
    vin: str | None = None
    make: str | None = None
    model: str | None = None
    year: int | None = None
    fuel: str | None = None


@dataclass(frozen=True)
class PartUsed:
    code: str
    description: str
    cost: float


@dataclass(frozen=True)
class ServiceEvent:
    practice_number: str
    type: str
    km: int
    where: str
    when: date
    backoffice: str
    technician: str
    parts: tuple[PartUsed, ...] = ()
    parts_total_cost: float = 0.0
    labor: float = 0.0


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    role: str | None = None
    org_unit: str | None = None
    since: datetime | None = None


@dataclass(frozen=True)
class WarningDetail:
    code: str
    message: str
    severity: Severity = "info"


@dataclass(frozen=True)
class Snapshot:
    data_as_of: datetime
    confidence: float
    vehicle: VehicleInfo
    service_events: tuple[ServiceEvent, ...] = ()
    current_users: tuple[CurrentUser, ...] = ()
    warnings: tuple[str, ...] = ()
    warning_details: tuple[WarningDetail, ...] = ()
