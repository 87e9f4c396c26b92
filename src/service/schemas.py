from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class PlateRequest(BaseModel):
    plate: str | None = None


class McpCallRequest(BaseModel):
    tool: str | None = None
    arguments: dict[str, Any] | None = None


# ── Snapshot Response Models ───────────────────────────────────────

class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class VehicleOut(_FromDomain):
    plate_masked: str
    vin: str | None = None
    make: str | None = None
    model: str | None = None
    year: int | None = None
    fuel: str | None = None


class PartOut(_FromDomain):
    code: str
    description: str
    cost: float


class ServiceEventOut(_FromDomain):
    practice_number: str
    type: str
    km: int
    where: str
    when: date
    backoffice: str
    technician: str
    parts: list[PartOut]
    parts_total_cost: float
    labor: float


class CurrentUserOut(_FromDomain):
    user_id: str
    role: str | None = None
    org_unit: str | None = None
    since: datetime | None = None


class WarningDetailOut(_FromDomain):
    code: str
    message: str
    severity: Literal["info", "medium", "high"]


class SnapshotResponse(_FromDomain):
    data_as_of: datetime
    confidence: float | None = None
    vehicle: VehicleOut
    service_events: list[ServiceEventOut] = []
    current_users: list[CurrentUserOut] = []
    warnings: list[str] = []
    warning_details: list[WarningDetailOut] = []

    # Only set when latency simulation is enabled
    request_id: str | None = None
    server_time: datetime | None = None
    latency_ms: int | None = None


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    error: str
