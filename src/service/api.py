from __future__ import annotations

import asyncio
import logging
import random
import time
import uuid
from collections import defaultdict, deque
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from cartrace.errors import PlateValidationError, VehicleNotFoundError
from cartrace.generator import SnapshotGenerator
from cartrace.plates import mask_plate, validate_plate
from service.logging_config import configure_logging, get_request_id, request_id
from service.mcp import TOOL_MANIFEST, ToolCallError, call_tool
from service.privacy import PRIVACY_POLICY_HTML
from service.schemas import ErrorResponse, HealthResponse, McpCallRequest, PlateRequest, SnapshotResponse
from service.settings import ServiceSettings

logger = logging.getLogger(__name__)


# ── Prometheus-style Metrics ────────────────────────────────────────

LATENCY_WINDOW = 1024

_prom_counters: dict[str, int] = defaultdict(int)
_prom_sums: dict[str, float] = defaultdict(float)
# Quantiles are computed over the most recent LATENCY_WINDOW samples only.
_prom_histograms: dict[str, deque[float]] = defaultdict(lambda: deque(maxlen=LATENCY_WINDOW))


def _record_latency(name: str, seconds: float) -> None:
    _prom_histograms[name].append(seconds)
    _prom_sums[name] += seconds
    _prom_counters[f"{name}_count"] += 1


def _prometheus_text() -> str:
    """Render metrics in Prometheus exposition format."""
    lines: list[str] = []
    for k, v in sorted(_prom_counters.items()):
        safe = k.replace(".", "_").replace("-", "_")
        lines.append(f"# TYPE cartrace_{safe} counter")
        lines.append(f"cartrace_{safe} {v}")

    for name, vals in sorted(_prom_histograms.items()):
        if not vals:
            continue
        safe = name.replace(".", "_").replace("-", "_")
        sorted_vals = sorted(vals)
        n = len(sorted_vals)
        lines.append(f"# TYPE cartrace_{safe}_seconds summary")
        for q in (0.5, 0.9, 0.99):
            idx = min(int(n * q), n - 1)
            lines.append(f'cartrace_{safe}_seconds{{quantile="{q}"}} {sorted_vals[idx]:.6f}')
        lines.append(f"cartrace_{safe}_seconds_count {_prom_counters[f'{name}_count']}")
        lines.append(f"cartrace_{safe}_seconds_sum {_prom_sums[name]:.6f}")

    return "\n".join(lines) + "\n"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


# ── App Factory ─────────────────────────────────────────────────────

def create_app(
    settings: ServiceSettings | None = None,
    generator: SnapshotGenerator | None = None,
) -> FastAPI:
    settings = settings or ServiceSettings()
    configure_logging(level=settings.log_level, fmt=settings.log_format, service_name=settings.app_name)

    generator = generator or SnapshotGenerator()

    def history_rng() -> random.Random | None:
        # None lets the generator seed its own source from the plate.
        return random.Random() if settings.randomize_history else None

    app = FastAPI(title=settings.app_name, version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next: Any) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        request_id.set(rid)
        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response

    # ── Error Mapping ───────────────────────────────────────────────

    @app.exception_handler(PlateValidationError)
    async def plate_validation_handler(_: Request, exc: PlateValidationError) -> JSONResponse:
        _prom_counters["validation_errors"] += 1
        return _error(400, str(exc))

    @app.exception_handler(ToolCallError)
    async def tool_call_handler(_: Request, exc: ToolCallError) -> JSONResponse:
        _prom_counters["validation_errors"] += 1
        logger.warning("Rejected tool call: %s", exc)
        return _error(400, str(exc))

    @app.exception_handler(VehicleNotFoundError)
    async def not_found_handler(_: Request, exc: VehicleNotFoundError) -> JSONResponse:
        _prom_counters["snapshot_not_found"] += 1
        logger.info("Vehicle not found", extra={"extra_data": {"plate_masked": exc.plate_masked}})
        return _error(404, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        _prom_counters["validation_errors"] += 1
        logger.info("Malformed request body", extra={"extra_data": {"errors": exc.errors()}})
        return _error(400, "Invalid request")

    # ── Vehicle Snapshot ────────────────────────────────────────────

    @app.post(
        "/api/vehicle/snapshot",
        response_model=SnapshotResponse,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    async def vehicle_snapshot(payload: PlateRequest | None = Body(default=None)) -> SnapshotResponse:
        t0 = time.monotonic()
        plate = validate_plate(payload.plate if payload else None)

        snapshot = generator.generate(plate, rng=history_rng())
        if snapshot is None:
            raise VehicleNotFoundError(mask_plate(plate))

        body = SnapshotResponse.model_validate(snapshot, from_attributes=True)
        if settings.simulate_latency:
            await asyncio.sleep(settings.latency_per_event_ms * len(snapshot.service_events) / 1000.0)
            body.request_id = get_request_id()
            body.server_time = datetime.now(timezone.utc)
            body.latency_ms = int((time.monotonic() - t0) * 1000)

        _record_latency("snapshot", time.monotonic() - t0)
        _prom_counters["snapshot_served"] += 1
        logger.info(
            "Snapshot served",
            extra={"extra_data": {
                "plate_masked": snapshot.vehicle.plate_masked,
                "service_events": len(snapshot.service_events),
                "confidence": snapshot.confidence,
            }},
        )
        return body

    # ── Tool Calling ────────────────────────────────────────────────

    @app.get("/api/mcp")
    async def list_tools() -> dict[str, Any]:
        return TOOL_MANIFEST

    @app.post("/api/mcp", responses={400: {"model": ErrorResponse}})
    async def invoke_tool(req: McpCallRequest | None = Body(default=None)) -> dict[str, Any]:
        _prom_counters["mcp_calls"] += 1
        return call_tool(
            req,
            generator,
            min_plate_length=settings.mcp_min_plate_length,
            rng_factory=history_rng,
        )

    # ── Static / Health ─────────────────────────────────────────────

    @app.get("/privacy", response_class=HTMLResponse)
    async def privacy() -> HTMLResponse:
        return HTMLResponse(content=PRIVACY_POLICY_HTML)

    @app.get("/")
    async def root() -> str:
        return f"{settings.app_name} is running"

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/metrics")
    async def get_metrics() -> dict[str, Any]:
        latencies = sorted(_prom_histograms.get("snapshot", []))
        return {
            "counters": dict(_prom_counters),
            "snapshot_latency": {
                "count": _prom_counters.get("snapshot_count", 0),
                "window": len(latencies),
                "p50_ms": round(latencies[len(latencies) // 2] * 1000, 3) if latencies else 0,
                "p95_ms": round(latencies[int(len(latencies) * 0.95)] * 1000, 3) if latencies else 0,
            },
        }

    @app.get("/metrics/prometheus")
    async def get_prometheus_metrics() -> Response:
        return Response(content=_prometheus_text(), media_type="text/plain; charset=utf-8")

    return app


app = create_app()
