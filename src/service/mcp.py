"""Tool-calling surface: a single tool wrapping the snapshot generator."""
from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Any, Callable

from cartrace.errors import CarTraceError
from cartrace.generator import SnapshotGenerator
from cartrace.plates import mask_plate, validate_plate
from service.schemas import McpCallRequest, SnapshotResponse

logger = logging.getLogger(__name__)

SNAPSHOT_TOOL = "get_vehicle_snapshot_by_plate"

TOOL_MANIFEST: dict[str, Any] = {
    "tools": [
        {
            "name": SNAPSHOT_TOOL,
            "description": (
                "Given a license plate, returns generic vehicle info, service events "
                "(type/km/where/when) and current corporate users."
            ),
            "input_schema": {
                "type": "object",
                "properties": {
                    "plate": {"type": "string", "description": "Vehicle license plate (e.g., AB123CD)"},
                },
                "required": ["plate"],
            },
        }
    ]
}


class ToolCallError(CarTraceError, ValueError):
    """The tool call envelope itself is malformed."""


def json_content(payload: dict[str, Any]) -> dict[str, Any]:
    return {"content": [{"type": "json", "json": payload}]}


def not_found_payload(plate: str) -> dict[str, Any]:
    body = SnapshotResponse.model_validate(
        {
            "data_as_of": datetime.now(timezone.utc),
            "vehicle": {"plate_masked": mask_plate(plate)},
            "warnings": ["Plate not found."],
        }
    )
    return body.model_dump(mode="json", exclude_none=True, exclude={"warning_details"})


def call_tool(
    req: McpCallRequest | None,
    generator: SnapshotGenerator,
    *,
    min_plate_length: int = 5,
    rng_factory: Callable[[], random.Random | None] = lambda: None,
) -> dict[str, Any]:
    if req is None or not (req.tool or "").strip():
        raise ToolCallError("Invalid MCP request")
    if req.tool != SNAPSHOT_TOOL:
        raise ToolCallError("Unknown tool")
    if req.arguments is None or "plate" not in req.arguments:
        raise ToolCallError("Missing argument: plate")

    raw = req.arguments["plate"]
    raw = "" if raw is None else str(raw)
    plate = validate_plate(raw, min_length=min_plate_length, missing_message="Invalid plate")

    snapshot = generator.generate(plate, rng=rng_factory())
    if snapshot is None:
        logger.info("Tool call for unknown plate", extra={"extra_data": {"plate_masked": mask_plate(plate)}})
        return json_content(not_found_payload(plate))

    body = SnapshotResponse.model_validate(snapshot, from_attributes=True)
    return json_content(body.model_dump(mode="json", exclude_none=True))

