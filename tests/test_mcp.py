import random

import pytest
from fastapi.testclient import TestClient

from cartrace.errors import PlateValidationError
from cartrace.generator import SnapshotGenerator
from service.api import create_app
from service.mcp import SNAPSHOT_TOOL, ToolCallError, call_tool
from service.schemas import McpCallRequest


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "text")
    with TestClient(create_app()) as c:
        yield c


def test_list_tools(client):
    resp = client.get("/api/mcp")
    assert resp.status_code == 200
    tools = resp.json()["tools"]
    assert len(tools) == 1
    assert tools[0]["name"] == "get_vehicle_snapshot_by_plate"
    schema = tools[0]["input_schema"]
    assert schema["required"] == ["plate"]
    assert schema["properties"]["plate"]["type"] == "string"


def test_call_tool_success(client):
    resp = client.post("/api/mcp", json={"tool": SNAPSHOT_TOOL, "arguments": {"plate": "AB123CD"}})
    assert resp.status_code == 200
    content = resp.json()["content"]
    assert len(content) == 1
    assert content[0]["type"] == "json"
    snapshot = content[0]["json"]
    assert snapshot["vehicle"]["plate_masked"] == "AB***CD"
    assert "confidence" in snapshot


def test_call_tool_not_found_is_a_warning(client):
    resp = client.post("/api/mcp", json={"tool": SNAPSHOT_TOOL, "arguments": {"plate": "zz999zz"}})
    assert resp.status_code == 200
    payload = resp.json()["content"][0]["json"]
    assert payload["vehicle"] == {"plate_masked": "ZZ***ZZ"}
    assert payload["service_events"] == []
    assert payload["current_users"] == []
    assert payload["warnings"] == ["Plate not found."]
    assert "confidence" not in payload


@pytest.mark.parametrize(
    "payload, error",
    [
        ({"tool": SNAPSHOT_TOOL, "arguments": {"plate": "AB1"}}, "Invalid plate"),
        ({"tool": SNAPSHOT_TOOL, "arguments": {"plate": "  AB12  "}}, "Invalid plate"),
        ({"tool": SNAPSHOT_TOOL, "arguments": {"plate": None}}, "Invalid plate"),
        ({"tool": SNAPSHOT_TOOL, "arguments": {}}, "Missing argument: plate"),
        ({"tool": SNAPSHOT_TOOL}, "Missing argument: plate"),
        ({"tool": "other_tool", "arguments": {"plate": "AB123CD"}}, "Unknown tool"),
        ({"tool": "", "arguments": {"plate": "AB123CD"}}, "Invalid MCP request"),
        ({}, "Invalid MCP request"),
    ],
)
def test_call_tool_rejections(client, payload, error):
    resp = client.post("/api/mcp", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": error}


def test_call_tool_direct_uses_rng_factory():
    gen = SnapshotGenerator()
    req = McpCallRequest(tool=SNAPSHOT_TOOL, arguments={"plate": "AB123CD"})
    a = call_tool(req, gen, rng_factory=lambda: random.Random(7))
    b = call_tool(req, gen, rng_factory=lambda: random.Random(7))
    assert a["content"][0]["json"]["service_events"] == b["content"][0]["json"]["service_events"]


def test_call_tool_direct_errors():
    gen = SnapshotGenerator()
    with pytest.raises(ToolCallError):
        call_tool(None, gen)
    with pytest.raises(PlateValidationError):
        call_tool(McpCallRequest(tool=SNAPSHOT_TOOL, arguments={"plate": "ABCDE"}), gen, min_plate_length=6)


def test_call_tool_rejects_unencodable_plate(client):
    resp = client.post(
        "/api/mcp",
        content=b'{"tool": "get_vehicle_snapshot_by_plate", "arguments": {"plate": "AB\\ud800CD"}}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid plate"}
