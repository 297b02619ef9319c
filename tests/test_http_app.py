from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from sandboxfs.config import Settings
from sandboxfs_mcp import http_app
from sandboxfs_mcp.http_app import create_http_app

TOKEN = "test-token"


@pytest.fixture
def client(tmp_path: Path):
    settings = Settings(SANDBOX_ROOT=tmp_path, MCP_HTTP_BEARER_TOKEN=TOKEN)
    return TestClient(create_http_app(settings))


def _rpc(client, method, params=None, id_=1, **kwargs):
    headers = kwargs.pop("headers", {"Authorization": f"Bearer {TOKEN}"})
    body = {"jsonrpc": "2.0", "id": id_, "method": method, "params": params or {}}
    return client.post("/mcp", json=body, headers=headers)


def test_requires_bearer_token(client):
    resp = _rpc(client, "initialize", headers={})
    assert resp.status_code == 401


def test_rejects_unknown_origin(client):
    resp = _rpc(client, "initialize", headers={"Authorization": f"Bearer {TOKEN}", "Origin": "http://evil.test"})
    assert resp.status_code == 403


def test_initialize_and_list(client):
    init = _rpc(client, "initialize").json()
    assert init["result"]["serverInfo"]["name"] == "sandboxfs-mcp-http"
    tools = _rpc(client, "tools/list").json()["result"]["tools"]
    assert {t["name"] for t in tools} >= {"fs_read", "fs_write", "fs_list"}


def test_tool_call_round_trip(client):
    write = _rpc(client, "tools/call", {"name": "fs_write", "arguments": {"path": "n.txt", "content": "hi"}}).json()
    assert write["result"] == {"content": [{"type": "text", "text": "OK"}], "isError": False}
    read = _rpc(client, "tools/call", {"name": "fs_read", "arguments": {"path": "n.txt"}}).json()
    assert read["result"]["content"][0]["text"] == "hi"


def test_sandbox_violation_is_tool_error(client):
    resp = _rpc(client, "tools/call", {"name": "fs_read", "arguments": {"path": "../etc/passwd"}}).json()
    assert resp["result"]["isError"] is True
    assert "escapes sandbox root" in resp["result"]["content"][0]["text"]


def test_invalid_params(client):
    resp = _rpc(client, "tools/call", {"name": "fs_write", "arguments": {"path": "x"}}).json()
    assert resp["error"]["code"] == -32602


def test_unknown_method(client):
    resp = _rpc(client, "resources/list").json()
    assert resp["error"]["code"] == -32601


def test_serve_respects_http_disabled(tmp_path: Path, monkeypatch):
    calls = []
    monkeypatch.setattr(http_app.uvicorn, "run", lambda *a, **kw: calls.append(kw))

    off = Settings(SANDBOX_ROOT=tmp_path, MCP_HTTP_ENABLED=False)
    assert http_app.serve(off) is False
    assert calls == []

    on = Settings(SANDBOX_ROOT=tmp_path, MCP_HTTP_PORT=8123)
    assert http_app.serve(on) is True
    assert calls == [{"host": "127.0.0.1", "port": 8123, "reload": False}]
