# sandboxfs_mcp/http_app.py
from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import uvicorn

from sandboxfs.config import Settings
from sandboxfs.di import build_container
from sandboxfs.errors import FsError
from sandboxfs.logging import configure_logging
from sandboxfs_mcp.registry import build_tool_registry, list_tools_payload, dispatch_tool_call

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2025-03-26"  # MCP protocol revision


def _jsonrpc_error(id_: Any, code: int, message: str, data: Any | None = None) -> JSONResponse:
    body: Dict[str, Any] = {"jsonrpc": "2.0", "id": id_, "error": {"code": code, "message": message}}
    if data is not None:
        body["error"]["data"] = data
    return JSONResponse(body)


def _jsonrpc_result(id_: Any, result: Any) -> JSONResponse:
    return JSONResponse({"jsonrpc": "2.0", "id": id_, "result": result})


def _tool_result(result: Any, is_error: bool = False) -> Dict[str, Any]:
    content_block = (
        {"type": "json", "json": result}
        if isinstance(result, (dict, list))
        else {"type": "text", "text": str(result)}
    )
    return {"content": [content_block], "isError": is_error}


def create_http_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)
    registry = build_tool_registry(build_container(settings))

    app = FastAPI(title="SandboxFS MCP HTTP Server", version="0.1.0")

    # ---------- Security: Origin validation & Bearer token ----------

    def _origin_allowed(req: Request) -> bool:
        origin = req.headers.get("origin")
        if not origin:
            return settings.MCP_HTTP_ALLOW_NO_ORIGIN
        allowed = {o.strip().lower() for o in settings.MCP_HTTP_ALLOWED_ORIGINS.split(",") if o.strip()}
        return origin.lower() in allowed

    def _require_auth(req: Request):
        auth = req.headers.get("authorization", "")
        if not auth.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Missing Bearer token")
        token = auth.split(" ", 1)[1]
        if token != settings.MCP_HTTP_BEARER_TOKEN:
            raise HTTPException(status_code=401, detail="Invalid Bearer token")

    @app.middleware("http")
    async def origin_validation_mw(request: Request, call_next):
        # Origin validation prevents DNS rebinding; a provided but unknown origin → 403
        if not _origin_allowed(request):
            return JSONResponse({"error": {"code": 403, "message": "Forbidden origin"}}, status_code=403)
        return await call_next(request)

    # ---------- MCP JSON-RPC endpoint (Streamable HTTP) ----------

    @app.post(settings.MCP_HTTP_PATH)
    async def mcp_endpoint(request: Request):
        _require_auth(request)

        try:
            payload = await request.json()
        except ValueError:
            return _jsonrpc_error(None, -32700, "Parse error")

        id_ = payload.get("id")
        method = payload.get("method")
        params = payload.get("params", {})

        if method == "initialize":
            return _jsonrpc_result(id_, {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {"listChanged": True}},
                "serverInfo": {"name": "sandboxfs-mcp-http", "version": "0.1.0"},
            })

        if method == "tools/list":
            return _jsonrpc_result(id_, list_tools_payload(registry))

        if method == "tools/call":
            name = params.get("name")
            args = params.get("arguments", {})
            try:
                result = dispatch_tool_call(registry, name, args)
            except KeyError as ke:
                return _jsonrpc_error(id_, -32601, str(ke))
            except ValidationError as ve:
                return _jsonrpc_error(id_, -32602, "Invalid params", ve.errors(include_url=False))
            except FsError as fe:
                # Sandbox and capability failures are tool errors, not protocol errors
                logger.info("tool %s failed: %s", name, fe)
                return _jsonrpc_result(id_, _tool_result(str(fe), is_error=True))
            except Exception as e:
                logger.exception("tool %s crashed", name)
                return _jsonrpc_error(id_, -32603, "Internal error", str(e))

            return _jsonrpc_result(id_, _tool_result(result))

        return _jsonrpc_error(id_, -32601, f"Method not found: {method}")

    return app


def serve(settings: Optional[Settings] = None) -> bool:
    """Run the HTTP transport under uvicorn. Returns False without serving when it is disabled."""
    settings = settings or Settings()
    if not settings.MCP_HTTP_ENABLED:
        configure_logging(settings.LOG_LEVEL)
        logger.warning("HTTP transport disabled (MCP_HTTP_ENABLED=false), not serving")
        return False
    uvicorn.run(
        create_http_app(settings),
        host=settings.MCP_HTTP_HOST,
        port=settings.MCP_HTTP_PORT,
        reload=False,
    )
    return True


if __name__ == "__main__":
    serve()
