# sandboxfs_mcp/registry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Type, Optional
from pydantic import BaseModel

from sandboxfs.di import Container, build_container
from sandboxfs_mcp.tools.files import (
    FileToolHandlers,
    FsCapabilitiesIn,
    FsListIn,
    FsMkdirIn,
    FsReadIn,
    FsRemoveIn,
    FsStatIn,
    FsWriteIn,
)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[BaseModel], Any]


def _schema_from_model(model: Type[BaseModel]) -> Dict[str, Any]:
    return model.model_json_schema()


def build_tool_registry(container: Optional[Container] = None) -> Dict[str, ToolSpec]:
    """
    Build a registry once at startup using DI.
    Transport layers (stdio/HTTP) read from this registry to expose tools.
    """
    container = container or build_container()
    handlers = FileToolHandlers(container.filesystem, container.settings.FS_READ_MAX_BYTES)

    specs = [
        ToolSpec("fs_read", "Read a text file under sandbox root", FsReadIn, handlers.fs_read),
        ToolSpec("fs_write", "Write a text file under sandbox root", FsWriteIn, handlers.fs_write),
        ToolSpec("fs_list", "List the entries of a directory under sandbox root", FsListIn, handlers.fs_list),
        ToolSpec("fs_stat", "Type and size of a file or directory under sandbox root", FsStatIn, handlers.fs_stat),
        ToolSpec("fs_mkdir", "Create a directory (and parents) under sandbox root", FsMkdirIn, handlers.fs_mkdir),
        ToolSpec("fs_remove", "Remove a file or a directory tree under sandbox root", FsRemoveIn, handlers.fs_remove),
        ToolSpec(
            "fs_capabilities",
            "Report which capabilities the sandbox filesystem has",
            FsCapabilitiesIn,
            handlers.fs_capabilities,
        ),
    ]
    return {spec.name: spec for spec in specs}


def list_tools_payload(registry: Dict[str, ToolSpec]) -> Dict[str, Any]:
    """
    Produce the `tools/list` payload body as per MCP Tools spec.
    """
    tools = []
    for spec in registry.values():
        tools.append({
            "name": spec.name,
            "description": spec.description,
            "inputSchema": _schema_from_model(spec.input_model),
        })
    return {"tools": tools}


def dispatch_tool_call(registry: Dict[str, ToolSpec], name: str, arguments: Dict[str, Any]) -> Any:
    """
    Validate args with the tool's Pydantic model, then invoke the named handler.
    """
    if name not in registry:
        raise KeyError(f"Tool not found: {name}")
    spec = registry[name]
    args_obj = spec.input_model(**arguments)
    return spec.handler(args_obj)
