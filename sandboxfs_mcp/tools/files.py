# sandboxfs_mcp/tools/files.py
from __future__ import annotations

from typing import Any, Dict, List, Literal
import logging

from pydantic import BaseModel, Field
from fastmcp import FastMCP

from sandboxfs.entity import EntityType
from sandboxfs.errors import IterationError
from sandboxfs.logging import log_tool_call
from sandboxfs.services.filesystem import SandboxFileSystem

logger = logging.getLogger(__name__)


class FsReadIn(BaseModel):
    path: str = Field(..., description="Relative path under sandbox root")


class FsWriteIn(BaseModel):
    path: str = Field(..., description="Relative path under sandbox root")
    content: str = Field(..., description="UTF-8 text content to write")
    mode: Literal["create", "create_new"] = Field(
        "create", description="'create' creates or opens the file, 'create_new' fails if it exists"
    )


class FsListIn(BaseModel):
    path: str = Field(".", description="Relative directory path under sandbox root")


class FsStatIn(BaseModel):
    path: str = Field(..., description="Relative path under sandbox root")


class FsMkdirIn(BaseModel):
    path: str = Field(..., description="Relative directory path under sandbox root")
    exist_ok: bool = Field(True, description="Succeed if the directory already exists")


class FsRemoveIn(BaseModel):
    path: str = Field(..., description="Relative path under sandbox root; directories are removed recursively")


class FsCapabilitiesIn(BaseModel):
    pass


class FileToolHandlers:
    """
    Tool logic over a SandboxFileSystem. Sandbox errors propagate to the transport.
    """

    def __init__(self, filesystem: SandboxFileSystem, read_max_bytes: int = 2_000_000):
        self.fs = filesystem
        self.read_max_bytes = read_max_bytes

    def fs_read(self, args: FsReadIn) -> str:
        log_tool_call(logger, "fs_read", args.model_dump())
        with self.fs.open_file(args.path) as f:
            data = f.read(self.read_max_bytes)
        return data.decode("utf-8", "replace")

    def fs_write(self, args: FsWriteIn) -> str:
        log_tool_call(logger, "fs_write", {"path": args.path, "mode": args.mode})
        if args.mode == "create_new":
            f = self.fs.create_new_file(args.path)
        else:
            f = self.fs.create_file(args.path)
        with f:
            f.write(args.content.encode("utf-8"))
        return "OK"

    def fs_list(self, args: FsListIn) -> Dict[str, Any]:
        log_tool_call(logger, "fs_list", args.model_dump())
        entries: List[Dict[str, Any]] = []
        errors: List[str] = []
        for item in self.fs.open_dir(args.path).entries():
            if isinstance(item, IterationError):
                errors.append(str(item))
                continue
            entries.append({
                "path": item.path().as_posix(),
                "type": (EntityType.DIR if item.is_dir() else EntityType.FILE).value,
                "size": item.size(),
            })
        entries.sort(key=lambda e: e["path"])
        return {"entries": entries, "errors": errors}

    def fs_stat(self, args: FsStatIn) -> Dict[str, Any]:
        log_tool_call(logger, "fs_stat", args.model_dump())
        meta = self.fs.metadata(args.path)
        return {"path": args.path, "type": meta.type.value, "size": meta.size}

    def fs_mkdir(self, args: FsMkdirIn) -> str:
        log_tool_call(logger, "fs_mkdir", args.model_dump())
        if args.exist_ok:
            self.fs.create_dir(args.path)
        else:
            self.fs.create_new_dir(args.path)
        return "OK"

    def fs_remove(self, args: FsRemoveIn) -> str:
        log_tool_call(logger, "fs_remove", args.model_dump())
        if self.fs.is_dir(args.path):
            self.fs.remove_dir(args.path)
        else:
            self.fs.remove_file(args.path)
        return "OK"

    def fs_capabilities(self, args: FsCapabilitiesIn) -> Dict[str, bool]:
        return self.fs.capabilities.as_dict()


def register_file_tools(mcp: FastMCP, handlers: FileToolHandlers):
    """
    Very thin tool adapters:
    - validate/deserialize inputs (Pydantic)
    - call the handlers (sandbox + capability checks happen below them)
    - return the result
    """

    @mcp.tool(name="fs_read", description="Read a text file under sandbox root")
    def fs_read(input: FsReadIn) -> str:
        return handlers.fs_read(input)

    @mcp.tool(name="fs_write", description="Write a text file under sandbox root")
    def fs_write(input: FsWriteIn) -> str:
        return handlers.fs_write(input)

    @mcp.tool(name="fs_list", description="List the entries of a directory under sandbox root")
    def fs_list(input: FsListIn) -> Dict[str, Any]:
        return handlers.fs_list(input)

    @mcp.tool(name="fs_stat", description="Type and size of a file or directory under sandbox root")
    def fs_stat(input: FsStatIn) -> Dict[str, Any]:
        return handlers.fs_stat(input)

    @mcp.tool(name="fs_mkdir", description="Create a directory (and parents) under sandbox root")
    def fs_mkdir(input: FsMkdirIn) -> str:
        return handlers.fs_mkdir(input)

    @mcp.tool(name="fs_remove", description="Remove a file or a directory tree under sandbox root")
    def fs_remove(input: FsRemoveIn) -> str:
        return handlers.fs_remove(input)

    @mcp.tool(name="fs_capabilities", description="Report which capabilities the sandbox filesystem has")
    def fs_capabilities() -> Dict[str, bool]:
        return handlers.fs_capabilities(FsCapabilitiesIn())
