# sandboxfs_mcp/main.py
from typing import Optional

from fastmcp import FastMCP
from sandboxfs.config import Settings
from sandboxfs.di import build_container
from sandboxfs.logging import configure_logging
from sandboxfs_mcp.tools.files import FileToolHandlers, register_file_tools


def create_app(settings: Optional[Settings] = None) -> FastMCP:
    """
    Build DI container, create FastMCP host, and register tools.
    Keep the server (protocol) separate from the sandbox filesystem.
    """
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)
    container = build_container(settings)

    mcp = FastMCP("SandboxFS", version="0.1.0")

    handlers = FileToolHandlers(container.filesystem, container.settings.FS_READ_MAX_BYTES)
    register_file_tools(mcp, handlers)

    return mcp


def main():
    app = create_app()
    # stdio transport: client (agent/IDE) launches this process and speaks JSON-RPC on stdin/stdout
    app.run(transport="stdio")


if __name__ == "__main__":
    main()
