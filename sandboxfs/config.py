# sandboxfs/config.py
from pathlib import Path
from pydantic_settings import BaseSettings

from sandboxfs.capabilities import Capabilities


class Settings(BaseSettings):
    # Filesystem sandbox
    SANDBOX_ROOT: Path = Path("./.sandbox")
    SANDBOX_CREATE_ROOT: bool = True

    # Capabilities of the configured filesystem
    FS_READABLE: bool = True
    FS_WRITABLE: bool = True
    FS_APPENDABLE: bool = True
    FS_TRUNCATABLE: bool = True
    FS_REMOVABLE: bool = True

    # Reject paths that climb above the root at any point, not only at the end
    GUARD_STRICT: bool = True

    # Tool-level cap on bytes returned by fs_read
    FS_READ_MAX_BYTES: int = 2_000_000

    # HTTP MCP transport
    MCP_HTTP_ENABLED: bool = True
    MCP_HTTP_HOST: str = "127.0.0.1"
    MCP_HTTP_PORT: int = 8080
    MCP_HTTP_PATH: str = "/mcp"

    # Security: Bearer token and allowed origins
    MCP_HTTP_BEARER_TOKEN: str = "change-me"         # set in .env for prod
    MCP_HTTP_ALLOWED_ORIGINS: str = "http://localhost, http://127.0.0.1"
    MCP_HTTP_ALLOW_NO_ORIGIN: bool = True            # allow non-browser clients

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    def capabilities(self) -> Capabilities:
        return Capabilities(
            readable=self.FS_READABLE,
            writable=self.FS_WRITABLE,
            appendable=self.FS_APPENDABLE,
            truncatable=self.FS_TRUNCATABLE,
            removable=self.FS_REMOVABLE,
        )
