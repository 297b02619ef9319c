# sandboxfs/logging.py
import logging
import os
from typing import Optional

from sandboxfs.errors import PathLike


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def log_fs_call(logger: logging.Logger, op: str, path: PathLike):
    logger.debug("fs_call %s %s", op, os.fspath(path))


def log_tool_call(logger: logging.Logger, name: str, args: dict):
    logger.info("tool_call %s %s", name, args)
