"""
logger.py - Console + rotating file logging for the server.

stdout carries the MCP stdio protocol, so console output goes to stderr.
The log file rotates at 1MB, keeping 3 old copies.

Usage:
    from request_mcp.logger import setup_logging
    setup_logging(settings.logs_dir, settings.log_level)
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_NAME = "request-mcp"
LOG_FORMAT = "[request-mcp] %(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
MAX_LOG_SIZE = 1_000_000  # 1MB
MAX_ROTATIONS = 3


def setup_logging(logs_dir=None, level="INFO"):
    """Configure the root logger. Returns the log file path, or None if file logging is off."""
    level_value = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(level=level_value, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level_value)

    if not logs_dir:
        return None

    log_path = os.path.join(str(logs_dir), f"{LOG_NAME}.log")
    root = logging.getLogger()
    for handler in root.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == os.path.abspath(log_path):
            return log_path

    try:
        os.makedirs(str(logs_dir), exist_ok=True)
        handler = RotatingFileHandler(
            log_path, maxBytes=MAX_LOG_SIZE, backupCount=MAX_ROTATIONS, encoding="utf-8"
        )
    except OSError as e:
        logging.getLogger(__name__).warning("File logging disabled (%s): %s", log_path, e)
        return None

    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    return log_path
