"""
Logging configuration for the YouTube MCP Server.

Everything goes to stderr: stdout carries the MCP stdio protocol and must only
contain JSON-RPC messages.
"""

import logging
import sys

FORMATTER = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger with a single stderr handler.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        The configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(FORMATTER)
    root_logger.addHandler(console_handler)

    # googleapiclient logs every discovery/cache lookup at INFO
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)

    return root_logger
