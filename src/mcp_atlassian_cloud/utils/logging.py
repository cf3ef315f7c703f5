"""Logging utilities for the Atlassian Cloud MCP server.

All output goes to a single stream handler on stderr so that stdout stays
reserved for the MCP stdio transport.
"""

import logging

APP_LOGGER_NAME = "mcp-atlassian-cloud"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Configure root and application logging.

    Args:
        level: The minimum logging level to display (default: WARNING)

    Returns:
        The application logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Drop handlers from a previous call so messages are not duplicated
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
    root_logger.addHandler(handler)

    for logger_name in (APP_LOGGER_NAME, "mcp.server", "mcp.server.lowlevel.server"):
        logging.getLogger(logger_name).setLevel(level)

    return logging.getLogger(APP_LOGGER_NAME)


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Masks sensitive strings for logging.

    Args:
        value: The string to mask
        keep_chars: Number of characters to keep visible at start and end

    Returns:
        Masked string with most characters replaced by asterisks
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    hidden = "*" * (len(value) - keep_chars * 2)
    return f"{value[:keep_chars]}{hidden}{value[-keep_chars:]}"


def log_config_param(
    logger: logging.Logger,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Logs a configuration parameter at INFO, masking it if sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"Atlassian {param}: {display_value}")
