"""Runtime configuration for csvshape."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .rules import (
    DEFAULT_CLEANUP_COLUMNS,
    DEFAULT_DELIMITER,
    DEFAULT_ROW_LIMIT,
    MAX_UPLOAD_BYTES,
)
from .tokenizer import check_dialect

logger = logging.getLogger(__name__)

_ESCAPES = {"\\t": "\t"}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class ShapeConfig:
    """Parsing defaults, overridable from the environment."""

    delimiter: str = DEFAULT_DELIMITER
    row_limit: int = DEFAULT_ROW_LIMIT
    cleanup_columns: bool = DEFAULT_CLEANUP_COLUMNS
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> ShapeConfig:
        cfg = cls()

        delimiter = os.environ.get("CSVSHAPE_DELIMITER")
        if delimiter:
            delimiter = unescape_delimiter(delimiter)
            try:
                check_dialect(delimiter)
            except ValueError as e:
                logger.warning("Ignoring CSVSHAPE_DELIMITER=%r: %s", delimiter, e)
            else:
                cfg.delimiter = delimiter

        row_limit = os.environ.get("CSVSHAPE_ROW_LIMIT")
        if row_limit:
            try:
                cfg.row_limit = int(row_limit)
            except ValueError:
                logger.warning("Ignoring CSVSHAPE_ROW_LIMIT=%r: not an integer", row_limit)

        cleanup = os.environ.get("CSVSHAPE_CLEANUP_COLUMNS")
        if cleanup:
            flag = cleanup.strip().lower()
            if flag in _TRUE:
                cfg.cleanup_columns = True
            elif flag in _FALSE:
                cfg.cleanup_columns = False
            else:
                logger.warning("Ignoring CSVSHAPE_CLEANUP_COLUMNS=%r", cleanup)

        max_bytes = os.environ.get("CSVSHAPE_MAX_UPLOAD_BYTES")
        if max_bytes:
            if max_bytes.isdigit():
                cfg.max_upload_bytes = int(max_bytes)
            else:
                logger.warning("Ignoring CSVSHAPE_MAX_UPLOAD_BYTES=%r: not a byte count", max_bytes)

        level = os.environ.get("CSVSHAPE_LOG_LEVEL")
        if level:
            # getLevelName maps known names to their int value
            if isinstance(logging.getLevelName(level.upper()), int):
                cfg.log_level = level.upper()
            else:
                logger.warning("Ignoring CSVSHAPE_LOG_LEVEL=%r: unknown level", level)

        return cfg


def unescape_delimiter(value: str) -> str:
    """Accept a literal backslash-t for tab, as typed in shells and env files."""
    return _ESCAPES.get(value, value)


def get_config() -> ShapeConfig:
    return ShapeConfig.from_env()
