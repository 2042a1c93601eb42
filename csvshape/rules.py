"""
Deterministic parsing rules.

Defaults shared by the loader, the API and the CLI.
"""

DEFAULT_DELIMITER = ","
DEFAULT_ROW_LIMIT = -1  # <= 0 means unlimited
DEFAULT_CLEANUP_COLUMNS = True
QUOTE_CHAR = '"'
LINE_BREAKS = ("\r", "\n")
MAX_UPLOAD_BYTES = 50_000_000  # 50MB
