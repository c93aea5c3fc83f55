"""
Log Sanitization for Report-Supplied Values
Profile names and control ids come straight from scan reports, so they are
stripped of control characters before they reach a log line (CWE-117).
"""

import re
from typing import Any, Optional

LOG_INJECTION_PATTERNS = [
    r"[\r\n]",  # CRLF injection
    r"%0[ad]",  # URL-encoded CRLF
    r"\x00",  # Null bytes
    r"[\x01-\x08\x0b\x0c\x0e-\x1f\x7f]",  # Control characters
]


def sanitize_for_log(value: Optional[Any], max_length: int = 100) -> str:
    """
    Sanitize a report-supplied value for safe logging.

    Args:
        value: Value to sanitize
        max_length: Maximum length of output

    Returns:
        str: Sanitized string safe for logging
    """
    if value is None:
        return "null"

    str_value = str(value)
    if len(str_value) > max_length:
        str_value = str_value[:max_length] + "..."

    for pattern in LOG_INJECTION_PATTERNS:
        str_value = re.sub(pattern, "", str_value)

    if not str_value.strip():
        return "[sanitized]"

    return str_value.strip()
