"""
Structured log helpers for the MoveNow Lambda.

Log records are written to stdout as single-line JSON documents so that
CloudWatch Logs Insights can query them by field.

Functions:
    log_event: Print a structured log record
    mask_token: Mask an access token for logging
"""

import json
from datetime import datetime, timezone
from typing import Any


def log_event(event_name: str, **fields: Any) -> None:
    """
    Print a structured log record.

    Args:
        event_name: Record type, e.g. "STEP_CHECK_METRICS"
        **fields: Additional record fields
    """
    log_data = {
        "event": event_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    log_data.update(fields)

    try:
        print(json.dumps(log_data, default=str))
    except (TypeError, ValueError) as e:
        print(f"Error logging {event_name}: {e}")


def mask_token(token: str) -> str:
    """Mask all but the first and last four characters of a token."""
    if not token:
        return ""
    return f"{token[:4]}***{token[-4:]}" if len(token) > 8 else "***"
