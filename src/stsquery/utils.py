from datetime import datetime, timezone
from typing import Optional
import os

RFC3339 = "%Y-%m-%dT%H:%M:%SZ"


def getenv_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if (val is not None and val.strip() != "") else default


def format_rfc3339(when: datetime) -> str:
    """Format ``when`` in UTC; naive datetimes are taken as UTC already."""
    if when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return when.strftime(RFC3339)
