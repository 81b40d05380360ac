# File: src/weekslot/models/common.py

import re
from datetime import date, datetime
from typing import Optional

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def parse_iso_date(date_str: Optional[str]) -> Optional[date]:
    """Parse 'YYYY-MM-DD' (or a full ISO timestamp) into a date, None on failure."""
    if not date_str:
        return None
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        # Full timestamps, with 'Z' for Python < 3.11
        try:
            return datetime.fromisoformat(date_str.replace('Z', '+00:00')).date()
        except ValueError:
            return None
