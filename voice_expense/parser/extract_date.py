# -*- coding: utf-8 -*-
"""
Transaction Date Hints

Relative date phrases spoken with the expense:
- "yesterday" -> context date minus one day
- "this morning" / "this afternoon" / "this evening" -> 09:00 / 14:00 / 19:00
- "today" or nothing -> context date
"""

import re
from datetime import datetime, timedelta
from typing import Optional

_YESTERDAY = re.compile(r"\byesterday\b", re.IGNORECASE)
_PART_OF_DAY = re.compile(r"\bthis\s+(morning|afternoon|evening)\b", re.IGNORECASE)

_PART_OF_DAY_HOURS = {
    "morning": 9,
    "afternoon": 14,
    "evening": 19,
}


def extract_transaction_date(text: Optional[str], context_date: datetime) -> datetime:
    """
    Resolve the transaction date from relative phrases in text.

    Args:
        text: transcript
        context_date: reference "now"

    Returns:
        datetime of the transaction (context_date when no phrase matches)
    """
    if not text:
        return context_date

    if _YESTERDAY.search(text):
        return context_date - timedelta(days=1)

    match = _PART_OF_DAY.search(text)
    if match:
        hour = _PART_OF_DAY_HOURS[match.group(1).lower()]
        return context_date.replace(hour=hour, minute=0, second=0, microsecond=0)

    return context_date
