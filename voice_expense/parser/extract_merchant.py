# -*- coding: utf-8 -*-
"""
Merchant and Note Extraction

Pattern extraction of the vendor ("... at Carrefour", "... from Amazon") and
of a free-form note ("note: team lunch", "... for the office party").
"""

import re
from typing import Iterator, Optional

MIN_MERCHANT_LENGTH = 3
MAX_MERCHANT_LENGTH = 100
MAX_NOTE_LENGTH = 500

# Words that end a merchant span: "at Costa for coffee", "from Noon yesterday".
_STOP_WORDS = r"for|on|in|with|by|using|today|yesterday|tonight|this|last"

# Ordered: "at" patterns take precedence over "from".
_MERCHANT_PATTERNS = [
    re.compile(
        rf"(?<![^\W_]){prep}\s+(?P<span>.+?)(?=\s+(?:{_STOP_WORDS})(?![^\W_])|\s*[,;!?]|\.(?:\s|$)|\s*$)",
        re.IGNORECASE,
    )
    for prep in ("at", "from")
]

_NOTE_PATTERNS = [
    re.compile(r"\bnote\s*:\s*(?P<span>.+?)\s*$", re.IGNORECASE),
    re.compile(r"(?<![^\W_])for\s+(?P<span>.+?)[\s.!?]*$", re.IGNORECASE),
]

# A span that starts with the amount itself ("for 50 dollars", "for $20").
_AMOUNT_START = re.compile(r"^[\d$€£¥₹﷼₩₺฿₨]")


def _overlapping_matches(pattern: re.Pattern, text: str) -> Iterator[re.Match]:
    """Every match, including ones starting inside a rejected span ("at 8pm at Zuma")."""
    pos = 0
    while True:
        match = pattern.search(text, pos)
        if match is None:
            return
        yield match
        pos = match.start() + 1


def extract_merchant(text: Optional[str]) -> Optional[str]:
    """
    Extract the merchant name following "at" or "from".

    Args:
        text: transcript, e.g. "I paid 99.99 dollars at Amazon"

    Returns:
        Trimmed merchant ("Amazon"), or None. Spans of two characters or
        fewer, longer than 100 characters, or starting with a digit are
        not merchants.
    """
    if not text:
        return None

    for pattern in _MERCHANT_PATTERNS:
        for match in _overlapping_matches(pattern, text):
            span = match.group("span").strip().strip("\"'")
            if span[:1].isdigit():
                continue
            if MIN_MERCHANT_LENGTH <= len(span) <= MAX_MERCHANT_LENGTH:
                return span
    return None


def extract_note(text: Optional[str]) -> Optional[str]:
    """Extract an explicit "note: ..." or a trailing "for ..." description."""
    if not text:
        return None

    for pattern in _NOTE_PATTERNS:
        for match in _overlapping_matches(pattern, text):
            span = match.group("span").strip()
            if not span or _AMOUNT_START.match(span):
                continue
            return span[:MAX_NOTE_LENGTH]
    return None
