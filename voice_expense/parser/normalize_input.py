# -*- coding: utf-8 -*-
"""Transcript normalization before interpretation.

Speech-to-text output is mostly clean; only fix patterns that are known to
break amount extraction:
- non-breaking and zero-width spaces
- a digit glued to a currency word: 50dirhams -> 50 dirhams
- runs of whitespace
"""

from __future__ import annotations

import re

_INVISIBLE = re.compile(r"[\u200b\u200c\u200d\ufeff]")
_SPACES = re.compile(r"[\s\u00a0]+")

# Digit followed directly by a letter run that is not an ordinal ("1st", "2nd").
_GLUED_WORD = re.compile(r"(\d)(?!(?:st|nd|rd|th)\b)([^\W\d_]{3,})")


def normalize_transcript(text: str | None) -> str:
    s = text or ""

    # 1) Drop zero-width characters
    s = _INVISIBLE.sub("", s)

    # 2) Split amount glued to a word: 50dirhams -> 50 dirhams
    s = _GLUED_WORD.sub(r"\1 \2", s)

    # 3) Collapse whitespace (incl. NBSP, newlines)
    s = _SPACES.sub(" ", s)

    return s.strip()
