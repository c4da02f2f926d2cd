"""
Free-text weight parsing.

Anglers type weights however they like ("12 lb 4 oz", "3.2", "8oz",
"1,250 g"). We only need a number we can rank on, in pounds.
"""

from __future__ import annotations

import re
from typing import Optional

_NUMBER_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)")
_OZ_RE = re.compile(r"oz", re.IGNORECASE)
_LB_RE = re.compile(r"lb", re.IGNORECASE)


def parse_weight_value(weight: Optional[str]) -> Optional[float]:
    """
    Parse the first number in `weight` as pounds.

    - thousands separators are stripped first
    - "oz" without "lb" means the number is ounces (divided by 16)
    - anything without a number (None, "", "n/a") gives None, never 0
    """
    if not weight:
        return None

    sanitized = weight.replace(",", "").strip()
    match = _NUMBER_RE.search(sanitized)
    if not match:
        return None

    value = float(match.group(1))
    if _OZ_RE.search(sanitized) and not _LB_RE.search(sanitized):
        return value / 16
    return value
