from __future__ import annotations
import math
from typing import List, Optional

from core.dates import parse_date
from core.log import get_logger
from core.models import DateRange

log = get_logger(__name__)

def coerce_quantity(value) -> Optional[int]:
    """Return value as a non-negative int, or None when it is not one.

    Floats are truncated the way a form's integer parse would; strings must be
    plain numbers (no thousands separators, see normalize.parse_quantity).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            value = int(s)
        except ValueError:
            try:
                value = float(s)
            except ValueError:
                return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return None
    return value

def split_evenly(total: int, buckets: int) -> List[int]:
    # remainder goes to the earliest buckets
    base = total // buckets
    remainder = total - base * buckets
    return [base + 1 if i < remainder else base for i in range(buckets)]

def allocate_weeks(start, end, total) -> List[int]:
    rng = DateRange(parse_date(start), parse_date(end))
    qty = coerce_quantity(total)
    if qty is None:
        log.debug("quantity %r is not a non-negative integer; no weekly split", total)
        return []
    return split_evenly(qty, rng.week_count)
