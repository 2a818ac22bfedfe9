from __future__ import annotations
from typing import Sequence

from core.errors import SplitMismatchError, WireFormatError
from core.models import DAYS_PER_WEEK

def validate_split(allocation: Sequence[int], total: int) -> None:
    # an empty split means none was entered; nothing to check
    if not allocation:
        return
    split_total = sum(allocation)
    if split_total != total:
        raise SplitMismatchError(split_total, total)

def validate_daily_split(daily) -> None:
    if not isinstance(daily, (list, tuple)):
        raise WireFormatError(f"daily_split must be a list of weeks, got {type(daily).__name__}")
    for w, week in enumerate(daily):
        if not isinstance(week, (list, tuple)) or len(week) != DAYS_PER_WEEK:
            raise WireFormatError(f"daily_split week {w + 1} must have {DAYS_PER_WEEK} day values")
        for qty in week:
            if isinstance(qty, bool) or not isinstance(qty, int) or qty < 0:
                raise WireFormatError(f"daily_split week {w + 1} has invalid day value {qty!r}")
