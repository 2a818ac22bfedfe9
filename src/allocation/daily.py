from __future__ import annotations
from typing import List, Sequence

from allocation.weekly import split_evenly
from core.dates import parse_date
from core.log import get_logger
from core.models import DAYS_PER_WEEK, DateRange, WeekWindow

log = get_logger(__name__)

def split_week(week_total: int, window: WeekWindow) -> List[int]:
    """Spread one week's bucket over its active days, Monday-first slots."""
    days = [0] * DAYS_PER_WEEK
    active = window.active_dates()
    if not active:
        if week_total:
            log.warning("week %d has no active days; %d units left undistributed",
                        window.index + 1, week_total)
        return days
    # chronological order decides who gets the remainder
    for d, qty in zip(active, split_evenly(week_total, len(active))):
        days[d.weekday()] = qty
    return days

def daily_breakdown(allocation: Sequence[int], start, end) -> List[List[int]]:
    rng = DateRange(parse_date(start), parse_date(end))
    return [split_week(int(week_total), rng.week(w)) for w, week_total in enumerate(allocation)]
