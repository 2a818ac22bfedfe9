from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional

from core.errors import InvalidRangeError

DAYS_PER_WEEK = 7

@dataclass(frozen=True)
class DateRange:
  start: date
  end: date          # inclusive

  def __post_init__(self):
    if self.end < self.start:
      raise InvalidRangeError(self.start, self.end)

  @property
  def day_span(self) -> int:
    return (self.end - self.start).days + 1

  @property
  def week_count(self) -> int:
    # ceil(day_span / 7), never below one week
    return max(1, -(-self.day_span // DAYS_PER_WEEK))

  def week(self, index: int) -> "WeekWindow":
    week_start = self.start + timedelta(days=DAYS_PER_WEEK * index)
    week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
    active_start = self.start if index == 0 else week_start
    # only the last week can run past the range; a stale index past it has no active days
    active_end = min(self.end, week_end)
    return WeekWindow(index, week_start, week_end, active_start, active_end)

  def weeks(self) -> List["WeekWindow"]:
    return [self.week(i) for i in range(self.week_count)]

@dataclass(frozen=True)
class WeekWindow:
  index: int
  week_start: date
  week_end: date
  active_start: date
  active_end: date

  def active_dates(self) -> List[date]:
    out: List[date] = []
    d = self.active_start
    while d <= self.active_end:
      out.append(d)
      d += timedelta(days=1)
    return out

@dataclass(frozen=True)
class WeekChange:
  week_index: int
  old_value: int
  new_value: int

@dataclass
class RedistributionPreview:
  edited_index: int
  proposed_value: int
  difference: int                      # total - sum after the edit
  target_indices: List[int] = field(default_factory=list)
  locked_before: List[int] = field(default_factory=list)
  changes: List[WeekChange] = field(default_factory=list)

  @property
  def can_redistribute(self) -> bool:
    return bool(self.target_indices)

  @property
  def clamped(self) -> bool:
    # the zero floor swallowed part of the adjustment
    if not self.changes:
      return False
    return sum(c.new_value - c.old_value for c in self.changes) != self.difference

@dataclass
class Job:
  job_number: str
  quantity: int
  start_date: Optional[date]
  due_date: Optional[date]
  job_name: str = ""
  client: str = ""
  description: str = ""

@dataclass
class AllocationCfg:
  lock_edited_weeks: bool = True       # edited weeks are pinned for later edits
  allow_backward: bool = False         # absorb into earlier weeks without asking

@dataclass
class LoggingCfg:
  level: str = "INFO"
  file: Optional[str] = None
