from __future__ import annotations
from datetime import date, datetime
from dateutil import parser as dup

from core.errors import InvalidDateError

_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)

def parse_date(value) -> date:
  """Coerce a date, datetime or date string to a date; malformed input fails here, not later."""
  if isinstance(value, datetime):
    return value.date()
  if isinstance(value, date):
    return value
  if not isinstance(value, str) or not value.strip():
    raise InvalidDateError(value)
  s = value.strip()
  try:
    return datetime.strptime(s, "%Y-%m-%d").date()
  except ValueError:
    pass
  # parse against two different defaults; a partial date ("5", "March") borrows
  # the missing parts and so comes out differently
  try:
    a = dup.parse(s, default=_DEFAULT_A).date()
    b = dup.parse(s, default=_DEFAULT_B).date()
  except (ValueError, OverflowError) as e:
    raise InvalidDateError(value) from e
  if a != b:
    raise InvalidDateError(value)
  return a

def parse_date_or_none(value):
  if value is None or value == "":
    return None
  try:
    return parse_date(value)
  except InvalidDateError:
    return None
