from __future__ import annotations
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
  from core.models import RedistributionPreview


class SplitError(Exception):
  """Base class for quantity split failures."""


class InvalidRangeError(SplitError, ValueError):
  def __init__(self, start: date, end: date):
    super().__init__(f"Due date {end.isoformat()} is before start date {start.isoformat()}")
    self.start = start
    self.end = end


class InvalidDateError(SplitError, ValueError):
  def __init__(self, raw):
    super().__init__(f"Not a calendar date: {raw!r}")
    self.raw = raw


class SplitMismatchError(SplitError):
  """Weekly split total must equal the job quantity before submission."""

  def __init__(self, split_total: int, quantity: int):
    self.split_total = split_total
    self.quantity = quantity
    self.difference = split_total - quantity
    sign = "+" if self.difference > 0 else ""
    super().__init__(
      f"Weekly split total {split_total:,} does not match quantity {quantity:,} ({sign}{self.difference:,})"
    )


class BackwardRedistributionRequired(SplitError):
  """No unlocked week follows the edited one; earlier weeks would have to absorb the change."""

  def __init__(self, preview: "RedistributionPreview"):
    self.preview = preview
    super().__init__(
      f"Week {preview.edited_index + 1} is the last unlocked week; "
      f"{preview.difference:+,} must be redistributed to earlier weeks"
    )


class WireFormatError(SplitError, ValueError):
  pass
