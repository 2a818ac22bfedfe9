from __future__ import annotations
from datetime import date
from typing import List, Optional

from allocation.daily import daily_breakdown
from allocation.rebalance import (
    apply_redistribution,
    rebalance,
    rebalance_locked,
    redistribution_preview,
    split_difference,
    split_sum,
    unlock_week,
)
from allocation.validate import validate_split
from allocation.weekly import allocate_weeks
from core.dates import parse_date
from core.errors import BackwardRedistributionRequired, InvalidRangeError
from core.log import get_logger
from core.models import AllocationCfg, DateRange, Job, RedistributionPreview
from normalize import parse_quantity
from wire import build_job_payload

log = get_logger(__name__)


class JobSplitForm:
    """Mutable split state for one job form, threaded through the pure allocation functions.

    Changing the start date, due date or quantity recomputes the weekly split
    from scratch and drops manual edits and locks.
    """

    def __init__(self, job_number: str = "", cfg: Optional[AllocationCfg] = None):
        self.job_number = job_number
        self.cfg = cfg or AllocationCfg()
        self.start_date: Optional[date] = None
        self.due_date: Optional[date] = None
        self.quantity_raw = ""
        self.weekly: List[int] = []
        self.locked: List[bool] = []
        self.range_error: Optional[InvalidRangeError] = None
        self.pending: Optional[RedistributionPreview] = None

    # --- inputs that reset the split ---

    @property
    def quantity(self) -> int:
        return parse_quantity(self.quantity_raw) or 0

    def set_start_date(self, value) -> None:
        self.start_date = parse_date(value) if value else None
        self._recompute()

    def set_due_date(self, value) -> None:
        self.due_date = parse_date(value) if value else None
        self._recompute()

    def set_quantity(self, value) -> None:
        self.quantity_raw = "" if value is None else str(value)
        self._recompute()

    def _recompute(self) -> None:
        self.range_error = None
        self.pending = None
        self.weekly, self.locked = [], []
        if self.start_date is None or self.due_date is None:
            return
        try:
            rng = DateRange(self.start_date, self.due_date)
        except InvalidRangeError as e:
            self.range_error = e
            return
        qty = parse_quantity(self.quantity_raw)
        if qty is None:
            return
        self.weekly = allocate_weeks(rng.start, rng.end, qty)
        self.locked = [False] * len(self.weekly)

    # --- week edits ---

    def edit_week(self, index: int, raw_value) -> List[int]:
        """Apply a typed week value; returns the new weekly split.

        With lock_edited_weeks on, a pending backward redistribution is kept in
        self.pending and the split is left untouched until confirmed.
        """
        new_value = parse_quantity(raw_value) or 0
        self.pending = None
        if not self.cfg.lock_edited_weeks:
            self.weekly = rebalance(self.weekly, index, new_value, self.quantity)
            return self.weekly

        try:
            self.weekly, self.locked = rebalance_locked(
                self.weekly, self.locked, index, new_value, self.quantity,
                allow_backward=self.cfg.allow_backward,
            )
        except BackwardRedistributionRequired as e:
            self.pending = e.preview
            log.info("job %s: week %d edit waits for backward redistribution (%+d)",
                     self.job_number, index + 1, e.preview.difference)
        return self.weekly

    def preview_pending(self, raw_value) -> Optional[RedistributionPreview]:
        # the confirmation dialog lets the value be retyped before confirming
        if self.pending is None:
            return None
        new_value = parse_quantity(raw_value) or 0
        self.pending = redistribution_preview(
            self.weekly, self.locked, self.pending.edited_index, new_value, self.quantity
        )
        return self.pending

    def confirm_pending(self) -> List[int]:
        if self.pending is None:
            return self.weekly
        # apply what the preview showed, nothing else
        p, self.pending = self.pending, None
        self.weekly, self.locked = apply_redistribution(self.weekly, self.locked, p)
        return self.weekly

    def cancel_pending(self) -> None:
        self.pending = None

    def unlock(self, index: int) -> None:
        self.locked = unlock_week(self.locked, index)
        if self.pending is not None:
            self.preview_pending(self.pending.proposed_value)

    # --- read-only queries ---

    @property
    def split_sum(self) -> int:
        return split_sum(self.weekly)

    @property
    def split_difference(self) -> int:
        return split_difference(self.weekly, self.quantity)

    def daily_split(self) -> List[List[int]]:
        if not self.weekly or self.start_date is None or self.due_date is None:
            return []
        return daily_breakdown(self.weekly, self.start_date, self.due_date)

    def to_payload(self, **attrs) -> dict:
        """Validate and build the submission record; raises if the split is off or the range is invalid."""
        if self.range_error is not None:
            raise self.range_error
        validate_split(self.weekly, self.quantity)
        job = Job(
            job_number=self.job_number,
            quantity=self.quantity,
            start_date=self.start_date,
            due_date=self.due_date,
            **attrs,
        )
        return build_job_payload(job, self.weekly, self.daily_split())
