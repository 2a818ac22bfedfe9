from __future__ import annotations
from typing import List, Sequence, Tuple

from core.errors import BackwardRedistributionRequired
from core.log import get_logger
from core.models import RedistributionPreview, WeekChange

log = get_logger(__name__)

def split_sum(allocation: Sequence[int]) -> int:
    return sum(allocation)

def split_difference(allocation: Sequence[int], total: int) -> int:
    """Signed deviation of the split from the job quantity (positive = over)."""
    return sum(allocation) - total

def _spread_adjustment(values: List[int], targets: Sequence[int], difference: int) -> None:
    """Add difference across targets in place, earliest targets take the remainder, floor at 0."""
    n = len(targets)
    base_adjustment = difference // n
    remainder = difference - base_adjustment * n
    step = 1 if remainder > 0 else -1
    for position, idx in enumerate(targets):
        adjustment = base_adjustment
        if position < abs(remainder):
            adjustment += step
        values[idx] = max(0, values[idx] + adjustment)

def _check_index(allocation: Sequence[int], index: int) -> None:
    if not 0 <= index < len(allocation):
        raise IndexError(f"week index {index} out of range for {len(allocation)} weeks")

def rebalance(allocation: Sequence[int], edited_index: int, new_value: int, total: int) -> List[int]:
    _check_index(allocation, edited_index)
    new_value = max(0, int(new_value))
    out = [int(v) for v in allocation]
    out[edited_index] = new_value

    others = [i for i in range(len(out)) if i != edited_index]
    if not others:
        # single week: nowhere to absorb the difference
        return out

    difference = total - (new_value + sum(out[i] for i in others))
    if difference:
        _spread_adjustment(out, others, difference)

    drift = split_difference(out, total)
    if drift:
        log.warning("week %d set to %d leaves split %+d off quantity %d",
                    edited_index + 1, new_value, drift, total)
    return out

# --- lock-aware editing ----------------------------------------------------

def _pad_locks(locked: Sequence[bool], size: int) -> List[bool]:
    flags = [bool(x) for x in locked[:size]]
    return flags + [False] * (size - len(flags))

def unlock_week(locked: Sequence[bool], index: int) -> List[bool]:
    flags = list(locked)
    if 0 <= index < len(flags):
        flags[index] = False
    return flags

def redistribution_preview(
    allocation: Sequence[int],
    locked: Sequence[bool],
    edited_index: int,
    proposed_value: int,
    total: int,
) -> RedistributionPreview:
    """What confirming a backward redistribution would do to the unlocked earlier weeks."""
    _check_index(allocation, edited_index)
    proposed_value = max(0, int(proposed_value))
    flags = _pad_locks(locked, len(allocation))
    values = [int(v) for v in allocation]
    values[edited_index] = proposed_value
    difference = total - sum(values)

    before = [i for i in range(edited_index) if not flags[i]]
    preview = RedistributionPreview(
        edited_index=edited_index,
        proposed_value=proposed_value,
        difference=difference,
        target_indices=before,
        locked_before=[i for i in range(edited_index) if flags[i]],
    )
    if before:
        adjusted = list(values)
        _spread_adjustment(adjusted, before, difference)
        preview.changes = [WeekChange(i, values[i], adjusted[i]) for i in before]
    return preview

def rebalance_locked(
    allocation: Sequence[int],
    locked: Sequence[bool],
    edited_index: int,
    new_value: int,
    total: int,
    allow_backward: bool = False,
) -> Tuple[List[int], List[bool]]:
    """Set one week, lock it, and let later unlocked weeks absorb the change.

    When no unlocked week follows the edited one the change has to flow
    backward; that needs confirmation, so BackwardRedistributionRequired is
    raised with a preview unless allow_backward is set. With no unlocked week
    on either side the edit stands and the total drifts.
    """
    _check_index(allocation, edited_index)
    new_value = max(0, int(new_value))
    out = [int(v) for v in allocation]
    flags = _pad_locks(locked, len(out))
    out[edited_index] = new_value
    flags[edited_index] = True

    difference = total - sum(out)
    if difference == 0:
        return out, flags

    targets = [i for i in range(edited_index + 1, len(out)) if not flags[i]]
    if not targets:
        targets = [i for i in range(edited_index) if not flags[i]]
        if targets and not allow_backward:
            raise BackwardRedistributionRequired(
                redistribution_preview(allocation, locked, edited_index, new_value, total)
            )

    if targets:
        _spread_adjustment(out, targets, difference)
    else:
        # no unlocked week anywhere: the edit stands
        log.warning("all other weeks are locked; week %d edit leaves split %+d off quantity %d",
                    edited_index + 1, split_difference(out, total), total)
    return out, flags

def apply_redistribution(
    allocation: Sequence[int],
    locked: Sequence[bool],
    preview: RedistributionPreview,
) -> Tuple[List[int], List[bool]]:
    """Apply a confirmed preview exactly as shown: the edited week plus its listed changes."""
    _check_index(allocation, preview.edited_index)
    out = [int(v) for v in allocation]
    flags = _pad_locks(locked, len(out))
    out[preview.edited_index] = preview.proposed_value
    flags[preview.edited_index] = True
    for change in preview.changes:
        out[change.week_index] = change.new_value
    return out, flags
