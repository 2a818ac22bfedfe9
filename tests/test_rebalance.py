import random
from datetime import date, timedelta

import pytest

from allocation.rebalance import (
    apply_redistribution,
    rebalance,
    rebalance_locked,
    redistribution_preview,
    split_difference,
    split_sum,
    unlock_week,
)
from allocation.weekly import allocate_weeks
from core.errors import BackwardRedistributionRequired
from core.models import WeekChange


def test_raise_one_week_lowers_the_other():
    out = rebalance([6000, 6000], 0, 8000, 12000)
    assert out == [8000, 4000]
    assert split_sum(out) == 12000
    assert split_difference(out, 12000) == 0


def test_clamped_edit_drifts_and_is_reported():
    out = rebalance([1000, 500], 0, 2000, 1500)
    assert out == [2000, 0]
    assert split_sum(out) == 2000
    assert split_difference(out, 1500) == 500


def test_positive_remainder_goes_to_earliest_other_weeks():
    # difference +5 over three weeks: +2, +2, +1
    assert rebalance([100, 100, 100, 100], 0, 95, 400) == [95, 102, 102, 101]


def test_negative_difference_uses_floor_remainder():
    # difference -5 over two weeks: floor -3, remainder +1 on the first
    assert rebalance([100, 100, 100], 1, 105, 300) == [98, 105, 97]


def test_single_week_just_takes_the_value():
    out = rebalance([100], 0, 150, 100)
    assert out == [150]
    assert split_difference(out, 100) == 50


def test_negative_edit_clamped_to_zero():
    assert rebalance([50, 50], 0, -10, 100) == [0, 100]


def test_input_not_mutated():
    weekly = [6000, 6000]
    rebalance(weekly, 0, 8000, 12000)
    assert weekly == [6000, 6000]


@pytest.mark.parametrize("index", [-1, 2])
def test_bad_index_raises(index):
    with pytest.raises(IndexError):
        rebalance([1, 2], index, 5, 3)


def test_same_arguments_same_result():
    a = rebalance([1000, 500, 250], 1, 1200, 1750)
    b = rebalance([1000, 500, 250], 1, 1200, 1750)
    assert a == b


def test_reapplying_an_unclamped_edit_changes_nothing():
    once = rebalance([6000, 6000], 0, 8000, 12000)
    assert rebalance(once, 0, 8000, 12000) == once


def test_random_edits_keep_total_unless_clamped():
    rnd = random.Random(42)
    for _ in range(300):
        start = date(2024, 1, 1)
        end = start + timedelta(days=rnd.randint(7, 52 * 7 - 1))
        total = rnd.randint(0, 1_000_000)
        weekly = allocate_weeks(start, end, total)
        for _ in range(5):
            idx = rnd.randrange(len(weekly))
            weekly = rebalance(weekly, idx, rnd.randint(0, total + 100), total)
            assert min(weekly) >= 0
            others = [v for i, v in enumerate(weekly) if i != idx]
            # the zero floor can only push the sum up, and only by zeroing a week
            assert sum(weekly) >= total
            if sum(weekly) != total:
                assert 0 in others


# --- lock-aware edits ---

def test_locked_edit_flows_forward():
    out, locks = rebalance_locked([100, 100, 100, 100], [False] * 4, 1, 40, 400)
    assert out == [100, 40, 130, 130]
    assert locks == [False, True, False, False]


def test_locked_weeks_are_skipped():
    out, locks = rebalance_locked([100, 100, 100, 100], [False, False, True, False], 0, 130, 400)
    assert out == [130, 85, 100, 85]
    assert locks == [True, False, True, False]


def test_unchanged_total_only_locks():
    out, locks = rebalance_locked([100, 100], [False, False], 1, 100, 200)
    assert out == [100, 100]
    assert locks == [False, True]


def test_last_unlocked_week_needs_confirmation():
    with pytest.raises(BackwardRedistributionRequired) as exc:
        rebalance_locked([100, 100, 100, 100], [False] * 4, 3, 160, 400)
    preview = exc.value.preview
    assert preview.difference == -60
    assert preview.can_redistribute
    assert preview.changes == [WeekChange(0, 100, 80), WeekChange(1, 100, 80), WeekChange(2, 100, 80)]
    assert not preview.clamped


def test_backward_allowed():
    out, locks = rebalance_locked([100, 100, 100, 100], [False] * 4, 3, 160, 400, allow_backward=True)
    assert out == [80, 80, 80, 160]
    assert locks == [False, False, False, True]


def test_everything_locked_edit_stands_and_drifts():
    # no unlocked week on either side: nothing to confirm, the edit applies
    out, locks = rebalance_locked([100, 100], [True, False], 1, 150, 200)
    assert out == [100, 150]
    assert locks == [True, True]
    assert split_difference(out, 200) == 50


def test_locked_before_and_after_still_applies():
    out, locks = rebalance_locked([100, 100, 100], [True, False, True], 1, 40, 300)
    assert out == [100, 40, 100]
    assert locks == [True, True, True]


def test_apply_redistribution_matches_preview():
    preview = redistribution_preview([1000, 1000, 1000], [False, False, True], 1, 800, 3000)
    out, locks = apply_redistribution([1000, 1000, 1000], [False, False, True], preview)
    assert preview.changes == [WeekChange(0, 1000, 1200)]
    assert out == [1200, 800, 1000]
    assert locks == [False, True, True]


def test_short_lock_list_is_padded():
    out, locks = rebalance_locked([100, 100, 100], [True], 1, 50, 300)
    assert out == [100, 50, 150]
    assert locks == [True, True, False]


def test_preview_flags_clamping():
    preview = redistribution_preview([10, 100, 100], [False] * 3, 2, 200, 210)
    assert preview.difference == -100
    assert preview.changes == [WeekChange(0, 10, 0), WeekChange(1, 100, 50)]
    assert preview.clamped


def test_preview_does_not_touch_inputs():
    weekly, locks = [100, 100, 100], [False, True, False]
    redistribution_preview(weekly, locks, 2, 10, 300)
    assert weekly == [100, 100, 100]
    assert locks == [False, True, False]


def test_unlock_week():
    assert unlock_week([True, True], 0) == [False, True]
    assert unlock_week([True], 3) == [True]
