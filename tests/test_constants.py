import pytest

from stndchain.constants import (
    CENTS,
    DOLLARS,
    OPPORTUNITY_TIME,
    STANDARD_TIME,
    deposit,
    time_units,
)


def test_deposit_pinned_values():
    assert deposit(1, 0) == 15_000_000_000_000
    assert deposit(0, 1) == 6_000_000_000_000
    assert deposit(20, 0) == 3 * DOLLARS


def test_deposit_per_item_and_byte():
    assert deposit(1, 0) == 15 * CENTS
    assert deposit(0, 1) == 6 * CENTS
    assert deposit(1, 64) == deposit(1, 0) + deposit(0, 64)


def test_deposit_rejects_negative():
    with pytest.raises(ValueError):
        deposit(-1, 0)


@pytest.mark.parametrize("units", [OPPORTUNITY_TIME, STANDARD_TIME])
def test_time_units_are_consistent(units):
    assert units.minutes * units.secs_per_block == 60
    assert units.hours == units.minutes * 60
    assert units.days == units.hours * 24
    assert units.epoch_duration_in_blocks == units.hours
    assert units.epoch_duration_in_slots == units.epoch_duration_in_blocks
    assert units.slot_duration == units.millisecs_per_block
    assert units.primary_probability == (1, 4)


def test_block_times():
    opportunity = time_units(6000)
    standard = time_units(12000)
    assert opportunity.millisecs_per_block == 6000
    assert standard.millisecs_per_block == 12000
    assert opportunity.secs_per_block == 6
    assert standard.secs_per_block == 12
    assert opportunity.minutes == 10
    assert standard.minutes == 5
    assert opportunity.hours == 600
    assert standard.days == 7200
    assert opportunity.minutes == OPPORTUNITY_TIME.minutes
    assert standard.minutes == STANDARD_TIME.minutes


def test_time_units_reject_subsecond_blocks():
    with pytest.raises(ValueError):
        time_units(500)