"""Money and time constants used by the runtimes."""

from __future__ import annotations

from dataclasses import dataclass

from stndchain.primitives import Balance

MILLICENTS: Balance = 1_000_000_000
CENTS: Balance = 1_000 * MILLICENTS
DOLLARS: Balance = 100 * CENTS
MILLISTD: Balance = 1_000_000_000_000_000
STD: Balance = 1_000 * MILLISTD


def deposit(items: int, bytes_: int) -> Balance:
    """Deposit required for storing ``items`` entries of ``bytes_`` bytes."""
    if items < 0 or bytes_ < 0:
        raise ValueError("items and bytes must not be negative")
    return items * 15 * CENTS + bytes_ * 6 * CENTS


@dataclass(frozen=True)
class TimeUnits:
    """Block timing and the time units expressed in blocks."""

    millisecs_per_block: int
    secs_per_block: int
    slot_duration: int
    primary_probability: tuple[int, int]
    epoch_duration_in_blocks: int
    epoch_duration_in_slots: int
    minutes: int
    hours: int
    days: int


def time_units(millisecs_per_block: int) -> TimeUnits:
    """Derive the time units for a given block time in milliseconds."""
    secs_per_block = millisecs_per_block // 1000
    if secs_per_block <= 0:
        raise ValueError("a block must last at least one second")
    slot_duration = millisecs_per_block
    minutes = 60 // secs_per_block
    hours = minutes * 60
    days = hours * 24
    epoch_blocks = hours
    slot_fill_rate = millisecs_per_block / slot_duration
    return TimeUnits(
        millisecs_per_block=millisecs_per_block,
        secs_per_block=secs_per_block,
        slot_duration=slot_duration,
        primary_probability=(1, 4),
        epoch_duration_in_blocks=epoch_blocks,
        epoch_duration_in_slots=int(epoch_blocks * slot_fill_rate),
        minutes=minutes,
        hours=hours,
        days=days,
    )


OPPORTUNITY_TIME = time_units(6000)
STANDARD_TIME = time_units(12000)