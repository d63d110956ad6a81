"""Weight functions for the staking-style calls, charged against a database cost model."""

from __future__ import annotations

from dataclasses import dataclass

Weight = int

U64_MAX = 2**64 - 1
U32_MAX = 2**32 - 1

WEIGHT_PER_NANOS: Weight = 1_000


def _saturate(value: int) -> Weight:
    return min(value, U64_MAX)


def _check_count(name: str, value: int) -> int:
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{name} must be within 0..{U32_MAX}, got {value}")
    return value


@dataclass(frozen=True)
class DbWeight:
    """Cost of a single database read and a single database write."""

    read: Weight
    write: Weight

    def __post_init__(self) -> None:
        if self.read < 0 or self.write < 0:
            raise ValueError("database weights must not be negative")

    def reads(self, r: int) -> Weight:
        """Weight of ``r`` reads, saturating at the largest weight."""
        if r < 0:
            raise ValueError("read count must not be negative")
        return _saturate(self.read * r)

    def writes(self, w: int) -> Weight:
        """Weight of ``w`` writes, saturating at the largest weight."""
        if w < 0:
            raise ValueError("write count must not be negative")
        return _saturate(self.write * w)


ROCKS_DB_WEIGHT = DbWeight(read=25_000 * WEIGHT_PER_NANOS, write=100_000 * WEIGHT_PER_NANOS)


class WeightInfo:
    """Benchmarked weights of the calls, with database costs from ``db_weight``."""

    def __init__(self, db_weight: DbWeight = ROCKS_DB_WEIGHT) -> None:
        self.db_weight = db_weight

    def _total(
        self,
        base: Weight,
        *terms: tuple[Weight, int],
        reads: int = 0,
        writes: int = 0,
    ) -> Weight:
        computed = base + sum(coefficient * count for coefficient, count in terms)
        computed += self.db_weight.reads(reads) + self.db_weight.writes(writes)
        return _saturate(computed)

    def bond(self) -> Weight:
        return self._total(76_281_000, reads=5, writes=4)

    def bond_extra(self) -> Weight:
        return self._total(62_062_000, reads=4, writes=2)

    def unbond(self) -> Weight:
        return self._total(57_195_000, reads=5, writes=3)

    def withdraw_unbonded_update(self, s: int) -> Weight:
        _check_count("s", s)
        return self._total(58_043_000, (52_000, s), reads=5, writes=3)

    def withdraw_unbonded_kill(self, s: int) -> Weight:
        _check_count("s", s)
        return self._total(89_920_000, (2_526_000, s), reads=7, writes=8 + s)

    def validate(self) -> Weight:
        return self._total(20_228_000, reads=2, writes=2)

    def kick(self, k: int) -> Weight:
        _check_count("k", k)
        return self._total(31_066_000, (17_754_000, k), reads=2 + k, writes=k)

    def nominate(self, n: int) -> Weight:
        _check_count("n", n)
        return self._total(33_494_000, (5_253_000, n), reads=4 + n, writes=2)

    def chill(self) -> Weight:
        return self._total(19_396_000, reads=2, writes=2)

    def set_payee(self) -> Weight:
        return self._total(13_449_000, reads=1, writes=1)

    def set_controller(self) -> Weight:
        return self._total(29_184_000, reads=3, writes=3)

    def set_validator_count(self) -> Weight:
        return self._total(2_266_000, writes=1)

    def force_no_eras(self) -> Weight:
        return self._total(2_462_000, writes=1)

    def force_new_era(self) -> Weight:
        return self._total(2_483_000, writes=1)

    def force_new_era_always(self) -> Weight:
        return self._total(2_495_000, writes=1)

    def set_invulnerables(self, v: int) -> Weight:
        _check_count("v", v)
        return self._total(2_712_000, (9_000, v), writes=1)

    def force_unstake(self, s: int) -> Weight:
        _check_count("s", s)
        return self._total(60_508_000, (2_525_000, s), reads=4, writes=8 + s)

    def cancel_deferred_slash(self, s: int) -> Weight:
        _check_count("s", s)
        return self._total(5_886_772_000, (34_849_000, s), reads=1, writes=1)

    def payout_stakers_dead_controller(self, n: int) -> Weight:
        _check_count("n", n)
        return self._total(127_627_000, (49_354_000, n), reads=11 + 3 * n, writes=2 + n)

    def payout_stakers_alive_staked(self, n: int) -> Weight:
        _check_count("n", n)
        return self._total(156_838_000, (62_653_000, n), reads=12 + 5 * n, writes=3 + 3 * n)

    def rebond(self, l: int) -> Weight:  # noqa: E741
        _check_count("l", l)
        return self._total(40_110_000, (78_000, l), reads=4, writes=3)

    def set_history_depth(self, e: int) -> Weight:
        _check_count("e", e)
        return self._total(0, (32_883_000, e), reads=2, writes=4 + 7 * e)

    def reap_stash(self, s: int) -> Weight:
        _check_count("s", s)
        return self._total(64_605_000, (2_506_000, s), reads=4, writes=8 + s)

    def new_era(self, v: int, n: int) -> Weight:
        _check_count("v", v)
        _check_count("n", n)
        return self._total(
            0,
            (548_212_000, v),
            (78_343_000, n),
            reads=7 + 4 * v + 3 * n,
            writes=8 + 3 * v,
        )

    def submit_solution_better(self, v: int, n: int, a: int, w: int) -> Weight:
        for name, value in (("v", v), ("n", n), ("a", a), ("w", w)):
            _check_count(name, value)
        return self._total(
            0,
            (937_000, v),
            (657_000, n),
            (70_669_000, a),
            (7_658_000, w),
            reads=6 + 4 * a + w,
            writes=2,
        )