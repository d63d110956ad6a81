import pytest

from stndchain.weights import ROCKS_DB_WEIGHT, U64_MAX, DbWeight, WeightInfo

FREE_DB = DbWeight(read=0, write=0)


def test_db_weight_reads_and_writes_scale_linearly():
    db = DbWeight(read=7, write=11)
    assert db.reads(0) == 0
    assert db.writes(0) == 0
    assert db.reads(4) == 4 * db.reads(1)
    assert db.writes(6) == 6 * db.writes(1)
    assert db.reads(1) == 7
    assert db.writes(1) == 11


def test_db_weight_saturates():
    db = DbWeight(read=U64_MAX, write=U64_MAX)
    assert db.reads(3) == U64_MAX
    assert db.writes(2) == U64_MAX


def test_db_weight_rejects_negative():
    with pytest.raises(ValueError):
        DbWeight(read=-1, write=0)
    with pytest.raises(ValueError):
        FREE_DB.reads(-1)
    with pytest.raises(ValueError):
        FREE_DB.writes(-2)


def test_rocks_db_default_read_cost():
    assert ROCKS_DB_WEIGHT.reads(1) == 25_000_000
    assert ROCKS_DB_WEIGHT.writes(1) == 4 * ROCKS_DB_WEIGHT.reads(1)


def test_base_weights_without_db_cost():
    info = WeightInfo(FREE_DB)
    assert info.bond() == 76_281_000
    assert info.set_validator_count() == 2_266_000
    assert info.cancel_deferred_slash(0) == 5_886_772_000
    assert info.new_era(0, 0) == 0
    assert info.set_history_depth(0) == 0


def test_per_item_slope_matches_benchmark():
    info = WeightInfo(FREE_DB)
    assert info.withdraw_unbonded_update(3) - info.withdraw_unbonded_update(2) == 52_000
    assert info.kick(5) - info.kick(4) == 17_754_000
    assert info.rebond(10) - info.rebond(9) == 78_000


def test_db_cost_adds_reads_and_writes():
    free = WeightInfo(FREE_DB)
    db = DbWeight(read=1_000, write=1_000_000)
    costed = WeightInfo(db)
    assert costed.bond() - free.bond() == db.reads(5) + db.writes(4)
    assert costed.set_payee() - free.set_payee() == db.reads(1) + db.writes(1)
    assert costed.set_validator_count() - free.set_validator_count() == db.writes(1)


def test_default_uses_rocks_db():
    assert WeightInfo().chill() == WeightInfo(ROCKS_DB_WEIGHT).chill()
    assert WeightInfo().chill() > WeightInfo(FREE_DB).chill()


@pytest.mark.parametrize(
    "method",
    [
        "withdraw_unbonded_update",
        "withdraw_unbonded_kill",
        "kick",
        "nominate",
        "set_invulnerables",
        "force_unstake",
        "cancel_deferred_slash",
        "payout_stakers_dead_controller",
        "payout_stakers_alive_staked",
        "rebond",
        "set_history_depth",
        "reap_stash",
    ],
)
def test_single_argument_weights_grow(method):
    info = WeightInfo()
    fn = getattr(info, method)
    assert fn(0) < fn(1) < fn(10)


def test_multi_argument_weights_grow_in_each_argument():
    info = WeightInfo()
    assert info.new_era(1, 0) > info.new_era(0, 0)
    assert info.new_era(0, 1) > info.new_era(0, 0)
    base = info.submit_solution_better(0, 0, 0, 0)
    assert info.submit_solution_better(1, 0, 0, 0) > base
    assert info.submit_solution_better(0, 1, 0, 0) > base
    assert info.submit_solution_better(0, 0, 1, 0) > base
    assert info.submit_solution_better(0, 0, 0, 1) > base


def test_weights_saturate_at_u64_max():
    info = WeightInfo(DbWeight(read=U64_MAX, write=U64_MAX))
    assert info.bond() == U64_MAX
    assert info.new_era(2**32 - 1, 2**32 - 1) == U64_MAX


def test_argument_out_of_range_rejected():
    info = WeightInfo()
    with pytest.raises(ValueError):
        info.kick(-1)
    with pytest.raises(ValueError):
        info.nominate(2**32)
    with pytest.raises(ValueError):
        info.submit_solution_better(0, 0, -1, 0)