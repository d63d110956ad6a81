import pytest

from stndchain.primitives import (
    BadOrigin,
    DispatchError,
    Origin,
    ensure_root,
    ensure_signed,
)


def test_ensure_signed_returns_account():
    assert ensure_signed(Origin.signed(7)) == 7


def test_ensure_signed_rejects_root():
    with pytest.raises(BadOrigin):
        ensure_signed(Origin.root())


def test_ensure_root_rejects_signed():
    with pytest.raises(BadOrigin):
        ensure_root(Origin.signed(11))


def test_ensure_root_accepts_root():
    origin = Origin.root()
    ensure_root(origin)
    assert origin.is_root is True
    assert origin.is_signed is False


def test_bad_origin_is_dispatch_error():
    with pytest.raises(DispatchError):
        ensure_root(Origin.signed(1))


def test_signed_origins_compare_by_account():
    assert Origin.signed(3) == Origin.signed(3)
    assert Origin.signed(3) != Origin.signed(4)


def test_signed_needs_account():
    with pytest.raises(ValueError):
        Origin.signed(None)