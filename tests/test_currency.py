import pytest

from stndchain.currency import CurrencyError, MultiCurrency
from stndchain.primitives import U128_MAX


@pytest.fixture
def ledger():
    currency = MultiCurrency()
    currency.deposit(0, 1, 100)
    return currency


def test_deposit_raises_balance_and_issuance(ledger):
    assert ledger.free_balance(0, 1) == 100
    assert ledger.total_issuance(0) == 100


def test_unknown_account_has_nothing(ledger):
    assert ledger.free_balance(0, 2) == 0
    assert ledger.total_issuance(5) == 0


def test_transfer_moves_units_and_keeps_issuance(ledger):
    ledger.transfer(0, 1, 2, 50)
    assert ledger.free_balance(0, 1) == 50
    assert ledger.free_balance(0, 2) == 50
    assert ledger.total_issuance(0) == 100


def test_transfer_above_balance_fails_without_change(ledger):
    with pytest.raises(CurrencyError) as info:
        ledger.transfer(0, 1, 2, 101)
    assert info.value.reason == "BalanceTooLow"
    assert ledger.free_balance(0, 1) == 100
    assert ledger.free_balance(0, 2) == 0


def test_transfer_to_self_changes_nothing(ledger):
    ledger.transfer(0, 1, 1, 40)
    assert ledger.free_balance(0, 1) == 100


def test_withdraw_reduces_issuance(ledger):
    ledger.withdraw(0, 1, 30)
    assert ledger.free_balance(0, 1) == 70
    assert ledger.total_issuance(0) == 70


def test_withdraw_too_much_fails(ledger):
    with pytest.raises(CurrencyError) as info:
        ledger.withdraw(0, 1, 101)
    assert info.value.reason == "BalanceTooLow"
    assert ledger.total_issuance(0) == 100


def test_issuance_overflow(ledger):
    with pytest.raises(CurrencyError) as info:
        ledger.deposit(0, 2, U128_MAX)
    assert info.value.reason == "TotalIssuanceOverflow"
    assert ledger.free_balance(0, 2) == 0


def test_negative_amount_rejected(ledger):
    with pytest.raises(ValueError):
        ledger.transfer(0, 1, 2, -1)


def test_currencies_are_separate(ledger):
    ledger.deposit(1, 1, 20)
    ledger.transfer(1, 1, 3, 20)
    assert ledger.free_balance(0, 1) == 100
    assert ledger.free_balance(1, 3) == 20
    assert ledger.free_balance(0, 3) == 0