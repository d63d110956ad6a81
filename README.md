# stndchain

An in-memory model of the business logic of a collateralised stablecoin
chain. It covers an asset registry, a constant-product market with
liquidity tokens, a price oracle fed by numbered provider sockets, and
collateralised debt vaults. State lives in ordinary Python objects. An
account can be any hashable value.

## Modules

- `stndchain.primitives`: the type aliases (`Balance`, `AssetId`,
  `SocketIndex`, ...), `CORE_ASSET_ID`, `U32_MAX` and `U128_MAX`. It also
  holds call origins (`Origin.signed(who)`, `Origin.root()`), the checks
  `ensure_signed` and `ensure_root`, and the errors `DispatchError` and
  `BadOrigin`.
- `stndchain.currency`: `MultiCurrency`, a multi-asset ledger with
  `free_balance`, `total_issuance`, `deposit`, `withdraw` and `transfer`.
  It raises `CurrencyError` (with `reason` set to `"BalanceTooLow"` or
  `"TotalIssuanceOverflow"`).
- `stndchain.constants`: the units `MILLICENTS`, `CENTS`, `DOLLARS`,
  `MILLISTD` and `STD`, and the storage deposit formula
  `deposit(items, bytes_)`. `time_units(millisecs_per_block)` returns a
  `TimeUnits` record. `OPPORTUNITY_TIME` (6 s blocks) and `STANDARD_TIME`
  (12 s blocks) are prebuilt records.
- `stndchain.asset_registry`: `AssetRegistry` gives out sequential asset
  ids by name through `get_or_create_asset`. `asset_id(name)` looks an id
  up. It raises `NoIdAvailable` once `max_asset_id` is reached.
- `stndchain.market_math`: the integer helpers `sqrt`, `minimum` and
  `absdiff`.
- `stndchain.weights`: `DbWeight` (the cost of reads and writes) and
  `ROCKS_DB_WEIGHT`. `WeightInfo` holds the benchmarked weight formulas of
  the staking calls. Results saturate at the largest 64-bit weight.
- `stndchain.market`: `Market`, a constant-product exchange with a 0.3%
  fee. It has `mint_liquidity`, `burn_liquidity`, `swap`, `set_reserves`
  and the lookups `reserves`, `reward` and `pair`. The quote function
  `get_amount_out` is also here. Rejections raise `MarketError`.
- `stndchain.oracle`: `Oracle` gathers price reports into sockets.
  `price` returns the median of the non-zero reports. `slash` frees a
  socket whose report falls outside 1.5 interquartile ranges. The helpers
  are `preprocess`, `get_median` and `determine_outlier`. Rejections raise
  `OracleError`.
- `stndchain.vault`: `Vault` locks collateral against MTR (asset id
  `MTR = 1`) through `generate`, `liquidate_vault` and `close`. A root
  origin sets the terms per collateral with `set_position`. The terms are
  checked by `CDP` and `is_cdp_valid`. Rejections raise `VaultError`.

`Market`, `Oracle` and `Vault` append each successful call's event, as a
tuple, to their `events` list.

## Example

```python
from stndchain.primitives import Origin
from stndchain.currency import MultiCurrency
from stndchain.asset_registry import AssetRegistry
from stndchain.market import Market, get_amount_out

currency = MultiCurrency()
currency.deposit(1, "alice", 10_000)
currency.deposit(2, "alice", 10_000)

market = Market(currency, AssetRegistry(), account_id="market")
market.mint_liquidity(Origin.signed("alice"), 1, 1_000, 2, 1_000)
lpt = market.pair(1, 2)
print(market.reserves(lpt))           # (1000, 1000)

print(get_amount_out(100, 1_000, 1_000))   # 90
market.swap(Origin.signed("alice"), 1, 100, 2)
print(market.reserves(lpt))           # (1100, 910)
```

Every failure raises an exception. A rejected call raises a subclass of
`DispatchError`. Values out of range raise `ValueError`. Arithmetic
limits raise `OverflowError` or `ZeroDivisionError`.

## What it does not do

This is a library of state and rules only. It has no command-line tool
and no consensus, networking or block production. It does not persist
state: everything is lost when the objects go away. Accounts are not
derived from keys.

## Running the tests

```
pip install -e ".[test]"
pytest
```